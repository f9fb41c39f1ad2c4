"""
Relocation run orchestration.

Walks the immediate children of a source directory, classifies each
one and relocates the Git repositories into the destination. Errors on
individual repositories are logged and recorded; only invalid source or
destination paths abort a run.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from mv_git.core.config import Config, RelocatorConfig
from mv_git.core.exceptions import DestinationError, RelocationIOError
from mv_git.relocation.detector import GitRepositoryDetector
from mv_git.relocation.models import (
    RelocationSummary,
    TransferOutcome,
    TransferStatus,
)
from mv_git.relocation.transfer import TreeTransfer
from mv_git.utils.validation import is_within, prepare_destination, validate_source_dir

logger = logging.getLogger(__name__)


class Relocator:
    """
    Moves or copies the Git repositories found directly inside a source
    directory into a destination directory.

    Example:
        relocator = Relocator()
        summary = relocator.run("~/projects", "~/archive")
    """

    def __init__(self, config: Optional[RelocatorConfig] = None):
        self.config = config or Config.get()
        self.detector = GitRepositoryDetector(self.config.transfer)
        self.transfer = TreeTransfer(self.config.transfer)

    def run(
        self, source: Union[str, Path], destination: Union[str, Path]
    ) -> RelocationSummary:
        """
        Relocate every Git repository under source into destination.

        Args:
            source: Directory whose immediate children are scanned.
            destination: Directory receiving the repositories; created
                when missing (unless dry-running).

        Returns:
            RelocationSummary with one outcome per child directory.

        Raises:
            SourceNotFoundError: If source does not exist.
            SourceNotADirectoryError: If source is not a directory.
            DestinationError: If destination is unusable.
            RelocationIOError: If source cannot be listed.
        """
        transfer_config = self.config.transfer
        source_dir = validate_source_dir(source)
        if Path(destination).expanduser().resolve() == source_dir:
            raise DestinationError(str(destination), "same as the source directory")
        dest_dir = prepare_destination(destination, create=not transfer_config.dry_run)

        summary = RelocationSummary(
            source=source_dir,
            destination=dest_dir,
            copy_mode=transfer_config.copy_mode,
            dry_run=transfer_config.dry_run,
        )

        mode = "copy" if transfer_config.copy_mode else "move"
        logger.info(f"Scanning {source_dir} ({mode} to {dest_dir})")

        for child in self.detector.scan(source_dir):
            summary.add(self._process(child, dest_dir))

        summary.finish()
        logger.info(
            f"Done: {len(summary.relocated)} relocated, "
            f"{len(summary.skipped)} skipped, {len(summary.failed)} failed"
        )
        return summary

    def _process(self, child: Path, dest_dir: Path) -> TransferOutcome:
        """Classify and, for repositories, transfer a single child."""
        target = dest_dir / child.name

        try:
            entry = self.detector.classify(child)
        except RelocationIOError as e:
            return self._failed(child, target, e)

        if not entry.is_git_repository:
            logger.debug(f"{child} is not a git repository, leaving in place")
            return TransferOutcome(
                name=child.name,
                source=child,
                destination=None,
                status=TransferStatus.SKIPPED,
            )

        if is_within(dest_dir, child):
            return self._failed(
                child,
                target,
                RelocationIOError(
                    f"Destination {dest_dir} lies inside repository {child}",
                    path=str(child),
                ),
            )

        git_info = {}
        if self.config.transfer.collect_git_info:
            git_info = self.detector.get_repository_info(entry.path)

        try:
            outcome = self.transfer.transfer(entry, target)
        except RelocationIOError as e:
            return self._failed(child, target, e)

        outcome.branch = git_info.get("branch")
        outcome.commit_hash = git_info.get("commit_hash")
        return outcome

    def _failed(
        self, child: Path, target: Path, error: RelocationIOError
    ) -> TransferOutcome:
        logger.error(f"Failed to relocate {child}: {error}")
        return TransferOutcome(
            name=child.name,
            source=child,
            destination=target,
            status=TransferStatus.FAILED,
            error=str(error),
        )


def relocate(
    source_dir: Union[str, Path],
    dest_dir: Union[str, Path],
    copy_mode: bool = False,
    config: Optional[RelocatorConfig] = None,
) -> RelocationSummary:
    """
    Convenience function to relocate repositories in one call.

    Args:
        source_dir: Directory to scan.
        dest_dir: Directory receiving the repositories.
        copy_mode: Copy instead of move.
        config: Optional configuration; defaults to a fresh one.

    Returns:
        RelocationSummary for the run.
    """
    if config is None:
        config = RelocatorConfig()
    run_config = replace(config, transfer=replace(config.transfer, copy_mode=copy_mode))
    return Relocator(run_config).run(source_dir, dest_dir)

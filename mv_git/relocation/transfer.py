"""
Repository tree transfer.

Copies a repository tree with shutil.copytree, filtering entries through
the repository's ignore rules, and removes the source afterwards when
moving. Moves without ignore rules try an atomic rename first.
"""

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

from mv_git.core.config import TransferConfig
from mv_git.core.exceptions import RelocationIOError
from mv_git.relocation.detector import GIT_ENTRY
from mv_git.relocation.ignore_rules import IgnoreRuleSet
from mv_git.relocation.models import DirectoryEntry, TransferOutcome, TransferStatus

logger = logging.getLogger(__name__)

METHOD_RENAME = "rename"
METHOD_COPY = "copy"
METHOD_COPY_REMOVE = "copy+remove"


class _TransferCounter:
    """Counts copied files and ignored entries during one copy."""

    def __init__(self):
        self.copied = 0
        self.ignored = 0


class TreeTransfer:
    """
    Moves or copies a single repository directory.

    Every failure surfaces as RelocationIOError; a failed copy never
    removes the source.
    """

    def __init__(self, config: Optional[TransferConfig] = None):
        self.config = config or TransferConfig()

    def transfer(self, entry: DirectoryEntry, destination: Path) -> TransferOutcome:
        """
        Relocate one repository to destination.

        Args:
            entry: Classified repository directory.
            destination: Full target path (``<dest_dir>/<name>``).

        Returns:
            TransferOutcome describing what was done.

        Raises:
            RelocationIOError: If copying, renaming or removal fails.
        """
        source = entry.path
        rules = entry.ignore_rules
        copy_mode = self.config.copy_mode

        if self.config.dry_run:
            copied, ignored = self.count_tree(source, rules)
            return TransferOutcome(
                name=entry.name,
                source=source,
                destination=destination,
                status=TransferStatus.PLANNED,
                method=self._planned_method(rules, destination),
                files_copied=copied,
                files_ignored=ignored,
            )

        if copy_mode:
            copied, ignored = self.copy_tree(source, destination, rules)
            logger.info(f"Copied {source} -> {destination} ({copied} files)")
            return TransferOutcome(
                name=entry.name,
                source=source,
                destination=destination,
                status=TransferStatus.COPIED,
                method=METHOD_COPY,
                files_copied=copied,
                files_ignored=ignored,
            )

        if self._can_rename(rules, destination):
            if self._try_rename(source, destination):
                copied, _ = self.count_tree(destination, None)
                logger.info(f"Moved {source} -> {destination} (rename)")
                return TransferOutcome(
                    name=entry.name,
                    source=source,
                    destination=destination,
                    status=TransferStatus.MOVED,
                    method=METHOD_RENAME,
                    files_copied=copied,
                )

        copied, ignored = self.copy_tree(source, destination, rules)
        self.remove_tree(source)
        logger.info(f"Moved {source} -> {destination} ({copied} files)")
        return TransferOutcome(
            name=entry.name,
            source=source,
            destination=destination,
            status=TransferStatus.MOVED,
            method=METHOD_COPY_REMOVE,
            files_copied=copied,
            files_ignored=ignored,
        )

    def copy_tree(
        self, source: Path, destination: Path, rules: Optional[IgnoreRuleSet] = None
    ) -> Tuple[int, int]:
        """
        Copy a directory tree, skipping ignored entries.

        Symlinks are recreated rather than followed. An existing
        destination is merged into.

        Returns:
            Tuple of (files_copied, entries_ignored).

        Raises:
            RelocationIOError: If any part of the copy fails.
        """
        source = Path(source)
        destination = Path(destination)
        counter = _TransferCounter()
        copy_function = shutil.copy2 if self.config.preserve_metadata else shutil.copy

        def counting_copy(src, dst, *args, **kwargs):
            counter.copied += 1
            return copy_function(src, dst, *args, **kwargs)

        try:
            shutil.copytree(
                source,
                destination,
                symlinks=True,
                ignore=self._make_ignore(source, rules, counter),
                copy_function=counting_copy,
                dirs_exist_ok=True,
            )
        except shutil.Error as e:
            failures = e.args[0] if e.args else []
            raise RelocationIOError(
                f"Failed to copy {len(failures)} entries from {source}: {_first_failure(failures)}",
                path=str(source),
            )
        except OSError as e:
            raise RelocationIOError(
                f"Failed to copy {source} to {destination}: {e}",
                path=str(source),
                cause=e,
            )

        return counter.copied, counter.ignored

    def count_tree(
        self, source: Path, rules: Optional[IgnoreRuleSet] = None
    ) -> Tuple[int, int]:
        """Count the files a copy would transfer, without copying."""
        source = Path(source)
        counter = _TransferCounter()
        ignore = self._make_ignore(source, rules, counter)

        for root, dirs, filenames in os.walk(source):
            ignored = ignore(root, dirs + filenames)
            dirs[:] = [
                d for d in dirs
                if d not in ignored and not os.path.islink(os.path.join(root, d))
            ]
            counter.copied += sum(
                1 for f in filenames
                if f not in ignored and not os.path.islink(os.path.join(root, f))
            )

        return counter.copied, counter.ignored

    def remove_tree(self, path: Path) -> None:
        """
        Remove a transferred source tree.

        Raises:
            RelocationIOError: If removal fails.
        """
        try:
            if sys.version_info >= (3, 12):
                shutil.rmtree(path, onexc=_make_writable_and_retry)
            else:
                shutil.rmtree(path, onerror=_make_writable_and_retry)
        except OSError as e:
            raise RelocationIOError(
                f"Copied but failed to remove source {path}: {e}",
                path=str(path),
                cause=e,
            )
        logger.debug(f"Removed source tree {path}")

    def _make_ignore(
        self,
        root: Path,
        rules: Optional[IgnoreRuleSet],
        counter: _TransferCounter,
    ) -> Callable[[str, List[str]], Set[str]]:
        """Build a copytree ignore callable bound to the repository root."""

        def ignore(directory: str, names: List[str]) -> Set[str]:
            if not rules:
                return set()
            directory = Path(directory)
            relative_dir = directory.relative_to(root)
            # Git never applies ignore rules to its own metadata.
            if relative_dir.parts and relative_dir.parts[0] == GIT_ENTRY:
                return set()
            ignored = set()
            for name in names:
                if name == GIT_ENTRY and not relative_dir.parts:
                    continue
                full_path = directory / name
                is_dir = full_path.is_dir() and not full_path.is_symlink()
                if rules.matches(relative_dir / name, is_dir=is_dir):
                    logger.debug(f"Ignoring {full_path}")
                    ignored.add(name)
            counter.ignored += len(ignored)
            return ignored

        return ignore

    def _can_rename(self, rules: Optional[IgnoreRuleSet], destination: Path) -> bool:
        return self.config.use_rename and not rules and not destination.exists()

    def _planned_method(self, rules: Optional[IgnoreRuleSet], destination: Path) -> str:
        if self.config.copy_mode:
            return METHOD_COPY
        if self._can_rename(rules, destination):
            return METHOD_RENAME
        return METHOD_COPY_REMOVE

    def _try_rename(self, source: Path, destination: Path) -> bool:
        """Attempt an atomic rename; False means fall back to copy+remove."""
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            os.rename(source, destination)
            return True
        except OSError as e:
            logger.warning(
                f"Rename of {source} failed ({e}), falling back to copy and remove"
            )
            return False


def _make_writable_and_retry(func, path, exc):
    """rmtree error handler for read-only files such as git objects."""
    error = exc[1] if isinstance(exc, tuple) else exc
    if not isinstance(error, PermissionError):
        raise error
    os.chmod(path, 0o700)
    func(path)


def _first_failure(failures) -> str:
    if not failures:
        return "unknown error"
    first = failures[0]
    if isinstance(first, tuple) and len(first) == 3:
        return f"{first[0]}: {first[2]}"
    return str(first)

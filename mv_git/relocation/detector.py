"""
Git repository detection.

A directory counts as a Git repository when a ``.git`` entry (directory,
or file for worktrees and submodules) exists directly inside it.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from mv_git.core.config import TransferConfig
from mv_git.core.exceptions import RelocationIOError
from mv_git.relocation.ignore_rules import IgnoreRuleSet
from mv_git.relocation.models import DirectoryEntry

logger = logging.getLogger(__name__)

GIT_ENTRY = ".git"


class GitRepositoryDetector:
    """
    Classifies the immediate children of a source directory.

    Also reads branch and commit metadata through the git executable
    when it is available.
    """

    def __init__(self, config: Optional[TransferConfig] = None):
        self.config = config or TransferConfig()
        self._git_available: Optional[bool] = None

    @staticmethod
    def is_git_repository(path: Path) -> bool:
        """Check if a directory has a .git entry directly inside it."""
        git_entry = Path(path) / GIT_ENTRY
        return git_entry.is_dir() or git_entry.is_file()

    def classify(self, path: Path) -> DirectoryEntry:
        """
        Classify a single directory.

        Args:
            path: Directory to classify.

        Returns:
            DirectoryEntry with ignore rules loaded for repositories.

        Raises:
            RelocationIOError: If the .gitignore cannot be read.
        """
        path = Path(path)
        if not self.is_git_repository(path):
            return DirectoryEntry(path=path, is_git_repository=False)

        rules = None
        if self.config.honor_gitignore:
            try:
                rules = IgnoreRuleSet.for_repository(
                    path, self.config.extra_ignore_patterns
                )
            except OSError as e:
                raise RelocationIOError(
                    f"Cannot read .gitignore in {path}: {e}", path=str(path), cause=e
                )
        elif self.config.extra_ignore_patterns:
            rules = IgnoreRuleSet(self.config.extra_ignore_patterns)

        return DirectoryEntry(path=path, is_git_repository=True, ignore_rules=rules)

    def scan(self, source: Path) -> List[Path]:
        """
        List the immediate child directories of source.

        Files and symlinked directories are left out. Results are sorted
        by name so runs are deterministic.

        Raises:
            RelocationIOError: If the source cannot be listed.
        """
        source = Path(source)
        try:
            children = sorted(source.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise RelocationIOError(
                f"Cannot list source directory {source}: {e}",
                path=str(source),
                cause=e,
            )

        directories = []
        for child in children:
            if child.is_symlink():
                logger.debug(f"Skipping symlink: {child}")
                continue
            if not child.is_dir():
                logger.debug(f"Skipping non-directory: {child}")
                continue
            directories.append(child)

        logger.debug(f"Found {len(directories)} directories in {source}")
        return directories

    def _check_git_available(self) -> bool:
        """Check if git is available on the system."""
        if self._git_available is None:
            try:
                result = subprocess.run(
                    ["git", "--version"],
                    capture_output=True,
                    text=True,
                    timeout=self.config.git_timeout,
                )
                self._git_available = result.returncode == 0
            except (subprocess.TimeoutExpired, OSError):
                self._git_available = False
        return self._git_available

    def _run_git(self, args: List[str], repo_path: Path) -> Optional[str]:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                cwd=repo_path,
                timeout=self.config.git_timeout,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_repository_info(self, repo_path: Path) -> dict:
        """
        Extract Git metadata from a repository.

        Args:
            repo_path: Path to the Git repository.

        Returns:
            Dictionary with ``branch`` and ``commit_hash`` (None when
            unavailable).
        """
        info = {"branch": None, "commit_hash": None}

        if not self.is_git_repository(repo_path):
            return info

        if not self._check_git_available():
            logger.debug("git executable not available, skipping metadata")
            return info

        info["commit_hash"] = self._run_git(["rev-parse", "HEAD"], repo_path)
        info["branch"] = self._run_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_path)
        return info

"""
Gitignore rule handling.

Only the repository-root .gitignore is interpreted. Matching follows
Git's wildmatch rules as implemented by pathspec: comments, blank
lines, negation, directory-only patterns, anchoring and ``**``.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


class IgnoreRuleSet:
    """
    Ordered set of gitignore-style patterns for one repository.

    Later patterns take precedence over earlier ones, so a negated
    pattern re-includes paths excluded above it.
    """

    def __init__(self, lines: Iterable[str] = (), source: Optional[Path] = None):
        self.lines: List[str] = [line.rstrip("\r\n") for line in lines]
        self.source = source
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.lines)

    @classmethod
    def from_file(
        cls, path: Path, extra_patterns: Optional[Iterable[str]] = None
    ) -> "IgnoreRuleSet":
        """
        Parse a .gitignore file.

        Args:
            path: Path to the .gitignore file.
            extra_patterns: Patterns appended after the file's own.

        Returns:
            IgnoreRuleSet built from the file contents.
        """
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        lines = text.splitlines()
        if extra_patterns:
            lines.extend(extra_patterns)
        rules = cls(lines, source=Path(path))
        logger.debug(f"Loaded {len(rules)} ignore patterns from {path}")
        return rules

    @classmethod
    def for_repository(
        cls, repo_path: Path, extra_patterns: Optional[Iterable[str]] = None
    ) -> Optional["IgnoreRuleSet"]:
        """
        Load the rules for a repository root.

        Returns None when the repository has no .gitignore and no
        extra patterns are configured.
        """
        gitignore = Path(repo_path) / GITIGNORE_FILENAME
        if gitignore.is_file():
            return cls.from_file(gitignore, extra_patterns)
        if extra_patterns:
            return cls(extra_patterns)
        return None

    @property
    def patterns(self) -> List[str]:
        """Effective patterns, without blank lines and comments."""
        return [
            line for line in self.lines
            if line.strip() and not line.startswith("#")
        ]

    def matches(self, relative_path: Union[str, Path], is_dir: bool = False) -> bool:
        """
        Check whether a path relative to the repository root is ignored.

        Args:
            relative_path: Path relative to the repository root.
            is_dir: Whether the path is a directory; directory-only
                patterns (trailing ``/``) only apply when set.

        Returns:
            True if the path is excluded.
        """
        rel = Path(relative_path).as_posix()
        if is_dir:
            rel = rel.rstrip("/") + "/"
        return self._spec.match_file(rel)

    def __len__(self) -> int:
        return len(self.patterns)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"IgnoreRuleSet(patterns={self.patterns!r}, source={self.source!r})"

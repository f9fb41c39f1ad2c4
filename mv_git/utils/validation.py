"""
Input validation utilities.

Provides validation for the source and destination paths given on
the command line.
"""

from pathlib import Path
from typing import Union

from mv_git.core.exceptions import (
    DestinationError,
    SourceNotADirectoryError,
    SourceNotFoundError,
)

PathLike = Union[str, Path]


def validate_source_dir(path: PathLike) -> Path:
    """
    Validate the directory to scan.

    Args:
        path: Source path given by the user.

    Returns:
        Resolved source path.

    Raises:
        SourceNotFoundError: If the path does not exist.
        SourceNotADirectoryError: If the path is not a directory.
    """
    if not str(path):
        raise SourceNotFoundError("")

    source = Path(path).expanduser().resolve()

    if not source.exists():
        raise SourceNotFoundError(str(path))

    if not source.is_dir():
        raise SourceNotADirectoryError(str(path))

    return source


def prepare_destination(path: PathLike, create: bool = True) -> Path:
    """
    Resolve the destination directory, creating it when missing.

    Args:
        path: Destination path given by the user.
        create: Create the directory (with parents) if absent.

    Returns:
        Resolved destination path.

    Raises:
        DestinationError: If the path exists as a non-directory or
            cannot be created.
    """
    if not str(path):
        raise DestinationError("", "path cannot be empty")

    destination = Path(path).expanduser().resolve()

    if destination.exists():
        if not destination.is_dir():
            raise DestinationError(str(path), "exists and is not a directory")
        return destination

    if create:
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationError(str(path), f"cannot create directory: {e}")

    return destination


def is_within(path: Path, parent: Path) -> bool:
    """Check whether path equals parent or lies below it."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False

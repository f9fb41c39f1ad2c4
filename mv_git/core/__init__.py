"""
Core module containing configuration and the exception hierarchy.
"""

from mv_git.core.config import Config, RelocatorConfig, TransferConfig
from mv_git.core.exceptions import (
    RelocationError,
    SourceNotFoundError,
    SourceNotADirectoryError,
    DestinationError,
    RelocationIOError,
    ConfigurationError,
)

__all__ = [
    "Config",
    "RelocatorConfig",
    "TransferConfig",
    "RelocationError",
    "SourceNotFoundError",
    "SourceNotADirectoryError",
    "DestinationError",
    "RelocationIOError",
    "ConfigurationError",
]

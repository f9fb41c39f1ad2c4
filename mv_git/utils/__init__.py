"""
Utility functions and helpers.
"""

from mv_git.utils.logging_config import setup_logging, get_logger
from mv_git.utils.validation import validate_source_dir, prepare_destination

__all__ = [
    "setup_logging",
    "get_logger",
    "validate_source_dir",
    "prepare_destination",
]

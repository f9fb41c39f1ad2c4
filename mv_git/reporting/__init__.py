"""
Summary formatting for relocation runs.
"""

from mv_git.reporting.formatter import SummaryFormatter, TextFormatter, JSONFormatter

__all__ = [
    "SummaryFormatter",
    "TextFormatter",
    "JSONFormatter",
]

"""
Summary formatters for different output formats.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict

from mv_git import __version__
from mv_git.relocation.models import RelocationSummary, TransferStatus


class SummaryFormatter(ABC):
    """Abstract base class for summary formatters."""

    @abstractmethod
    def format(self, summary: RelocationSummary) -> str:
        """Format a summary to string."""
        pass


class JSONFormatter(SummaryFormatter):
    """Formats summaries as JSON for scripting."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, summary: RelocationSummary) -> str:
        data: Dict[str, Any] = {
            "tool": "mv-git",
            "version": __version__,
            "succeeded": summary.succeeded,
            **summary.to_dict(),
        }
        return json.dumps(data, indent=self.indent, default=self._json_serializer)

    def _json_serializer(self, obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        return str(obj)


class TextFormatter(SummaryFormatter):
    """Formats summaries as a short human-readable listing."""

    STATUS_LABELS = {
        TransferStatus.MOVED: "moved",
        TransferStatus.COPIED: "copied",
        TransferStatus.PLANNED: "would relocate",
        TransferStatus.SKIPPED: "not a git repo",
        TransferStatus.FAILED: "FAILED",
    }

    def __init__(self, show_skipped: bool = True, width: int = 60):
        self.show_skipped = show_skipped
        self.width = width

    def format(self, summary: RelocationSummary) -> str:
        lines = []
        mode = "copy" if summary.copy_mode else "move"
        title = "DRY RUN" if summary.dry_run else "RELOCATION SUMMARY"

        lines.append("=" * self.width)
        lines.append(f"{title} ({mode})")
        lines.append("=" * self.width)
        lines.append(f"Source:      {summary.source}")
        lines.append(f"Destination: {summary.destination}")
        lines.append("-" * self.width)

        for outcome in summary.outcomes:
            if outcome.status == TransferStatus.SKIPPED and not self.show_skipped:
                continue

            label = self.STATUS_LABELS[outcome.status]
            line = f"  {outcome.name}: {label}"

            if outcome.relocated:
                line += f" ({outcome.files_copied} files"
                if outcome.files_ignored:
                    line += f", {outcome.files_ignored} ignored"
                line += ")"
                if outcome.branch:
                    line += f" [{outcome.branch}"
                    if outcome.commit_hash:
                        line += f" @ {outcome.commit_hash[:12]}"
                    line += "]"
            elif outcome.error:
                line += f" - {outcome.error}"

            lines.append(line)

        lines.append("-" * self.width)
        lines.append(
            f"Relocated: {len(summary.relocated)}  "
            f"Skipped: {len(summary.skipped)}  "
            f"Failed: {len(summary.failed)}"
        )
        lines.append("=" * self.width)

        return "\n".join(lines)


def get_formatter(format_name: str) -> SummaryFormatter:
    """Return the formatter for a CLI format name."""
    if format_name == "json":
        return JSONFormatter()
    return TextFormatter()

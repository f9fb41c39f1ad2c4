"""
Data structures describing scanned directories and transfer results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from mv_git.relocation.ignore_rules import IgnoreRuleSet


class TransferStatus(Enum):
    """Outcome of processing one source entry."""

    MOVED = "moved"
    COPIED = "copied"
    PLANNED = "planned"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DirectoryEntry:
    """An immediate child directory of the source and its classification."""

    path: Path
    is_git_repository: bool
    ignore_rules: Optional[IgnoreRuleSet] = None

    @property
    def name(self) -> str:
        return self.path.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "path": str(self.path),
            "is_git_repository": self.is_git_repository,
            "ignore_patterns": self.ignore_rules.patterns if self.ignore_rules else [],
        }


@dataclass
class TransferOutcome:
    """Result of relocating (or skipping) a single entry."""

    name: str
    source: Path
    destination: Optional[Path]
    status: TransferStatus
    method: Optional[str] = None
    files_copied: int = 0
    files_ignored: int = 0
    error: Optional[str] = None
    branch: Optional[str] = None
    commit_hash: Optional[str] = None

    @property
    def relocated(self) -> bool:
        return self.status in (
            TransferStatus.MOVED, TransferStatus.COPIED, TransferStatus.PLANNED
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "source": str(self.source),
            "destination": str(self.destination) if self.destination else None,
            "status": self.status.value,
            "method": self.method,
            "files_copied": self.files_copied,
            "files_ignored": self.files_ignored,
            "error": self.error,
            "branch": self.branch,
            "commit_hash": self.commit_hash,
        }


@dataclass
class RelocationSummary:
    """
    Aggregate result of one relocation run.

    Holds one outcome per source entry in processing order.
    """

    source: Path
    destination: Path
    copy_mode: bool
    dry_run: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    outcomes: List[TransferOutcome] = field(default_factory=list)

    def add(self, outcome: TransferOutcome) -> None:
        self.outcomes.append(outcome)

    def finish(self) -> None:
        self.finished_at = datetime.now()

    def by_status(self, status: TransferStatus) -> List[TransferOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def relocated(self) -> List[TransferOutcome]:
        return [o for o in self.outcomes if o.relocated]

    @property
    def skipped(self) -> List[TransferOutcome]:
        return self.by_status(TransferStatus.SKIPPED)

    @property
    def failed(self) -> List[TransferOutcome]:
        return self.by_status(TransferStatus.FAILED)

    @property
    def succeeded(self) -> bool:
        return not self.failed

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": str(self.source),
            "destination": str(self.destination),
            "copy_mode": self.copy_mode,
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_seconds": self.duration_seconds,
            "counts": {
                "relocated": len(self.relocated),
                "skipped": len(self.skipped),
                "failed": len(self.failed),
            },
            "outcomes": [o.to_dict() for o in self.outcomes],
        }

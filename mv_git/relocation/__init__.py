"""
Repository detection, gitignore handling and tree transfer.
"""

from mv_git.relocation.ignore_rules import IgnoreRuleSet
from mv_git.relocation.models import (
    DirectoryEntry,
    RelocationSummary,
    TransferOutcome,
    TransferStatus,
)
from mv_git.relocation.detector import GitRepositoryDetector
from mv_git.relocation.transfer import TreeTransfer
from mv_git.relocation.relocator import Relocator, relocate

__all__ = [
    "IgnoreRuleSet",
    "DirectoryEntry",
    "RelocationSummary",
    "TransferOutcome",
    "TransferStatus",
    "GitRepositoryDetector",
    "TreeTransfer",
    "Relocator",
    "relocate",
]

"""Data models for gwtr."""

from .repository import RepositoryHandle, discover_repository
from .worktree import (
    Cleanliness,
    FailureKind,
    PruneCandidate,
    PullOutcome,
    PullResult,
    StatusEntry,
    WorktreeRecord,
)

__all__ = [
    "RepositoryHandle",
    "discover_repository",
    "Cleanliness",
    "FailureKind",
    "PruneCandidate",
    "PullOutcome",
    "PullResult",
    "StatusEntry",
    "WorktreeRecord",
]

"""Worktree data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    branch: Optional[str]  # None = detached HEAD
    is_bare: bool = False
    is_main: bool = False
    head: Optional[str] = None
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch is None and not self.is_bare

    def __str__(self) -> str:
        if self.is_bare:
            label = "bare"
        else:
            label = self.branch or "detached"
        main_marker = " (main)" if self.is_main else ""
        return f"{self.path}{main_marker} [{label}]"


class Cleanliness(Enum):
    """Working-directory state of a worktree."""
    CLEAN = "clean"
    DIRTY = "dirty"
    UNKNOWN = "unknown"
    ERROR = "error"


@dataclass(frozen=True)
class StatusEntry:
    """A worktree together with its working-directory state."""

    record: WorktreeRecord
    cleanliness: Cleanliness
    changed_files: int = 0  # Only meaningful for DIRTY
    error: Optional[str] = None  # git's stderr for ERROR


@dataclass(frozen=True)
class PruneCandidate:
    """A linked worktree considered during a prune run."""

    record: WorktreeRecord
    short_name: str
    is_merged: bool


class FailureKind(Enum):
    """Classification of git's error text that drives retries and skips."""
    BRANCH_EXISTS = "branch-exists"
    HAS_UNCOMMITTED_CHANGES = "has-uncommitted-changes"
    REMOTE_MISSING = "remote-missing"
    OTHER = "other"


class PullOutcome(Enum):
    """Result of pulling one worktree."""
    UP_TO_DATE = "up-to-date"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PullResult:
    """Outcome of a single pull within a pull run."""

    record: WorktreeRecord
    label: str
    outcome: PullOutcome
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome in (PullOutcome.UP_TO_DATE, PullOutcome.UPDATED)

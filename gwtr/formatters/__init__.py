"""Formatting utilities for gwtr.

- worktree: worktree path, branch and note formatting
- status: cleanliness, pull result and prune list formatting
"""

from .worktree import (
    format_branch_label,
    format_worktree_path,
    format_worktree_notes,
    format_worktree_line,
)
from .status import (
    format_cleanliness,
    format_pull_result,
    format_prune_items,
)

__all__ = [
    "format_branch_label",
    "format_worktree_path",
    "format_worktree_notes",
    "format_worktree_line",
    "format_cleanliness",
    "format_pull_result",
    "format_prune_items",
]

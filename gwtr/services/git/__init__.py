"""Git-related services for gwtr."""

from .runner import GitRunner, GitResult
from .merge_detector import MergeDetector
from .failures import classify_failure, is_up_to_date
from .porcelain import parse_worktree_list, parse_merged_branches, count_changed_files
from . import paths

__all__ = [
    "GitRunner",
    "GitResult",
    "MergeDetector",
    "classify_failure",
    "is_up_to_date",
    "parse_worktree_list",
    "parse_merged_branches",
    "count_changed_files",
    "paths",
]

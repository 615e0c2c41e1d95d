"""Parsers for git's porcelain output formats."""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Set

from gwtr.constants import (
    BRANCH_REF_PREFIX,
    MERGED_BRANCH_MARKERS,
    PORCELAIN_BARE,
    PORCELAIN_BRANCH,
    PORCELAIN_DETACHED,
    PORCELAIN_HEAD,
    PORCELAIN_LOCKED,
    PORCELAIN_PRUNABLE,
    PORCELAIN_WORKTREE,
)
from gwtr.exceptions import WorktreeListingError
from gwtr.models.worktree import WorktreeRecord
from gwtr.services.git.paths import normalize_path, same_path
from gwtr.logging_config import get_logger

logger = get_logger(__name__)


def _build_record(fields: Dict[str, Any]) -> WorktreeRecord:
    return WorktreeRecord(
        path=fields["path"],
        branch=fields.get("branch"),
        is_bare=fields.get("bare", False),
        head=fields.get("head"),
        is_locked=fields.get("locked", False),
        is_prunable=fields.get("prunable", False),
    )


def parse_worktree_list(output: str, main_path: Optional[str] = None) -> List[WorktreeRecord]:
    """Parse `git worktree list --porcelain` into records.

    Format, one block per worktree (blank line between blocks):
        worktree /path/to/worktree
        HEAD <sha>
        branch refs/heads/<name>    (or "detached", or "bare")
        locked [reason]             (optional)
        prunable [reason]           (optional)

    A block without a branch line is a detached HEAD. is_main is set on the
    record whose path equals main_path, or on the first record when main_path
    is None (git lists the primary worktree first).

    Raises:
        WorktreeListingError: records exist but none is the main worktree, or
            two records share a path
    """
    blocks: List[Dict[str, Any]] = []
    current: Optional[Dict[str, Any]] = None

    for line in output.splitlines():
        line = line.rstrip("\r")
        if not line:
            continue

        key, _, value = line.partition(" ")
        if key == PORCELAIN_WORKTREE:
            current = {"path": normalize_path(value)}
            blocks.append(current)
            continue

        if current is None:
            logger.debug(f"Ignoring porcelain line outside a worktree block: {line!r}")
            continue

        if key == PORCELAIN_HEAD:
            current["head"] = value
        elif key == PORCELAIN_BRANCH:
            # Only the fixed prefix is removed; "feature/x" stays intact
            if value.startswith(BRANCH_REF_PREFIX):
                current["branch"] = value[len(BRANCH_REF_PREFIX):]
            else:
                current["branch"] = value
        elif key == PORCELAIN_BARE:
            current["bare"] = True
        elif key == PORCELAIN_DETACHED:
            current["branch"] = None
        elif key == PORCELAIN_LOCKED:
            current["locked"] = True
        elif key == PORCELAIN_PRUNABLE:
            current["prunable"] = True
        else:
            logger.debug(f"Ignoring unknown porcelain key {key!r}")

    records = [_build_record(block) for block in blocks]
    if not records:
        return records

    seen = set()
    for record in records:
        if record.path in seen:
            raise WorktreeListingError(f"duplicate worktree path {record.path}")
        seen.add(record.path)

    if main_path is None:
        main_index = 0
    else:
        main_index = next(
            (i for i, record in enumerate(records) if same_path(record.path, main_path)),
            None,
        )
        if main_index is None:
            raise WorktreeListingError(f"main worktree {main_path} is not listed")

    records[main_index] = replace(records[main_index], is_main=True)
    logger.debug(f"Parsed {len(records)} worktrees")
    return records


def count_changed_files(output: str) -> int:
    """Number of entries in `git status --porcelain` output (one per changed or untracked file)."""
    return sum(1 for line in output.splitlines() if line.strip())


def parse_merged_branches(output: str) -> Set[str]:
    """Branch names from `git branch --merged` output.

    Strips the "* " marker of the current branch and the "+ " marker of
    branches checked out in another worktree.
    """
    branches = set()
    for line in output.splitlines():
        name = line.strip()
        if not name:
            continue
        if name[:2] in MERGED_BRANCH_MARKERS:
            name = name[2:].strip()
        # "(HEAD detached at abc123)" is not a branch
        if name.startswith("("):
            continue
        branches.add(name)
    return branches

"""Worktree line formatting utilities."""

from rich.markup import escape

from gwtr.constants import CLI_COLORS, MAIN_MARKER
from gwtr.models.worktree import WorktreeRecord


def format_branch_label(record: WorktreeRecord) -> str:
    """
    Format the bracketed branch part of a worktree line.

    Args:
        record: Worktree record

    Returns:
        "[bare]", "[detached]" or "[<branch>]" with markup
    """
    if record.is_bare:
        return escape("[bare]")
    if record.branch is None:
        return escape("[detached]")
    color = CLI_COLORS["branch"]
    return f"[{color}]{escape('[' + record.branch + ']')}[/{color}]"


def format_worktree_path(record: WorktreeRecord) -> str:
    """Path colored by role, with the main marker on the primary worktree."""
    if record.is_main:
        color = CLI_COLORS["main"]
        return f"[{color}]{escape(record.path)} {MAIN_MARKER}[/{color}]"
    color = CLI_COLORS["linked"]
    return f"[{color}]{escape(record.path)}[/{color}]"


def format_worktree_notes(record: WorktreeRecord) -> str:
    notes = []
    if record.is_locked:
        notes.append("locked")
    if record.is_prunable:
        notes.append("prunable")
    if not notes:
        return ""
    return f" [dim]({', '.join(notes)})[/dim]"


def format_worktree_line(record: WorktreeRecord) -> str:
    """
    Format one worktree for `list`.

    Example:
        "  /src/app_feature [feature] (locked)"
    """
    return f"  {format_worktree_path(record)} {format_branch_label(record)}{format_worktree_notes(record)}"

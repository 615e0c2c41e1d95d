"""Status, pull and prune formatting utilities."""

from typing import List

from rich.markup import escape

from gwtr.constants import CLI_COLORS, SYMBOL_BULLET, SYMBOL_FAILURE, SYMBOL_SKIPPED, SYMBOL_SUCCESS
from gwtr.formatters.worktree import format_branch_label
from gwtr.models.worktree import Cleanliness, PruneCandidate, PullOutcome, PullResult, StatusEntry


def format_cleanliness(entry: StatusEntry) -> str:
    """
    Format the working-directory state of a worktree.

    Args:
        entry: Status entry

    Returns:
        "clean", "N uncommitted changes", "unknown" or "error: <text>" with markup
    """
    if entry.cleanliness == Cleanliness.CLEAN:
        return f"[{CLI_COLORS['clean']}]clean[/{CLI_COLORS['clean']}]"
    if entry.cleanliness == Cleanliness.DIRTY:
        noun = "change" if entry.changed_files == 1 else "changes"
        return f"[{CLI_COLORS['dirty']}]{entry.changed_files} uncommitted {noun}[/{CLI_COLORS['dirty']}]"
    if entry.cleanliness == Cleanliness.ERROR:
        detail = f": {escape(entry.error)}" if entry.error else ""
        return f"[{CLI_COLORS['error']}]error{detail}[/{CLI_COLORS['error']}]"
    return f"[{CLI_COLORS['unknown']}]unknown[/{CLI_COLORS['unknown']}]"


def format_pull_result(result: PullResult) -> str:
    """
    Format the outcome of one pull.

    Example:
        "  ✓ feature: Already up to date"
    """
    label = escape(result.label)
    if result.outcome == PullOutcome.UP_TO_DATE:
        return f"  [green]{SYMBOL_SUCCESS}[/green] {label}: Already up to date"
    if result.outcome == PullOutcome.UPDATED:
        return f"  [green]{SYMBOL_SUCCESS}[/green] {label}: Updated"
    if result.outcome == PullOutcome.SKIPPED:
        reason = escape(result.message or "skipped")
        return f"  [{CLI_COLORS['skipped']}]{SYMBOL_SKIPPED} {label}: skipped ({reason})[/{CLI_COLORS['skipped']}]"
    message = escape(result.message or "pull failed")
    return f"  [{CLI_COLORS['error']}]{SYMBOL_FAILURE} {label}: {message}[/{CLI_COLORS['error']}]"


def format_prune_items(candidates: List[PruneCandidate]) -> str:
    """
    Format prune candidates as a bulleted list, one per line.

    Example:
        "  • feature-a [feature-a]\\n  • bugfix [bugfix]"
    """
    lines = []
    for candidate in candidates:
        lines.append(
            f"  {SYMBOL_BULLET} {escape(candidate.short_name)} {format_branch_label(candidate.record)}"
        )
    return "\n".join(lines)

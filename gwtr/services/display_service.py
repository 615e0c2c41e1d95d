"""Display service for worktree information"""
import shlex
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from gwtr.formatters import (
    format_cleanliness,
    format_prune_items,
    format_pull_result,
    format_worktree_line,
    format_worktree_notes,
    format_worktree_path,
    format_branch_label,
)
from gwtr.models.worktree import PruneCandidate, PullResult, StatusEntry, WorktreeRecord
from gwtr.logging_config import get_logger

# soft_wrap keeps long paths on one line when output is piped
console = Console(soft_wrap=True, highlight=False)
logger = get_logger(__name__)


class DisplayService:
    """Renders command results to the terminal."""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def print(self, message: str = "", markup: bool = True) -> None:
        self.console.print(message, markup=markup)

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def display_worktrees(self, records: List[WorktreeRecord]) -> None:
        if not records:
            self.console.print("No worktrees found")
            return
        self.console.print("[bold]Worktrees:[/bold]")
        for record in records:
            self.console.print(format_worktree_line(record))

    def display_status(self, entries: List[StatusEntry]) -> None:
        if not entries:
            self.console.print("No worktrees found")
            return
        self.console.print("[bold]Worktrees:[/bold]")
        for entry in entries:
            record = entry.record
            self.console.print(
                f"  {format_worktree_path(record)} {format_branch_label(record)}"
                f"{format_worktree_notes(record)} - {format_cleanliness(entry)}"
            )

    def display_cd(self, path: str) -> None:
        # Plain stdout so `eval "$(gwtr switch x)"` works
        self.console.print(f"cd {shlex.quote(path)}", markup=False)

    def display_pull_result(self, result: PullResult) -> None:
        self.console.print(format_pull_result(result))

    def display_pull_summary(self, results: List[PullResult]) -> None:
        succeeded = sum(1 for r in results if r.succeeded)
        self.console.print(f"\nPulled {succeeded} of {len(results)} worktree(s)")

    def display_prune_candidates(self, candidates: List[PruneCandidate], dry_run: bool) -> None:
        if dry_run:
            self.console.print(f"[yellow]Would prune {len(candidates)} worktree(s):[/yellow]")
        else:
            self.console.print("\nThe following worktrees will be pruned:")
        self.console.print(format_prune_items(candidates))

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question on stdin; only "y" (any case) means yes."""
        response = self.console.input(escape(prompt))
        return response.lower() == "y"

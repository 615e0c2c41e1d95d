"""Command-line argument parsing for gwtr."""

import argparse
import sys

from gwtr.__version__ import __version__


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as `Error: ...` with exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"worker count must be positive, got {number}")
    return number


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="gwtr",
        description="A simple Git worktree manager",
        epilog="Worktrees are created next to the repository as <repo>_<name>. "
        "Use `eval \"$(gwtr switch <name>)\"` to change into one.",
    )
    parser.add_argument("--version", action="version", version=f"gwtr {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--main-branch",
        metavar="BRANCH",
        help="Trunk branch for merge checks and pulls (default: $GWTR_MAIN_BRANCH or main)",
    )
    parser.add_argument(
        "--remote",
        help="Remote to pull from (default: $GWTR_REMOTE or origin)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    add = subparsers.add_parser("add", help="Add a new worktree")
    add.add_argument("name", help="Name of the worktree")

    subparsers.add_parser("list", help="List all worktrees")

    remove = subparsers.add_parser("remove", help="Remove a worktree")
    remove.add_argument("name", help="Name of the worktree to remove")

    switch = subparsers.add_parser("switch", help="Print the command to switch to a worktree")
    switch.add_argument("name", help="Name of the worktree to switch to")

    subparsers.add_parser("status", help="Show status of all worktrees")

    pull = subparsers.add_parser("pull", help="Pull changes in worktrees")
    pull.add_argument("name", nargs="?", help="Specific worktree name to pull (optional)")
    pull.add_argument("-a", "--all", action="store_true", help="Pull all worktrees")
    pull.add_argument(
        "--workers",
        type=_positive_int,
        metavar="N",
        help="Pull up to N worktrees in parallel with --all (default: one at a time)",
    )

    prune = subparsers.add_parser("prune", help="Prune merged worktrees")
    prune.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be pruned without actually removing",
    )
    prune.add_argument("-f", "--force", action="store_true", help="Skip confirmation prompt")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)

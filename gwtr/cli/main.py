"""Command-line entry point for gwtr"""

import os
import sys

from rich.console import Console
from rich.markup import escape

from gwtr.cli.args import build_parser
from gwtr.config import Config
from gwtr.core import WorktreeManager
from gwtr.logging_config import setup_logging
from gwtr.models.repository import discover_repository
from gwtr.utils.threading import get_threading_info

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def run_command(manager: WorktreeManager, args) -> None:
    """Dispatch one parsed subcommand to the manager."""
    if args.command == "add":
        manager.create_worktree(args.name)
    elif args.command == "list":
        manager.list_worktrees()
    elif args.command == "remove":
        manager.remove_worktree(args.name)
    elif args.command == "switch":
        manager.switch_to_worktree(args.name)
    elif args.command == "status":
        manager.show_status()
    elif args.command == "pull":
        if args.all:
            manager.pull_all()
        elif args.name:
            manager.pull_worktree(args.name)
        else:
            manager.pull_current()
    elif args.command == "prune":
        manager.prune_merged_worktrees(dry_run=args.dry_run, force=args.force)
    else:
        raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)
    if not parsed_args.command:
        parser.print_help()
        return 1

    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config.from_env(
            main_branch=parsed_args.main_branch,
            remote=parsed_args.remote,
            workers=getattr(parsed_args, "workers", None),
            dry_run=getattr(parsed_args, "dry_run", None),
            force=getattr(parsed_args, "force", None),
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Threading Information:[/yellow]")
            for key, value in get_threading_info().items():
                console.print(f"  {key}: {value}")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        repo = discover_repository(os.getcwd())
        manager = WorktreeManager(repo, config)
        run_command(manager, parsed_args)
        return 0
    except KeyboardInterrupt:
        err_console.print("\n[red]Error: Operation cancelled by user[/red]")
        return 1
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())

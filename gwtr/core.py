"""Core functionality for gwtr"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple, Union

from rich.markup import escape

from gwtr.config import Config
from gwtr.constants import MAIN_WORKTREE_ALIAS, SYMBOL_FAILURE, SYMBOL_SUCCESS
from gwtr.exceptions import (
    GitOperationError,
    GwtrError,
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
    WorktreeListingError,
    WorktreeNotFoundError,
)
from gwtr.models.repository import RepositoryHandle
from gwtr.models.worktree import (
    FailureKind,
    PruneCandidate,
    PullOutcome,
    PullResult,
    StatusEntry,
    WorktreeRecord,
)
from gwtr.services.display_service import DisplayService
from gwtr.services.git import paths
from gwtr.services.git.failures import classify_failure, is_up_to_date
from gwtr.services.git.merge_detector import MergeDetector
from gwtr.services.git.porcelain import parse_worktree_list
from gwtr.services.git.runner import GitResult, GitRunner
from gwtr.services.status_service import StatusService
from gwtr.utils.threading import get_optimal_worker_count
from gwtr.logging_config import get_logger

logger = get_logger(__name__)

# Answers a yes/no prompt; injected so prune can run without a terminal
ConfirmFn = Callable[[str], bool]


class WorktreeManager:
    """Creates, removes, pulls and prunes the worktrees of one repository."""

    def __init__(
        self,
        repo: RepositoryHandle,
        config: Union[Config, dict, None] = None,
        confirm: Optional[ConfirmFn] = None,
        display: Optional[DisplayService] = None,
        runner: Optional[GitRunner] = None,
    ):
        """Initialize WorktreeManager.

        Args:
            repo: Repository whose worktrees are managed
            config: Config object or dict; defaults apply when None
            confirm: Prompt callback for prune; defaults to reading stdin
            display: Output renderer
            runner: Git runner; defaults to one rooted at the repository
        """
        self.repo = repo
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.display = display or DisplayService()
        self.confirm = confirm or self.display.confirm
        self.runner = runner or GitRunner(repo.workdir)
        self.status_service = StatusService(self.runner)

    # Naming

    def resolve_path(self, name: str) -> str:
        return paths.resolve(self.repo, name)

    def _existing_path(self, name: str) -> str:
        path = self.resolve_path(name)
        if not os.path.exists(path):
            raise WorktreeNotFoundError(name, path)
        return path

    def _label(self, record: WorktreeRecord) -> str:
        if record.is_main:
            return MAIN_WORKTREE_ALIAS
        return paths.short_name(self.repo, record.path)

    # Listing

    def get_worktrees(self) -> List[WorktreeRecord]:
        """Parse the current worktree listing; never cached.

        Raises:
            GitOperationError: git could not list worktrees
            WorktreeListingError: the listing does not include this repository
        """
        result = self.runner.worktree_list()
        result.raise_for_status("list worktrees")
        return parse_worktree_list(result.stdout, main_path=self.repo.workdir)

    def _main_record(self, records: List[WorktreeRecord]) -> WorktreeRecord:
        for record in records:
            if record.is_main:
                return record
        raise WorktreeListingError("no main worktree")

    def _find_record(self, path: str, records: List[WorktreeRecord]) -> Optional[WorktreeRecord]:
        for record in records:
            if paths.same_path(record.path, path):
                return record
        return None

    def list_worktrees(self) -> List[WorktreeRecord]:
        records = self.get_worktrees()
        self.display.display_worktrees(records)
        return records

    def show_status(self) -> List[StatusEntry]:
        entries = self.status_service.aggregate(self.get_worktrees())
        self.display.display_status(entries)
        return entries

    # Create / remove / switch

    def create_worktree(self, name: str) -> str:
        """Create worktree name on a new branch, or on the existing branch of that name.

        Returns:
            Path of the new worktree

        Raises:
            InvalidWorktreeNameError: name is empty or is the reserved "main"
            WorktreeAlreadyExistsError: the target directory already exists
            GitOperationError: git refused to create the worktree
        """
        if name == MAIN_WORKTREE_ALIAS:
            # switch and pull treat "main" as the primary worktree
            raise InvalidWorktreeNameError(f"'{name}' is reserved for the primary worktree")

        path = self.resolve_path(name)
        if os.path.exists(path):
            raise WorktreeAlreadyExistsError(name, path)

        result = self.runner.worktree_add(path, name, create_branch=True)
        if not result.ok:
            if classify_failure(result.output) != FailureKind.BRANCH_EXISTS:
                raise GitOperationError("create worktree", name, result.output)

            logger.info(f"Branch {name} already exists, checking it out instead")
            self.display.info(f"Branch '{name}' already exists, using it for the worktree")
            self.runner.worktree_add(path, name, create_branch=False).raise_for_status(
                "create worktree", name
            )

        logger.info(f"Created worktree {name} at {path}")
        self.display.success(f"Created worktree '{name}' at {path}")
        return path

    def _remove_path(self, path: str, name: str) -> None:
        """Remove the worktree at path, retrying once with --force for dirty trees."""
        result = self.runner.worktree_remove(path)
        if result.ok:
            return

        if classify_failure(result.output) != FailureKind.HAS_UNCOMMITTED_CHANGES:
            raise GitOperationError("remove worktree", name, result.output)

        logger.info(f"Worktree {name} is dirty, retrying with --force")
        self.display.warning("Worktree contains uncommitted changes, removing with --force")
        self.runner.worktree_remove(path, force=True).raise_for_status("remove worktree", name)

    def remove_worktree(self, name: str) -> str:
        """Remove worktree name.

        Raises:
            WorktreeNotFoundError: no directory for name
            GitOperationError: git refused, including for directories that are
                not linked worktrees
        """
        path = self._existing_path(name)
        self._remove_path(path, name)
        logger.info(f"Removed worktree {name} at {path}")
        self.display.success(f"Removed worktree '{name}' at {path}")
        return path

    def get_switch_path(self, name: str) -> str:
        if name == MAIN_WORKTREE_ALIAS:
            return self.repo.workdir
        return self._existing_path(name)

    def switch_to_worktree(self, name: str) -> str:
        """Print the cd command for worktree name; the calling shell has to run it."""
        path = self.get_switch_path(name)
        self.display.display_cd(path)
        return path

    # Pull

    def _pull_record(self, record: WorktreeRecord, label: str, fetched: bool = False) -> PullResult:
        """Pull the trunk into one worktree.

        With fetched set the remote was already fetched, so only the
        remote-tracking branch is merged; concurrent fetches would race on it.
        """
        if record.is_bare:
            return PullResult(record, label, PullOutcome.SKIPPED, "bare repository")

        try:
            if fetched:
                result = self.runner.merge(record.path, f"{self.config.remote}/{self.config.main_branch}")
            else:
                result = self.runner.pull(record.path, self.config.remote, self.config.main_branch)
        except GwtrError as e:
            return PullResult(record, label, PullOutcome.FAILED, str(e))
        return self._pull_outcome(record, label, result)

    def _pull_outcome(self, record: WorktreeRecord, label: str, result: GitResult) -> PullResult:
        if result.ok:
            text = f"{result.stdout}\n{result.stderr}"
            outcome = PullOutcome.UP_TO_DATE if is_up_to_date(text) else PullOutcome.UPDATED
            return PullResult(record, label, outcome)

        if classify_failure(result.output) == FailureKind.REMOTE_MISSING:
            logger.debug(f"No remote {self.config.remote} for {label}: {result.output}")
            return PullResult(
                record, label, PullOutcome.SKIPPED, f"no remote '{self.config.remote}' configured"
            )
        return PullResult(record, label, PullOutcome.FAILED, result.output)

    def _pull_single(self, record: WorktreeRecord, label: str) -> PullResult:
        self.display.info(f"Pulling worktree '{label}'...")
        result = self._pull_record(record, label)
        if not result.succeeded:
            raise GitOperationError("pull worktree", label, result.message)
        self.display.display_pull_result(result)
        return result

    def pull_current(self) -> PullResult:
        """Pull the trunk into the primary worktree."""
        record = self._main_record(self.get_worktrees())
        return self._pull_single(record, MAIN_WORKTREE_ALIAS)

    def pull_worktree(self, name: str) -> PullResult:
        """Pull the trunk into worktree name; "main" means the primary worktree.

        Raises:
            WorktreeNotFoundError: no directory for name
            GitOperationError: the pull failed, no remote is configured,
                or the directory is not a worktree
        """
        if name == MAIN_WORKTREE_ALIAS:
            return self.pull_current()

        path = self._existing_path(name)
        record = self._find_record(path, self.get_worktrees())
        if record is None:
            # Not a linked worktree; git -C would reach an enclosing repository
            raise GitOperationError("pull worktree", name, f"{path} is not a worktree")
        return self._pull_single(record, name)

    def pull_all(self) -> List[PullResult]:
        """Pull every worktree in listing order; failures are reported per item."""
        records = self.get_worktrees()
        self.display.info("Pulling all worktrees...")
        labelled = [(record, self._label(record)) for record in records]

        if self.config.parallel and len(labelled) > 1:
            results = self._pull_parallel(labelled)
            for result in results:
                self.display.display_pull_result(result)
        else:
            results = []
            for record, label in labelled:
                result = self._pull_record(record, label)
                self.display.display_pull_result(result)
                results.append(result)

        self.display.display_pull_summary(results)
        return results

    def _pull_parallel(self, labelled: List[Tuple[WorktreeRecord, str]]) -> List[PullResult]:
        # Worktrees share one remote-tracking ref, so fetch it once up front
        try:
            fetch = self.runner.fetch(self.config.remote, self.config.main_branch)
        except GwtrError as e:
            return [PullResult(record, label, PullOutcome.FAILED, str(e)) for record, label in labelled]

        if not fetch.ok:
            logger.debug(f"Fetching {self.config.remote} failed: {fetch.output}")
            return [
                PullResult(record, label, PullOutcome.SKIPPED, "bare repository")
                if record.is_bare else self._pull_outcome(record, label, fetch)
                for record, label in labelled
            ]

        max_workers = get_optimal_worker_count(self.config.workers, len(labelled))
        logger.debug(f"Merging with {max_workers} workers")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._pull_record, record, label, True) for record, label in labelled
            ]
            # Collected in submission order so output follows the listing
            return [future.result() for future in futures]

    # Prune

    def find_prune_candidates(self) -> List[PruneCandidate]:
        """Linked worktrees whose branch is merged into the trunk, in listing order."""
        detector = MergeDetector(self.runner, self.config.main_branch)
        candidates = []
        for record, merged in detector.classify(self.get_worktrees()):
            if merged:
                candidates.append(
                    PruneCandidate(record, paths.short_name(self.repo, record.path), merged)
                )
        return candidates

    def _confirm(self, prompt: str) -> bool:
        try:
            return self.confirm(prompt)
        except EOFError:
            return False

    def prune_merged_worktrees(self, dry_run: Optional[bool] = None, force: Optional[bool] = None) -> int:
        """Remove worktrees whose branches are merged into the trunk.

        Candidates are collected and confirmed before anything is removed; a
        failed removal is reported and the run continues.

        Returns:
            Number of worktrees removed
        """
        dry_run = self.config.dry_run if dry_run is None else dry_run
        force = self.config.force if force is None else force

        candidates = self.find_prune_candidates()
        if not candidates:
            self.display.print("No worktrees to prune")
            return 0

        if dry_run:
            self.display.display_prune_candidates(candidates, dry_run=True)
            return 0

        self.display.display_prune_candidates(candidates, dry_run=False)
        if not force and not self._confirm("\nProceed with pruning? [y/N] "):
            self.display.warning("Prune cancelled")
            return 0

        pruned = 0
        for candidate in candidates:
            try:
                self._remove_path(candidate.record.path, candidate.short_name)
            except GwtrError as e:
                logger.warning(f"Could not prune {candidate.short_name}: {e}")
                self.display.print(f"  [red]{SYMBOL_FAILURE} {escape(candidate.short_name)}: {escape(str(e))}[/red]")
                continue
            pruned += 1
            self.display.print(f"  [green]{SYMBOL_SUCCESS}[/green] Removed worktree '{escape(candidate.short_name)}'")

        self.display.success(f"\nPruned {pruned} worktree(s)")
        return pruned

"""Merge detection for prune decisions."""

from typing import Iterable, List, Optional, Set, Tuple

from gwtr.models.worktree import WorktreeRecord
from gwtr.services.git.porcelain import parse_merged_branches
from gwtr.services.git.runner import GitRunner
from gwtr.logging_config import get_logger

logger = get_logger(__name__)


class MergeDetector:
    """Decides which worktree branches are fully merged into the trunk.

    `git branch --merged <trunk>` runs at most once per instance; one instance
    serves one prune run.
    """

    def __init__(self, runner: GitRunner, main_branch: str):
        """Initialize the merge detector.

        Args:
            runner: Git runner bound to the repository
            main_branch: Trunk branch merges are checked against
        """
        self.runner = runner
        self.main_branch = main_branch
        self._merged: Optional[Set[str]] = None

    def merged_branches(self) -> Set[str]:
        """Branches merged into the trunk.

        Raises:
            GitOperationError: git could not list merged branches
        """
        if self._merged is None:
            result = self.runner.merged_branches(self.main_branch)
            result.raise_for_status("list branches merged into", self.main_branch)
            self._merged = parse_merged_branches(result.stdout)
            logger.debug(f"{len(self._merged)} branches merged into {self.main_branch}")
        return self._merged

    def is_branch_merged(self, branch_name: str) -> bool:
        # A branch cannot be merged into itself
        if branch_name == self.main_branch:
            return False
        return branch_name in self.merged_branches()

    def classify(self, records: Iterable[WorktreeRecord]) -> List[Tuple[WorktreeRecord, bool]]:
        """Pair every prunable-in-principle record with its merge state.

        The main worktree, bare entries and detached worktrees never appear in
        the result.
        """
        classified = []
        for record in records:
            if record.is_main or record.is_bare or record.branch is None:
                logger.debug(f"Not a prune candidate: {record}")
                continue
            merged = self.is_branch_merged(record.branch)
            logger.debug(f"Branch {record.branch} merged={merged}")
            classified.append((record, merged))
        return classified

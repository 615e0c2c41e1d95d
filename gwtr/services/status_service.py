"""Working-directory status of every worktree."""

import os
from typing import Iterable, List

from gwtr.exceptions import GwtrError
from gwtr.models.worktree import Cleanliness, StatusEntry, WorktreeRecord
from gwtr.services.git.porcelain import count_changed_files
from gwtr.services.git.runner import GitRunner
from gwtr.logging_config import get_logger

logger = get_logger(__name__)


class StatusService:
    """Builds StatusEntry objects by running `git status --porcelain` per worktree."""

    def __init__(self, runner: GitRunner):
        self.runner = runner

    def get_worktree_status(self, record: WorktreeRecord) -> StatusEntry:
        """Check one worktree; never raises for a single failed check."""
        if record.is_bare:
            return StatusEntry(record, Cleanliness.UNKNOWN)

        if not os.path.isdir(record.path):
            logger.debug(f"Worktree path {record.path} doesn't exist (orphaned)")
            return StatusEntry(record, Cleanliness.UNKNOWN)

        try:
            result = self.runner.status_porcelain(record.path)
        except GwtrError as e:
            logger.warning(f"Could not check worktree status for {record.path}: {e}")
            return StatusEntry(record, Cleanliness.UNKNOWN, error=str(e))

        if not result.ok:
            logger.warning(f"git status failed in {record.path}: {result.output}")
            return StatusEntry(record, Cleanliness.ERROR, error=result.output)

        changed = count_changed_files(result.stdout)
        if changed == 0:
            return StatusEntry(record, Cleanliness.CLEAN)
        return StatusEntry(record, Cleanliness.DIRTY, changed_files=changed)

    def aggregate(self, records: Iterable[WorktreeRecord]) -> List[StatusEntry]:
        """Status of every record, in listing order."""
        return [self.get_worktree_status(record) for record in records]

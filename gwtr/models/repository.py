"""Repository handle and discovery."""

import os
from dataclasses import dataclass

import git

from gwtr.exceptions import EncodingIssueError, NotInRepositoryError
from gwtr.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RepositoryHandle:
    """The primary working copy of a discovered repository."""

    workdir: str  # Absolute, no trailing slash

    @property
    def name(self) -> str:
        """Final path segment of the workdir."""
        return os.path.basename(self.workdir)

    @property
    def parent_dir(self) -> str:
        return os.path.dirname(self.workdir)


def discover_repository(start_path: str) -> RepositoryHandle:
    """Find the repository enclosing start_path by searching its ancestors.

    Linked worktrees resolve to the primary worktree so that naming stays
    anchored to the main repository no matter where the command runs.

    Raises:
        NotInRepositoryError: no repository, or a repository without a working tree
        EncodingIssueError: the workdir is not representable as UTF-8
    """
    try:
        repo = git.Repo(start_path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        logger.debug(f"No repository found from {start_path}: {e}")
        raise NotInRepositoryError() from e

    try:
        if repo.bare or repo.working_tree_dir is None:
            raise NotInRepositoryError("Failed to get repository working directory")

        # common_dir is "<main workdir>/.git" for the primary and for every linked worktree
        common_dir = os.path.normpath(repo.common_dir)
        if os.path.basename(common_dir) == ".git":
            workdir = os.path.dirname(common_dir)
        else:
            workdir = str(repo.working_tree_dir)
    finally:
        repo.close()

    workdir = os.path.normpath(os.path.abspath(workdir))
    try:
        workdir.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingIssueError("Repository path") from e

    if not os.path.basename(workdir):
        raise NotInRepositoryError("Failed to get repository directory name")

    logger.debug(f"Discovered repository at {workdir}")
    return RepositoryHandle(workdir=workdir)

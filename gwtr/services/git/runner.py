"""Subprocess access to the git executable."""

from dataclasses import dataclass
from typing import Optional, Tuple

import git

from gwtr.exceptions import EncodingIssueError, GitOperationError, SubprocessLaunchError
from gwtr.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GitResult:
    """Exit status and decoded output of one git invocation."""

    args: Tuple[str, ...]
    status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def output(self) -> str:
        """stderr when present, otherwise stdout; git reports most failures on stderr."""
        return (self.stderr or self.stdout).strip()

    def raise_for_status(self, operation: str, name: Optional[str] = None) -> "GitResult":
        if not self.ok:
            message = self.output or f"git exited with code {self.status}"
            raise GitOperationError(operation, name, message)
        return self


def _check_utf8(text: str, what: str) -> str:
    # GitPython decodes with surrogateescape; surrogates mean the bytes were not UTF-8
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingIssueError(what) from e
    return text


class GitRunner:
    """Runs git commands and returns their textual results.

    A non-zero exit is not an error here: callers inspect GitResult and decide
    whether to retry, skip or fail. Only a git binary that cannot be started
    raises.
    """

    def __init__(self, workdir: str):
        """Initialize the runner.

        Args:
            workdir: Directory git is started in when no cwd is given
        """
        self.workdir = workdir
        self._git = git.Git(workdir)

    def run(self, *args: str, cwd: Optional[str] = None) -> GitResult:
        """Run `git [-C cwd] <args>`.

        Raises:
            SubprocessLaunchError: git could not be executed
            EncodingIssueError: an argument or the output is not valid UTF-8
        """
        for arg in args:
            _check_utf8(arg, "Argument")
        command = ["git"]
        if cwd is not None:
            command += ["-C", _check_utf8(cwd, "Path")]
        command += list(args)

        logger.debug(f"Running: {' '.join(command)}")
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise SubprocessLaunchError(" ".join(args), str(e)) from e
        except OSError as e:
            raise SubprocessLaunchError(" ".join(args), str(e)) from e

        result = GitResult(
            args=tuple(args),
            status=status,
            stdout=_check_utf8(stdout or "", "Git output"),
            stderr=_check_utf8(stderr or "", "Git output"),
        )
        if not result.ok:
            logger.debug(f"git {' '.join(args)} exited with {status}: {result.stderr.strip()}")
        return result

    # Narrow collaborator interface

    def worktree_list(self) -> GitResult:
        return self.run("worktree", "list", "--porcelain")

    def worktree_add(self, path: str, branch: str, create_branch: bool) -> GitResult:
        if create_branch:
            return self.run("worktree", "add", "-b", branch, path)
        return self.run("worktree", "add", path, branch)

    def worktree_remove(self, path: str, force: bool = False) -> GitResult:
        if force:
            return self.run("worktree", "remove", "--force", path)
        return self.run("worktree", "remove", path)

    def merged_branches(self, trunk: str) -> GitResult:
        return self.run("branch", "--merged", trunk)

    def pull(self, path: str, remote: str, trunk: str) -> GitResult:
        return self.run("pull", remote, trunk, cwd=path)

    def fetch(self, remote: str, trunk: str) -> GitResult:
        return self.run("fetch", remote, trunk)

    def merge(self, path: str, ref: str) -> GitResult:
        return self.run("merge", "--no-edit", ref, cwd=path)

    def status_porcelain(self, path: str) -> GitResult:
        return self.run("status", "--porcelain", cwd=path)

"""Custom exceptions for gwtr"""

from typing import Optional


class GwtrError(Exception):
    """Base exception for all gwtr errors."""
    pass


class NotInRepositoryError(GwtrError):
    """Exception raised when no git repository encloses the working directory."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "Not in a git repository. Please run this command inside a git repository."
        )


class InvalidWorktreeNameError(GwtrError):
    """Exception raised for worktree names that cannot be mapped to a path."""

    def __init__(self, message: str = "name must be non-empty"):
        super().__init__(message)


class WorktreeNotFoundError(GwtrError):
    """Exception raised when a named worktree does not exist on disk."""

    def __init__(self, name: str, path: Optional[str] = None):
        self.name = name
        self.path = path

        error_msg = f"Worktree '{name}' not found"
        if path:
            error_msg += f" at {path}"
        super().__init__(error_msg)


class WorktreeAlreadyExistsError(GwtrError):
    """Exception raised when the target directory of a new worktree is taken."""

    def __init__(self, name: str, path: str):
        self.name = name
        self.path = path
        super().__init__(f"Worktree '{name}' already exists at {path}")


class SubprocessLaunchError(GwtrError):
    """Exception raised when the git executable cannot be started at all."""

    def __init__(self, command: str, message: Optional[str] = None):
        self.command = command

        error_msg = f"Failed to execute git {command}"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class GitOperationError(GwtrError):
    """Exception raised when git runs but reports a failure."""

    def __init__(self, operation: str, name: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.name = name
        self.message = message

        error_msg = f"Failed to {operation}"
        if name:
            error_msg += f" '{name}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class EncodingIssueError(GwtrError):
    """Exception raised when a path, name or git output is not valid UTF-8."""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"{what} contains invalid UTF-8")


class WorktreeListingError(GwtrError):
    """Exception raised when `git worktree list --porcelain` output is inconsistent."""

    def __init__(self, message: str):
        super().__init__(f"Unexpected worktree listing: {message}")

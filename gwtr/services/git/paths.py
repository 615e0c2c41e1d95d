"""Naming convention for worktree directories.

A worktree called ``feature`` of a repository at ``/src/app`` lives at
``/src/app_feature``. Names map to paths one-to-one, so a path can be turned
back into its name by stripping the ``app_`` prefix.
"""

import os
from typing import Optional

from gwtr.constants import WORKTREE_NAME_SEPARATOR
from gwtr.exceptions import EncodingIssueError, InvalidWorktreeNameError
from gwtr.models.repository import RepositoryHandle


def normalize_path(path: str) -> str:
    """Strip trailing separators without touching a filesystem root."""
    stripped = path.rstrip("/" + os.sep)
    return stripped or path


def same_path(a: str, b: str) -> bool:
    """Compare two paths textually, then through symlink resolution."""
    a, b = normalize_path(a), normalize_path(b)
    if os.path.normpath(a) == os.path.normpath(b):
        return True
    return os.path.realpath(a) == os.path.realpath(b)


def worktree_prefix(repo: RepositoryHandle) -> str:
    return f"{repo.name}{WORKTREE_NAME_SEPARATOR}"


def validate_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidWorktreeNameError()
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingIssueError("Worktree name") from e
    return name


def resolve(repo: RepositoryHandle, name: str) -> str:
    """Absolute path of the worktree called name."""
    validate_name(name)
    return os.path.join(repo.parent_dir, f"{worktree_prefix(repo)}{name}")


def reverse(repo: RepositoryHandle, path: str) -> Optional[str]:
    """Worktree name for path, or None when path does not follow the convention."""
    path = normalize_path(path)
    prefix = worktree_prefix(repo)
    # Names may contain "/", so work on the path relative to the repository's parent
    candidates = (
        (repo.parent_dir, path),
        (os.path.realpath(repo.parent_dir), os.path.realpath(path)),
    )
    for base, candidate in candidates:
        relative = os.path.relpath(candidate, base)
        if relative.startswith(os.pardir):
            continue
        if relative.startswith(prefix) and len(relative) > len(prefix):
            return relative[len(prefix):]
    return None


def short_name(repo: RepositoryHandle, path: str) -> str:
    """Worktree name for display: the convention name, else the directory name."""
    name = reverse(repo, path)
    if name is not None:
        return name
    return os.path.basename(normalize_path(path))

"""Pytest fixtures for gwtr tests"""
import io
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest
from rich.console import Console

from gwtr.core import WorktreeManager
from gwtr.models.repository import RepositoryHandle, discover_repository
from gwtr.services.display_service import DisplayService
from gwtr.services.git.runner import GitResult, GitRunner


class ScriptedConfirm:
    """Confirmation source that replays canned answers and records prompts."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        answer = self.answers.pop(0) if self.answers else ""
        return answer.lower() == "y"


def make_result(*args, status=0, stdout="", stderr="") -> GitResult:
    """Build a canned GitResult."""
    return GitResult(args=tuple(args), status=status, stdout=stdout, stderr=stderr)


def commit_file(repo: git.Repo, filename: str, content: str, message: str) -> None:
    """Write, stage and commit a file in repo."""
    path = Path(repo.working_tree_dir) / filename
    path.write_text(content)
    repo.index.add([filename])
    repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git reports resolved paths; resolve symlinked temp roots up front
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'main_branch': 'main',
        'remote': 'origin',
        'dry_run': False,
        'force': False,
        'verbose': False,
        'debug': False,
        'workers': None,
    }


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Repository whose main branch is pushed to a bare 'origin' remote."""
    remote_path = temp_dir / "remote.git"
    git.Repo.init(remote_path, bare=True).close()
    git_repo.create_remote('origin', str(remote_path))
    git_repo.git.push('origin', 'main')
    yield git_repo


@pytest.fixture
def repo_handle(git_repo) -> RepositoryHandle:
    return discover_repository(git_repo.working_tree_dir)


@pytest.fixture
def output():
    """Console writing plain text into a buffer; read it with output.file.getvalue()."""
    return Console(file=io.StringIO(), soft_wrap=True, highlight=False, color_system=None, width=200)


@pytest.fixture
def confirm():
    return ScriptedConfirm()


@pytest.fixture
def manager(repo_handle, mock_config, output, confirm):
    """WorktreeManager over the test repository with captured output."""
    return WorktreeManager(
        repo_handle,
        mock_config,
        confirm=confirm,
        display=DisplayService(output),
    )


@pytest.fixture
def mock_runner():
    """GitRunner mock; set return values per test."""
    runner = Mock(spec=GitRunner)
    runner.workdir = "/fake/repo/app"
    return runner

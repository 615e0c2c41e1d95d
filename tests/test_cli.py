"""Tests for the gwtr command line"""
import os
import sys

import pytest

from gwtr.cli.main import main
from gwtr.config import ENV_MAIN_BRANCH, ENV_REMOTE


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch):
    """Leave root logging alone and ignore the caller's GWTR_* settings."""
    monkeypatch.setattr(sys.modules["gwtr.cli.main"], "setup_logging", lambda **kwargs: None)
    monkeypatch.delenv(ENV_MAIN_BRANCH, raising=False)
    monkeypatch.delenv(ENV_REMOTE, raising=False)


@pytest.fixture
def in_repo(git_repo, monkeypatch):
    monkeypatch.chdir(git_repo.working_tree_dir)
    return git_repo


class TestCliBasics:
    """Test argument handling and error reporting."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: gwtr" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("gwtr ")

    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["bogus"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_name(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["add"])
        assert exc_info.value.code == 1

    def test_outside_repository(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        assert main(["list"]) == 1
        assert "Error: Not in a git repository" in capsys.readouterr().err

    def test_interrupt_reports_error(self, in_repo, monkeypatch, capsys):
        def interrupted(manager, args):
            raise KeyboardInterrupt

        monkeypatch.setattr(sys.modules["gwtr.cli.main"], "run_command", interrupted)

        assert main(["list"]) == 1
        assert "Error: Operation cancelled by user" in capsys.readouterr().err


class TestCliCommands:
    """Test subcommands end to end."""

    def test_add_and_list(self, in_repo, temp_dir, capsys):
        assert main(["add", "feature-a"]) == 0
        assert (temp_dir / "test_repo_feature-a").is_dir()

        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "Created worktree 'feature-a'" in out
        assert "test_repo_feature-a [feature-a]" in out

    def test_add_twice(self, in_repo, capsys):
        assert main(["add", "feature-a"]) == 0
        assert main(["add", "feature-a"]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_add_main_rejected(self, in_repo, capsys):
        assert main(["add", "main"]) == 1
        assert "Error: 'main' is reserved for the primary worktree" in capsys.readouterr().err

    def test_remove_missing(self, in_repo, capsys):
        assert main(["remove", "ghost"]) == 1
        assert "Error: Worktree 'ghost' not found" in capsys.readouterr().err

    def test_remove(self, in_repo, temp_dir):
        main(["add", "feature-a"])
        assert main(["remove", "feature-a"]) == 0
        assert not (temp_dir / "test_repo_feature-a").exists()

    def test_status(self, in_repo, temp_dir, capsys):
        main(["add", "feature-a"])
        (temp_dir / "test_repo_feature-a" / "new.txt").write_text("x\n")

        assert main(["status"]) == 0
        out = capsys.readouterr().out
        assert "uncommitted change" in out
        assert "clean" in out

    def test_switch(self, in_repo, temp_dir, capsys):
        main(["add", "feature-a"])
        capsys.readouterr()

        assert main(["switch", "feature-a"]) == 0
        assert capsys.readouterr().out.strip() == f"cd {temp_dir / 'test_repo_feature-a'}"

    def test_pull_all_without_remote(self, in_repo, capsys):
        assert main(["pull", "--all"]) == 0
        out = capsys.readouterr().out
        assert "Pulling all worktrees..." in out
        assert "skipped" in out

    def test_pull_current_without_remote(self, in_repo, capsys):
        assert main(["pull"]) == 1
        assert "Error: Failed to pull worktree 'main'" in capsys.readouterr().err

    def test_prune_dry_run(self, in_repo, temp_dir, capsys):
        main(["add", "feature-a"])

        assert main(["prune", "--dry-run"]) == 0

        out = capsys.readouterr().out
        assert "Would prune 1 worktree(s):" in out
        assert "feature-a" in out
        assert (temp_dir / "test_repo_feature-a").is_dir()

    def test_prune_force(self, in_repo, temp_dir, capsys):
        main(["add", "feature-a"])

        assert main(["prune", "--force"]) == 0

        assert "Pruned 1 worktree(s)" in capsys.readouterr().out
        assert not (temp_dir / "test_repo_feature-a").exists()

    def test_unknown_trunk_fails_prune(self, in_repo, capsys):
        main(["add", "feature-a"])
        assert main(["--main-branch", "no-such-branch", "prune", "--dry-run"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_from_linked_worktree(self, in_repo, temp_dir, monkeypatch, capsys):
        main(["add", "feature-a"])
        monkeypatch.chdir(temp_dir / "test_repo_feature-a")

        assert main(["add", "feature-b"]) == 0

        assert (temp_dir / "test_repo_feature-b").is_dir()
        assert os.path.isdir(temp_dir / "test_repo")
        assert not (temp_dir / "test_repo_feature-a_feature-b").exists()

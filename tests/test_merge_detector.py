"""Tests for merge detection"""
import git
import pytest

from conftest import commit_file, make_result
from gwtr.exceptions import GitOperationError
from gwtr.models.worktree import WorktreeRecord
from gwtr.services.git.merge_detector import MergeDetector
from gwtr.services.git.runner import GitRunner

MAIN = WorktreeRecord(path="/src/app", branch="main", is_main=True)
MERGED = WorktreeRecord(path="/src/app_feature-a", branch="feature-a")
UNMERGED = WorktreeRecord(path="/src/app_feature-c", branch="feature-c")
DETACHED = WorktreeRecord(path="/src/app_detached", branch=None)
BARE = WorktreeRecord(path="/src/app.git", branch=None, is_bare=True)


class TestMergeDetectorCanned:
    """Test classification against canned `git branch --merged` output."""

    def test_classify(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(
            "branch", "--merged", "main", stdout="* main\n+ feature-a\n  feature-b"
        )
        detector = MergeDetector(mock_runner, "main")

        classified = detector.classify([MAIN, MERGED, UNMERGED, DETACHED, BARE])

        assert classified == [(MERGED, True), (UNMERGED, False)]

    def test_merged_listing_runs_once(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(stdout="  feature-a")
        detector = MergeDetector(mock_runner, "main")

        detector.classify([MERGED, UNMERGED])
        detector.is_branch_merged("feature-a")

        mock_runner.merged_branches.assert_called_once_with("main")

    def test_main_excluded_even_when_merged(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(stdout="* main")
        detector = MergeDetector(mock_runner, "main")
        assert detector.classify([MAIN]) == []

    def test_trunk_branch_never_merged_into_itself(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(stdout="  main")
        linked_on_trunk = WorktreeRecord(path="/src/app_trunk", branch="main")
        detector = MergeDetector(mock_runner, "main")
        assert detector.classify([linked_on_trunk]) == [(linked_on_trunk, False)]

    def test_exact_match_only(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(stdout="  feature-a-old")
        detector = MergeDetector(mock_runner, "main")
        assert detector.is_branch_merged("feature-a") is False

    def test_listing_failure(self, mock_runner):
        mock_runner.merged_branches.return_value = make_result(
            status=129, stderr="error: malformed object name trunk"
        )
        detector = MergeDetector(mock_runner, "trunk")
        with pytest.raises(GitOperationError, match="malformed object name"):
            detector.classify([MERGED])


class TestMergeDetectorRealRepo:
    """Test merge detection with real worktrees."""

    def test_fresh_worktree_branch_is_merged(self, git_repo, temp_dir):
        path = str(temp_dir / "test_repo_fresh")
        git_repo.git.worktree("add", "-b", "fresh", path)

        detector = MergeDetector(GitRunner(git_repo.working_tree_dir), "main")

        assert detector.is_branch_merged("fresh") is True

    def test_branch_with_new_commit_is_not_merged(self, git_repo, temp_dir):
        path = str(temp_dir / "test_repo_ahead")
        git_repo.git.worktree("add", "-b", "ahead", path)
        worktree_repo = git.Repo(path)
        commit_file(worktree_repo, "new.txt", "new\n", "Work in progress")
        worktree_repo.close()

        detector = MergeDetector(GitRunner(git_repo.working_tree_dir), "main")

        assert detector.is_branch_merged("ahead") is False

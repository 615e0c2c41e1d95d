"""Tests for Config"""
import pytest

from gwtr.config import ENV_MAIN_BRANCH, ENV_REMOTE, Config


class TestConfigValidation:
    """Test Config validation."""

    def test_defaults(self):
        config = Config()
        assert config.main_branch == "main"
        assert config.remote == "origin"
        assert config.workers is None
        assert config.parallel is False

    def test_empty_main_branch(self):
        with pytest.raises(ValueError, match="main_branch cannot be empty"):
            Config(main_branch="  ")

    def test_empty_remote(self):
        with pytest.raises(ValueError, match="remote cannot be empty"):
            Config(remote="")

    def test_values_are_stripped(self):
        config = Config(main_branch=" develop ", remote=" upstream")
        assert config.main_branch == "develop"
        assert config.remote == "upstream"

    def test_workers_must_be_positive(self):
        with pytest.raises(ValueError, match="workers must be positive"):
            Config(workers=0)

    def test_parallel_needs_more_than_one_worker(self):
        assert Config(workers=1).parallel is False
        assert Config(workers=2).parallel is True


class TestConfigConversion:
    """Test dict and environment loading."""

    def test_from_dict_ignores_unknown_keys(self, mock_config):
        config = Config.from_dict({**mock_config, "protected_branches": ["main"]})
        assert config.to_dict() == mock_config

    def test_get(self):
        config = Config(remote="upstream")
        assert config.get("remote") == "upstream"
        assert config.get("missing", "fallback") == "fallback"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_MAIN_BRANCH, "trunk")
        monkeypatch.setenv(ENV_REMOTE, "upstream")

        config = Config.from_env()

        assert config.main_branch == "trunk"
        assert config.remote == "upstream"

    def test_overrides_win_over_env(self, monkeypatch):
        monkeypatch.setenv(ENV_MAIN_BRANCH, "trunk")

        config = Config.from_env(main_branch="develop", remote=None)

        assert config.main_branch == "develop"
        assert config.remote == "origin"

    def test_empty_env_ignored(self, monkeypatch):
        monkeypatch.setenv(ENV_MAIN_BRANCH, "")
        monkeypatch.delenv(ENV_REMOTE, raising=False)
        assert Config.from_env().main_branch == "main"

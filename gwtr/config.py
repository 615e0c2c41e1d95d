"""Configuration handling for gwtr"""

import os
from dataclasses import dataclass
from typing import Optional

ENV_MAIN_BRANCH = "GWTR_MAIN_BRANCH"
ENV_REMOTE = "GWTR_REMOTE"


@dataclass
class Config:
    """Configuration for gwtr with validation."""

    # Trunk branch used for merge checks and pulls
    main_branch: str = "main"
    remote: str = "origin"

    # Execution modes
    dry_run: bool = False
    force: bool = False
    verbose: bool = False
    debug: bool = False
    workers: Optional[int] = None  # None = sequential

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_main_branch()
        self._validate_remote()
        self._validate_workers()

    def _validate_main_branch(self):
        """Validate main_branch is not empty."""
        if not self.main_branch or not self.main_branch.strip():
            raise ValueError("main_branch cannot be empty")
        self.main_branch = self.main_branch.strip()

    def _validate_remote(self):
        """Validate remote is not empty."""
        if not self.remote or not self.remote.strip():
            raise ValueError("remote cannot be empty")
        self.remote = self.remote.strip()

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")

    @property
    def parallel(self) -> bool:
        return self.workers is not None and self.workers > 1

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "main_branch": self.main_branch,
            "remote": self.remote,
            "dry_run": self.dry_run,
            "force": self.force,
            "verbose": self.verbose,
            "debug": self.debug,
            "workers": self.workers,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "main_branch",
            "remote",
            "dry_run",
            "force",
            "verbose",
            "debug",
            "workers",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Create Config from GWTR_* environment variables.

        Keyword arguments that are not None take precedence over the environment.
        """
        values = {}
        if os.environ.get(ENV_MAIN_BRANCH):
            values["main_branch"] = os.environ[ENV_MAIN_BRANCH]
        if os.environ.get(ENV_REMOTE):
            values["remote"] = os.environ[ENV_REMOTE]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)

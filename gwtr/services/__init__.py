"""Services used by the worktree manager."""

from .status_service import StatusService
from .display_service import DisplayService

__all__ = ["StatusService", "DisplayService"]

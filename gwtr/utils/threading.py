"""Worker-count helpers for parallel pulls."""

import os
import sys
from typing import Any, Dict, Optional


def is_free_threading_enabled() -> bool:
    """True on Python 3.13+ builds running with the GIL disabled."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is not None and not is_gil_enabled()


def get_optimal_worker_count(requested: Optional[int] = None, item_count: Optional[int] = None) -> int:
    """Number of threads for a fan-out over item_count worktrees.

    Args:
        requested: User-requested worker count, if any
        item_count: Number of tasks; never start more workers than tasks

    Returns:
        Worker count, at least 1
    """
    if requested is not None and requested > 0:
        workers = requested
    else:
        # Pulls wait on the network, so oversubscribe the CPUs
        workers = min(32, (os.cpu_count() or 1) + 4)

    if item_count is not None:
        workers = min(workers, item_count)
    return max(1, workers)


def get_threading_info() -> Dict[str, Any]:
    """Threading details shown by --debug."""
    return {
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
    }

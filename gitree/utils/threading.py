"""Threading utilities for sizing the status extraction pool."""

import os
import sys
from typing import Dict, Any, Optional

from gitree.constants import DEFAULT_MAX_CONCURRENCY


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with the GIL disabled, False otherwise
    """
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return False
    return not is_gil_enabled()


def get_python_threading_mode() -> str:
    """Describe the current threading mode."""
    if not hasattr(sys, "_is_gil_enabled"):
        return "GIL-enabled (Python < 3.13)"
    return "free-threading" if is_free_threading_enabled() else "GIL-enabled"


def get_optimal_worker_count(
    user_specified: Optional[int] = None, cap: int = DEFAULT_MAX_CONCURRENCY
) -> int:
    """Number of concurrent extraction units to run.

    Args:
        user_specified: Explicit worker count, used as-is when positive
        cap: Upper bound for the auto-detected value

    Returns:
        Worker count for the status extraction pool
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1

    # Extraction is mostly waiting on git subprocesses and disk, so oversubscribe
    if is_free_threading_enabled():
        return min(cap, cpu_count * 2)
    return min(cap, cpu_count + 4)


def get_threading_info() -> Dict[str, Any]:
    """Summary of the threading configuration, shown in debug mode."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }

"""Utility functions for gitree."""

from .threading import (
    is_free_threading_enabled,
    get_python_threading_mode,
    get_optimal_worker_count,
    get_threading_info,
)

__all__ = [
    "is_free_threading_enabled",
    "get_python_threading_mode",
    "get_optimal_worker_count",
    "get_threading_info",
]

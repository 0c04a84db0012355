"""Git-related services for gitree."""

from .changes import WorkingTreeChanges, parse_porcelain
from .ignore import resolve_global_ignore_file, read_ignore_patterns
from .status_reader import GitStatusReader, count_divergence, extract, reachable_commits

__all__ = [
    "GitStatusReader",
    "WorkingTreeChanges",
    "count_divergence",
    "extract",
    "parse_porcelain",
    "reachable_commits",
    "read_ignore_patterns",
    "resolve_global_ignore_file",
]

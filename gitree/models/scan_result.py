"""Scan result model"""
import os
from dataclasses import dataclass, field
from typing import List

from gitree.exceptions import InvariantError, TraversalError
from gitree.models.repository import Repository
from gitree.models.tree import TreeNode


@dataclass
class ScanResult:
    """Complete result of one scan invocation."""
    root_path: str
    repositories: List[Repository]
    tree: TreeNode
    total_scanned: int = 0  # Directories visited
    errors: List[TraversalError] = field(default_factory=list)
    duration: float = 0.0  # Seconds

    @property
    def total_repos(self) -> int:
        return len(self.repositories)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def success_rate(self) -> float:
        """Fraction of repositories without an error or timeout (1.0 when empty)."""
        if not self.repositories:
            return 1.0
        failed = sum(
            1
            for repo in self.repositories
            if repo.error is not None or repo.has_timeout
        )
        return (self.total_repos - failed) / self.total_repos

    def validate(self) -> None:
        if not self.root_path:
            raise InvariantError("ScanResult", "root path cannot be empty")
        if not os.path.isabs(self.root_path):
            raise InvariantError("ScanResult", f"root path must be absolute: {self.root_path}")
        if self.total_scanned < self.total_repos:
            raise InvariantError(
                "ScanResult",
                f"total scanned < total repos: {self.total_scanned} < {self.total_repos}",
            )
        if self.duration < 0:
            raise InvariantError("ScanResult", "duration cannot be negative")
        paths = [repo.path for repo in self.repositories]
        if len(paths) != len(set(paths)):
            raise InvariantError("ScanResult", "repository paths must be unique")
        self.tree.validate()

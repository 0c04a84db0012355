"""Repository model"""
import os
from dataclasses import dataclass
from typing import Optional

from gitree.exceptions import InvariantError
from gitree.models.status import Status


@dataclass
class Repository:
    """A git repository discovered during a scan."""
    path: str  # Absolute path, unique key
    name: str = ""
    is_bare: bool = False
    is_symlink: bool = False  # Reached through a symbolic link
    status: Optional[Status] = None  # None if extraction failed or never ran
    error: Optional[str] = None
    has_timeout: bool = False

    def __post_init__(self):
        if not self.name and self.path:
            self.name = os.path.basename(os.path.normpath(self.path))

    def validate(self) -> None:
        """Raise InvariantError if the repository record is inconsistent."""
        if not self.path:
            raise InvariantError("Repository", "path cannot be empty")
        if not os.path.isabs(self.path):
            raise InvariantError("Repository", f"path must be absolute: {self.path}")
        if not self.name:
            raise InvariantError("Repository", "name cannot be empty")
        if self.is_bare and self.status is not None and self.status.has_changes:
            raise InvariantError("Repository", "bare repository cannot have uncommitted changes")

    def attach_status(self, status: Status) -> None:
        """Attach the extracted status, rejecting states the repository cannot be in."""
        if self.is_bare and status.has_changes:
            raise InvariantError(
                "Repository", f"bare repository cannot have uncommitted changes: {self.path}"
            )
        self.status = status
        self.has_timeout = status.is_timeout
        self.validate()

    def mark_failed(self, message: str) -> None:
        """Record a terminal error for a repository that has no status."""
        self.error = message

    def __str__(self) -> str:
        kind = "bare" if self.is_bare else "repo"
        return f"{self.name} @ {self.path} [{kind}]"

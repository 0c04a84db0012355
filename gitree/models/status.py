"""Git status model"""
from dataclasses import dataclass
from typing import Optional

from gitree.constants import DETACHED_BRANCH, UNKNOWN_BRANCH, TIMEOUT_ERROR
from gitree.exceptions import InvariantError


@dataclass(frozen=True)
class Status:
    """Synchronization and working-tree state of one repository.

    Built once by a single extraction unit and never modified afterwards.
    """
    branch: str
    is_detached: bool = False
    has_remote: bool = False
    ahead: int = 0
    behind: int = 0
    has_stashes: bool = False
    has_changes: bool = False
    error: Optional[str] = None  # Partial error if some status info couldn't be retrieved

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise InvariantError if the status is internally inconsistent."""
        if not self.branch:
            raise InvariantError("Status", "branch cannot be empty")
        if self.is_detached and self.branch != DETACHED_BRANCH:
            raise InvariantError("Status", f"detached HEAD must have branch '{DETACHED_BRANCH}'")
        if self.ahead < 0 or self.behind < 0:
            raise InvariantError("Status", "ahead/behind counts cannot be negative")
        if not self.has_remote and (self.ahead or self.behind):
            raise InvariantError("Status", "no remote but ahead/behind counts are non-zero")

    @property
    def is_timeout(self) -> bool:
        return self.error == TIMEOUT_ERROR

    @classmethod
    def degraded(cls, error: str) -> "Status":
        """Status for a repository whose state could not be read."""
        return cls(branch=UNKNOWN_BRANCH, error=error)

    @classmethod
    def timed_out(cls) -> "Status":
        return cls.degraded(TIMEOUT_ERROR)

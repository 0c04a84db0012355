"""Custom exceptions for gitree"""

from typing import Optional


class GitreeError(Exception):
    """Base exception for all gitree errors."""
    pass


class ScanError(GitreeError):
    """Exception raised when a scan cannot produce any result."""

    def __init__(self, root_path: str, message: Optional[str] = None):
        self.root_path = root_path
        self.message = message

        error_msg = f"Cannot scan '{root_path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class TraversalError(GitreeError):
    """Non-fatal problem met while walking the directory tree.

    These are collected into ``ScanResult.errors`` and never raised by the scanner.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class InvariantError(GitreeError, ValueError):
    """Exception raised when a model object violates its own validation rules."""

    def __init__(self, entity: str, message: str):
        self.entity = entity
        self.message = message
        super().__init__(f"{entity} validation error: {message}")


class ExtractionCancelled(GitreeError):
    """Exception raised when status extraction is abandoned on request."""

    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        super().__init__(f"Status extraction cancelled for '{repo_path}'")

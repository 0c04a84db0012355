"""Configuration handling for gitree"""

from dataclasses import dataclass, fields
from typing import Optional

from gitree.constants import (
    COLOR_MODES,
    DEFAULT_EXTRACT_TIMEOUT,
    DEFAULT_ROOT_LABEL,
    DEFAULT_SCAN_TIMEOUT,
)
from gitree.utils.threading import get_optimal_worker_count


@dataclass
class Config:
    """Configuration for gitree with validation."""

    # Status extraction
    timeout: float = DEFAULT_EXTRACT_TIMEOUT  # Per repository, seconds
    max_concurrency: Optional[int] = None  # None = auto-detect
    scan_timeout: float = DEFAULT_SCAN_TIMEOUT  # Whole run, seconds

    # Output
    color: str = "auto"  # auto, always, never
    show_root: bool = True
    root_label: str = DEFAULT_ROOT_LABEL

    # Diagnostics
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_timeouts()
        self._validate_max_concurrency()
        self._validate_color()
        self._validate_root_label()

    def _validate_timeouts(self):
        """Validate timeouts are positive."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.scan_timeout <= 0:
            raise ValueError(f"scan_timeout must be positive, got {self.scan_timeout}")

    def _validate_max_concurrency(self):
        """Validate max_concurrency is positive when given."""
        if self.max_concurrency is not None and self.max_concurrency <= 0:
            raise ValueError(f"max_concurrency must be positive, got {self.max_concurrency}")

    def _validate_color(self):
        """Validate color is one of allowed values."""
        if self.color not in COLOR_MODES:
            raise ValueError(f"color must be one of {COLOR_MODES}, got '{self.color}'")

    def _validate_root_label(self):
        """Validate root_label is not empty."""
        if not self.root_label or not self.root_label.strip():
            raise ValueError("root_label cannot be empty")
        self.root_label = self.root_label.strip()

    @property
    def workers(self) -> int:
        """Effective size of the status extraction pool."""
        return get_optimal_worker_count(self.max_concurrency)

    def to_dict(self) -> dict:
        """Convert config to a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

"""Version information for gitree."""

__version__ = "0.1.0"

"""Shared constants for gitree."""

from typing import Dict, Optional


# Branch sentinels
DETACHED_BRANCH = "DETACHED"
UNKNOWN_BRANCH = "unknown"
DEFAULT_BRANCHES = ("main", "master")

# Remote conventions
DEFAULT_REMOTE = "origin"
STASH_REF = "refs/stash"

# Error annotations
TIMEOUT_ERROR = "timeout"
STATUS_NOT_COLLECTED = "status not collected"

# Extraction defaults
DEFAULT_EXTRACT_TIMEOUT = 10.0  # seconds per repository
DEFAULT_MAX_CONCURRENCY = 10
DEFAULT_SCAN_TIMEOUT = 300.0  # seconds for the whole run
MAX_FILES_PER_CATEGORY = 20
SLOW_EXTRACTION_THRESHOLD = 0.1  # seconds
POLL_INTERVAL = 0.05  # seconds

# Repository markers
GIT_DIR_NAME = ".git"
GITDIR_PREFIX = "gitdir:"
BARE_HEAD_FILE = "HEAD"
BARE_REFS_DIR = "refs"
BARE_OBJECTS_DIR = "objects"


# Tree drawing
CONNECTOR_MIDDLE = "├── "
CONNECTOR_LAST = "└── "
PREFIX_CONTINUE = "│   "
PREFIX_BLANK = "    "
DEFAULT_ROOT_LABEL = "."
NO_REPOSITORIES_MESSAGE = "no repositories found"


# Symbol constants
SYMBOL_AHEAD = "↑"
SYMBOL_BEHIND = "↓"
SYMBOL_NO_REMOTE = "○"
SYMBOL_STASH = "$"
SYMBOL_CHANGES = "*"
BRACKET_OPEN = "[["
BRACKET_CLOSE = "]]"
SEPARATOR = "|"

MARKER_ERROR = "error"
MARKER_TIMEOUT = "timeout"
MARKER_BARE = "bare"


class StyleCategory:
    """Logical color categories for status annotations."""

    MUTED = "muted"
    BRANCH_DEFAULT = "branch-default"
    BRANCH_OTHER = "branch-other"
    AHEAD = "ahead"
    BEHIND = "behind"
    ATTENTION = "attention"


# Rich style names per category
DEFAULT_STYLES: Dict[str, Optional[str]] = {
    StyleCategory.MUTED: "bold bright_black",
    StyleCategory.BRANCH_DEFAULT: "bold bright_black",
    StyleCategory.BRANCH_OTHER: "bold yellow",
    StyleCategory.AHEAD: "bold green",
    StyleCategory.BEHIND: "bold red",
    StyleCategory.ATTENTION: "bold red",
}


COLOR_MODES = ["auto", "always", "never"]

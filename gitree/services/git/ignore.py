"""Global gitignore resolution.

Git reads ``core.excludesFile`` from the global configuration and, when it is
unset, falls back to ``$XDG_CONFIG_HOME/git/ignore`` (``~/.config/git/ignore``).
The file found here is handed to ``git status`` explicitly so every extraction
in a batch uses the same exclusions.
"""

import configparser
import os
from pathlib import Path
from typing import List, Optional

import git

from gitree.logging_config import get_logger

logger = get_logger(__name__)


def _xdg_config_home(home: Path) -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home / ".config"


def _read_excludes_setting(config_path: Path) -> Optional[str]:
    """Value of core.excludesFile in one git config file, if set."""
    if not config_path.is_file():
        return None
    try:
        with git.GitConfigParser(str(config_path), read_only=True) as reader:
            value = reader.get_value("core", "excludesfile")
    except (configparser.Error, OSError, ValueError) as e:
        logger.debug(f"No core.excludesFile in {config_path}: {e}")
        return None
    return str(value) if value else None


def resolve_global_ignore_file(home: Optional[Path] = None) -> Optional[Path]:
    """Locate the global ignore file the way git does.

    Args:
        home: Home directory override (defaults to the current user's)

    Returns:
        Absolute path of an existing ignore file, or None
    """
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as e:
            logger.debug(f"Cannot determine home directory: {e}")
            return None

    xdg_config_home = _xdg_config_home(home)
    for config_path in (home / ".gitconfig", xdg_config_home / "git" / "config"):
        setting = _read_excludes_setting(config_path)
        if not setting:
            continue
        candidate = Path(os.path.expanduser(setting))
        if not candidate.is_absolute():
            candidate = home / candidate
        if candidate.is_file():
            logger.debug(f"Using core.excludesFile from {config_path}: {candidate}")
            return candidate
        logger.debug(f"core.excludesFile in {config_path} points to missing file {candidate}")

    default_path = xdg_config_home / "git" / "ignore"
    if default_path.is_file():
        logger.debug(f"Using default global ignore file {default_path}")
        return default_path

    logger.debug("No global ignore file found")
    return None


def read_ignore_patterns(path: Path) -> List[str]:
    """Patterns of an ignore file, without blank lines and comments."""
    if not path.is_absolute():
        raise ValueError(f"ignore file path must be absolute: {path}")
    patterns = []
    with open(path, encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line)
    return patterns

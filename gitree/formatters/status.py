"""Status annotation formatting utilities."""

from typing import List, Optional, Tuple

from rich.text import Text

from gitree.constants import (
    BRACKET_CLOSE,
    BRACKET_OPEN,
    DEFAULT_BRANCHES,
    MARKER_BARE,
    MARKER_ERROR,
    MARKER_TIMEOUT,
    SEPARATOR,
    SYMBOL_AHEAD,
    SYMBOL_BEHIND,
    SYMBOL_CHANGES,
    SYMBOL_NO_REMOTE,
    SYMBOL_STASH,
    StyleCategory,
)
from gitree.formatters.options import RenderOptions
from gitree.models import Repository, Status


def get_branch_style_type(branch: str) -> str:
    """Style category of a branch label: default branches are muted, others stand out."""
    if branch in DEFAULT_BRANCHES:
        return StyleCategory.BRANCH_DEFAULT
    return StyleCategory.BRANCH_OTHER


def status_markers(status: Status) -> List[Tuple[str, str]]:
    """(symbol, style category) pairs following the branch label."""
    markers = []
    if status.has_remote:
        if status.ahead > 0:
            markers.append((f"{SYMBOL_AHEAD}{status.ahead}", StyleCategory.AHEAD))
        if status.behind > 0:
            markers.append((f"{SYMBOL_BEHIND}{status.behind}", StyleCategory.BEHIND))
    else:
        markers.append((SYMBOL_NO_REMOTE, StyleCategory.MUTED))
    if status.has_stashes:
        markers.append((SYMBOL_STASH, StyleCategory.ATTENTION))
    if status.has_changes:
        markers.append((SYMBOL_CHANGES, StyleCategory.ATTENTION))
    return markers


def format_status(status: Status, options: Optional[RenderOptions] = None) -> Text:
    """
    Format a status as a bracketed annotation.

    Args:
        status: Extracted repository status
        options: Rendering options (color on/off and category styles)

    Returns:
        Rich Text such as ``[[ main ]]``, ``[[ main | ↑2 ↓1 ]]``,
        ``[[ develop | $ * ]]`` or ``[[ main | ○ ]]``
    """
    options = options or RenderOptions()
    muted = options.style(StyleCategory.MUTED)

    text = Text()
    text.append(BRACKET_OPEN, style=muted)
    text.append(" ")
    text.append(status.branch, style=options.style(get_branch_style_type(status.branch)))

    markers = status_markers(status)
    if markers:
        text.append(" ")
        text.append(SEPARATOR, style=muted)
        for symbol, category in markers:
            text.append(" ")
            text.append(symbol, style=options.style(category))

    text.append(" ")
    text.append(BRACKET_CLOSE, style=muted)
    return text


def format_repository_annotation(repo: Repository, options: Optional[RenderOptions] = None) -> Text:
    """
    Everything printed after a repository name.

    Returns:
        Text starting with a space, or empty Text if there is nothing to show.
        ``timeout`` marks an abandoned extraction, ``error`` a partial or failed
        one, and ``bare`` a bare repository.
    """
    options = options or RenderOptions()
    text = Text()

    status = repo.status
    if status is not None:
        text.append(" ")
        text.append_text(format_status(status, options))
        if repo.has_timeout or status.is_timeout:
            text.append(f" {MARKER_TIMEOUT}")
        elif status.error:
            text.append(f" {MARKER_ERROR}")
    elif repo.error:
        text.append(f" {MARKER_ERROR}")

    if repo.is_bare:
        text.append(f" {MARKER_BARE}")

    return text

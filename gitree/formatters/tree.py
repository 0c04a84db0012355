"""Tree rendering."""

import io
from typing import Optional

from rich.console import Console
from rich.text import Text

from gitree.constants import (
    CONNECTOR_LAST,
    CONNECTOR_MIDDLE,
    NO_REPOSITORIES_MESSAGE,
    PREFIX_BLANK,
    PREFIX_CONTINUE,
)
from gitree.formatters.options import RenderOptions
from gitree.formatters.status import format_repository_annotation
from gitree.models import TreeNode


def render_tree(root: TreeNode, options: Optional[RenderOptions] = None) -> Text:
    """
    Render a tree as line-drawing text.

    Example (colors disabled):
        .
        ├── api [[ main | ↑2 ]]
        └── libs
            └── core [[ feature/x | ○ * ]]

    A tree without repositories renders as the single line ``no repositories found``.
    """
    options = options or RenderOptions()
    text = Text()

    if not root.children and root.repository is None:
        text.append(f"{NO_REPOSITORIES_MESSAGE}\n")
        return text

    if options.show_root:
        text.append(root.name)
        if root.repository is not None:
            text.append_text(format_repository_annotation(root.repository, options))
        text.append("\n")

    for index, child in enumerate(root.children):
        _render_node(text, child, "", index == len(root.children) - 1, options)

    return text


def _render_node(text: Text, node: TreeNode, prefix: str, is_last: bool, options: RenderOptions) -> None:
    text.append(prefix)
    text.append(CONNECTOR_LAST if is_last else CONNECTOR_MIDDLE)
    text.append(node.name)
    if node.repository is not None:
        text.append_text(format_repository_annotation(node.repository, options))
    text.append("\n")

    child_prefix = prefix + (PREFIX_BLANK if is_last else PREFIX_CONTINUE)
    for index, child in enumerate(node.children):
        _render_node(text, child, child_prefix, index == len(node.children) - 1, options)


def to_ansi(text: Text) -> str:
    """Render styled text to a string with ANSI escape codes."""
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        highlight=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def format_tree(root: TreeNode, options: Optional[RenderOptions] = None) -> str:
    """Render a tree to a string, with ANSI colors when ``options.color`` is set."""
    options = options or RenderOptions()
    text = render_tree(root, options)
    if options.color:
        return to_ansi(text)
    return text.plain

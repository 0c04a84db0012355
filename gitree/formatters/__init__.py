"""Formatting utilities for gitree.

- options: rendering options (color flag and category styles)
- status: bracketed status annotations
- tree: line-drawing tree output
"""

from .options import RenderOptions
from .status import (
    format_status,
    format_repository_annotation,
    get_branch_style_type,
    status_markers,
)
from .tree import render_tree, format_tree, to_ansi

__all__ = [
    "RenderOptions",
    "format_status",
    "format_repository_annotation",
    "get_branch_style_type",
    "status_markers",
    "render_tree",
    "format_tree",
    "to_ansi",
]

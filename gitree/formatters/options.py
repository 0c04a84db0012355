"""Rendering options."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from gitree.constants import DEFAULT_STYLES


@dataclass
class RenderOptions:
    """How a tree is rendered.

    ``styles`` maps a StyleCategory to a Rich style; it is only consulted when
    ``color`` is on, so both modes produce the same characters.
    """
    color: bool = False
    styles: Dict[str, Optional[str]] = field(default_factory=lambda: dict(DEFAULT_STYLES))
    show_root: bool = True

    def style(self, category: str) -> Optional[str]:
        if not self.color:
            return None
        return self.styles.get(category)

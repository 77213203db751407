"""Alignment and positioning utilities.

Shared by every element renderer so left/center/right placement and the
matching SVG text anchors stay consistent across element types.
"""

from dataclasses import dataclass
from typing import Any, Optional

ALIGNMENT_MAP = {
    'left': 'left',
    'start': 'left',
    'center': 'center',
    'centre': 'center',  # British spelling
    'middle': 'center',
    'right': 'right',
    'end': 'right',
}

TEXT_ANCHORS = {'left': 'start', 'center': 'middle', 'right': 'end'}


def normalize_alignment(align: Any, default: str = 'center') -> str:
    """Normalize a horizontal alignment value to left/center/right."""
    if not isinstance(align, str) or not align.strip():
        return default
    return ALIGNMENT_MAP.get(align.strip().lower(), default)


@dataclass
class HorizontalPlacement:
    """Resolved horizontal placement of a box of a given width on a screen."""

    align: str
    x: float
    width: float

    @property
    def text_anchor(self) -> str:
        return TEXT_ANCHORS[self.align]

    @property
    def anchor_x(self) -> float:
        """x coordinate of the text anchor inside the box."""
        if self.align == 'center':
            return self.x + self.width / 2
        if self.align == 'right':
            return self.x + self.width
        return self.x


def aligned_x(align: str, width: float, screen_width: float, margin: float) -> float:
    if align == 'left':
        return margin
    if align == 'right':
        return screen_width - margin - width
    return (screen_width - width) / 2


def place_horizontally(
    align: Optional[str],
    width: float,
    screen_width: float,
    margin: float,
    default: str = 'center',
) -> HorizontalPlacement:
    a = normalize_alignment(align, default)
    return HorizontalPlacement(align=a, x=aligned_x(a, width, screen_width, margin), width=width)

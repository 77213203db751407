"""Layout calculation: configuration, property reading, text wrapping, cursor."""

import math
import re
from dataclasses import dataclass
from typing import List, Optional

from ..parser import Element, coerce_value
from ..utils.alignment import HorizontalPlacement, place_horizontally

DOCKED_KINDS = ('appbar', 'bottomnavigationbar', 'floatingactionbutton')


@dataclass(frozen=True)
class RenderConfig:
    """Geometry and colour defaults for the SVG renderer."""

    element_height: float = 40
    element_spacing: float = 10
    side_margin: float = 16
    corner_radius: float = 4
    font_family: str = 'Arial, sans-serif'
    font_size: float = 14
    text_color: str = '#212529'
    muted_color: str = '#6c757d'
    border_color: str = '#ced4da'
    accent_color: str = '#007bff'
    title_height: float = 50
    show_title: bool = False
    appbar_height: float = 56
    appbar_color: str = '#2196F3'
    bottom_nav_height: float = 56
    bottom_nav_color: str = '#f8f9fa'
    button_color: str = '#007bff'
    button_max_width: float = 200
    fab_size: float = 56
    fab_margin: float = 16
    fab_color: str = '#FF4081'
    image_width: float = 200
    image_height: float = 150
    margin_height: float = 20
    placeholder_color: str = '#f0f0f0'
    char_width_factor: float = 0.6
    line_height_factor: float = 1.2


DEFAULT_RENDER = RenderConfig()


def prop_number(el: Element, key: str, default: Optional[float]) -> Optional[float]:
    """Numeric property value, or default when missing or not a number."""
    value = el.properties.get(key)
    if isinstance(value, str):
        value = coerce_value(re.sub(r'px$', '', value.strip()))
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value


def prop_bool(el: Element, key: str, default: bool = False) -> bool:
    value = el.properties.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ('true', 'yes', '1', 'on'):
            return True
        if s in ('false', 'no', '0', 'off'):
            return False
    if isinstance(value, (int, float)):
        return value != 0
    return default


def prop_str(el: Element, key: str, default: Optional[str] = None) -> Optional[str]:
    value = el.properties.get(key)
    if value is None or isinstance(value, bool):
        return default
    s = str(value)
    return s if s != '' else default


def label_digits(label: str) -> Optional[int]:
    """Number made of the digits in a label ('24px' -> 24), None if none."""
    digits = re.sub(r'[^0-9]', '', label or '')
    return int(digits) if digits else None


def estimate_text_width(text: str, font_size: float, factor: float = 0.6) -> float:
    return len(text) * font_size * factor


def wrap_text(text: str, max_width: float, font_size: float, factor: float = 0.6) -> List[str]:
    """Greedy word wrap by estimated width (character count x average glyph width).

    A word is never split; an over-long single word occupies its own line.
    """
    words = [w for w in (text or '').split(' ') if w != '']
    lines: List[str] = []
    current = ''
    for word in words:
        candidate = f"{current} {word}" if current else word
        if estimate_text_width(candidate, font_size, factor) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


@dataclass
class Placement:
    """Box computed for one regular element.

    y is the drawing origin (cursor + padding); height is the drawn height;
    next_y is where the cursor continues afterwards.
    """

    x: float
    y: float
    width: float
    height: float
    next_y: float


@dataclass
class ElementContext:
    """Everything a per-type renderer needs besides the element itself."""

    element: Element
    y: float
    screen_width: float
    screen_height: float
    config: RenderConfig
    index: int = 0

    def padding(self) -> float:
        return prop_number(self.element, 'padding', 0) or 0

    def padded_y(self) -> float:
        return self.y + self.padding()

    def content_width(self) -> float:
        return self.screen_width - 2 * self.config.side_margin

    def horizontal(self, width: float, default_align: str = 'center') -> HorizontalPlacement:
        return place_horizontally(
            self.element.properties.get('align'),
            width,
            self.screen_width,
            self.config.side_margin,
            default_align,
        )


class LayoutCursor:
    """Running vertical offset threaded through the regular elements."""

    def __init__(self, start_y: float):
        self.start_y = start_y
        self.y = start_y

    def advance_to(self, next_y: float):
        self.y = next_y


def content_start_y(config: RenderConfig, has_appbar: bool, show_title: bool) -> float:
    """First y of the flowing content, below the title band and app bar."""
    y = config.title_height if show_title else 0
    if has_appbar:
        y += config.appbar_height
    return y + config.side_margin


def split_docked(elements: List[Element]):
    """Return (appbar, bottom_nav, fab, regular) from a top-level sequence.

    Only the first element of each docked kind is kept; further ones are
    dropped from both the docked slots and the regular flow.
    """
    docked = {k: None for k in DOCKED_KINDS}
    regular = []
    for el in elements:
        kind = el.kind
        if kind in docked:
            if docked[kind] is None:
                docked[kind] = el
            continue
        regular.append(el)
    return (
        docked['appbar'],
        docked['bottomnavigationbar'],
        docked['floatingactionbutton'],
        regular,
    )

"""Core generation module - main entry point for SVG screen rendering.

render_screen turns one parsed Screen into a self-contained SVG document.
Docked elements (app bar, bottom navigation bar, floating action button) are
pulled out of the top-level sequence first; everything else flows down a
single vertical cursor. The docked elements are painted last so they sit on
top of any overflowing content.
"""

import math
import warnings
from dataclasses import dataclass, field
from typing import List, Optional

from ..icons import IconCatalog
from ..parser import Screen
from ..utils.svg_helpers import svg_document, svg_rect, svg_text, escape_svg_text
from .elements import (
    ElementRenderer,
    ImageSlot,
    render_appbar,
    render_bottom_navigation_bar,
    render_floating_action_button,
)
from .layout import (
    DEFAULT_RENDER,
    ElementContext,
    LayoutCursor,
    RenderConfig,
    content_start_y,
    split_docked,
)


@dataclass
class RenderedScreen:
    """Result of the synchronous render: SVG text plus remote image slots."""

    svg: str
    width: float
    height: float
    images: List[ImageSlot] = field(default_factory=list)


def _normalize_scale(scale) -> float:
    try:
        value = float(scale)
    except (TypeError, ValueError):
        value = float('nan')
    if not math.isfinite(value) or value <= 0:
        warnings.warn(f"Invalid scale {scale!r}; using 1", UserWarning)
        return 1.0
    return value


def _render_title_band(screen: Screen, cfg: RenderConfig) -> str:
    return svg_rect(0, 0, screen.width, cfg.title_height, fill=cfg.bottom_nav_color) + svg_text(
        screen.title,
        screen.width / 2,
        cfg.title_height / 2,
        font_family=cfg.font_family,
        font_size=18,
        font_weight='bold',
        fill=cfg.text_color,
        text_anchor='middle',
        dominant_baseline='middle',
    )


def render_screen(
    screen: Screen,
    scale: float = 1.0,
    config: Optional[RenderConfig] = None,
    icons: Optional[IconCatalog] = None,
) -> RenderedScreen:
    """Render a Screen to SVG.

    The viewBox stays in logical screen units; scale only multiplies the
    outer width/height attributes.
    """
    cfg = config or DEFAULT_RENDER
    scale = _normalize_scale(scale)
    width, height = screen.width, screen.height

    appbar, bottom_nav, fab, regular = split_docked(screen.elements)

    parts = [svg_rect(0, 0, width, height, fill=screen.background_color)]
    if screen.title:
        parts.append(f"<title>{escape_svg_text(screen.title)}</title>")
    if cfg.show_title and screen.title:
        parts.append(_render_title_band(screen, cfg))

    renderer = ElementRenderer()
    cursor = LayoutCursor(content_start_y(cfg, appbar is not None, cfg.show_title and bool(screen.title)))
    images: List[ImageSlot] = []
    for index, el in enumerate(regular):
        ctx = ElementContext(el, cursor.y, width, height, cfg, index=index)
        rendered = renderer.render_element(ctx)
        if rendered.svg:
            parts.append(rendered.svg)
        if rendered.image_slot is not None:
            images.append(rendered.image_slot)
        cursor.advance_to(rendered.placement.next_y)

    if appbar is not None:
        appbar_y = cfg.title_height if cfg.show_title and screen.title else 0
        parts.append(render_appbar(appbar, appbar_y, width, cfg, icons))
    if bottom_nav is not None:
        parts.append(render_bottom_navigation_bar(bottom_nav, width, height, cfg, icons))
    if fab is not None:
        parts.append(render_floating_action_button(fab, width, height, bottom_nav is not None, cfg))

    svg = svg_document(width * scale, height * scale, width, height, ''.join(parts))
    return RenderedScreen(svg=svg, width=width * scale, height=height * scale, images=images)


def render_screen_svg(
    screen: Screen,
    scale: float = 1.0,
    config: Optional[RenderConfig] = None,
    icons: Optional[IconCatalog] = None,
) -> str:
    return render_screen(screen, scale, config, icons).svg

"""Generation package for SVG screen rendering.

This package handles the conversion from parsed screens to SVG:
- core: Main render_screen entry point and orchestration
- layout: Render configuration, property reading, text wrapping, cursor
- elements: Element-specific rendering (text, inputs, images, docked bars)
- enrichment: Optional asynchronous image fetching and SVG patching
"""

from .core import RenderedScreen, render_screen, render_screen_svg
from .layout import (
    DEFAULT_RENDER,
    LayoutCursor,
    RenderConfig,
    split_docked,
    wrap_text,
)
from .elements import (
    ElementRenderer,
    ImageSlot,
    render_appbar,
    render_bottom_navigation_bar,
    render_floating_action_button,
    render_image_element,
    render_text_element,
)
from .enrichment import apply_image_patch, enrich_images, enrich_svg

__all__ = [
    # Core functionality
    'RenderedScreen',
    'render_screen',
    'render_screen_svg',
    # Layout processing
    'DEFAULT_RENDER',
    'LayoutCursor',
    'RenderConfig',
    'split_docked',
    'wrap_text',
    # Element rendering
    'ElementRenderer',
    'ImageSlot',
    'render_appbar',
    'render_bottom_navigation_bar',
    'render_floating_action_button',
    'render_image_element',
    'render_text_element',
    # Image enrichment
    'apply_image_patch',
    'enrich_images',
    'enrich_svg',
]

"""Markdown-level rendering: SLML blocks in, SVG out."""

from typing import List, Optional

from .generation.core import RenderedScreen, render_screen
from .generation.enrichment import enrich_svg
from .generation.layout import RenderConfig
from .icons import IconCatalog
from .markdown import DEFAULT_LANGUAGE_TAG, extract_blocks, substitute_blocks
from .parser import ScreenDefaults, parse_slml


def render_block(
    text: str,
    scale: float = 1.0,
    config: Optional[RenderConfig] = None,
    icons: Optional[IconCatalog] = None,
    defaults: Optional[ScreenDefaults] = None,
) -> RenderedScreen:
    return render_screen(parse_slml(text, defaults), scale, config, icons)


def _block_svg(text: str, scale, config, icons, defaults, enrich: bool) -> str:
    rendered = render_block(text, scale, config, icons, defaults)
    if enrich and rendered.images:
        return enrich_svg(rendered.svg, rendered.images)
    return rendered.svg


def render_markdown(
    markdown: str,
    scale: float = 1.0,
    config: Optional[RenderConfig] = None,
    icons: Optional[IconCatalog] = None,
    tag: str = DEFAULT_LANGUAGE_TAG,
    defaults: Optional[ScreenDefaults] = None,
    enrich: bool = False,
) -> List[str]:
    """Render every SLML block of a document to an SVG string, in order."""
    return [
        _block_svg(block, scale, config, icons, defaults, enrich)
        for block in extract_blocks(markdown, tag)
    ]


def replace_slml_with_svg(
    markdown: str,
    scale: float = 1.0,
    config: Optional[RenderConfig] = None,
    icons: Optional[IconCatalog] = None,
    tag: str = DEFAULT_LANGUAGE_TAG,
    defaults: Optional[ScreenDefaults] = None,
    enrich: bool = False,
) -> str:
    """Replace each fenced SLML block with its rendered SVG.

    Text outside the fenced blocks is returned byte-for-byte unchanged.
    """
    return substitute_blocks(
        markdown,
        lambda block: _block_svg(block, scale, config, icons, defaults, enrich),
        tag,
    )

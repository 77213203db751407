"""Element rendering utilities for the screenmaker SVG renderer."""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..icons import IconCatalog, create_icon_svg, is_icon_name
from ..parser import Element
from ..utils.svg_helpers import (
    svg_circle,
    svg_group,
    svg_image,
    svg_line,
    svg_polyline,
    svg_rect,
    svg_text,
)
from .layout import (
    ElementContext,
    Placement,
    RenderConfig,
    estimate_text_width,
    label_digits,
    prop_bool,
    prop_number,
    prop_str,
    wrap_text,
)

IMAGE_GLYPH = '\U0001f5bc\ufe0f'
IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.svg', '.gif')
CHECKBOX_SIZE = 20
CHECKBOX_GAP = 10
ICON_SIZE = 24


@dataclass
class ImageSlot:
    """A remote image whose placeholder group may later be replaced."""

    id: str
    url: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class RenderedElement:
    svg: str
    placement: Placement
    image_slot: Optional[ImageSlot] = None


def is_remote_url(value) -> bool:
    return isinstance(value, str) and value.startswith(('http://', 'https://'))


def _positive(value: Optional[float], default: float) -> float:
    if value is None or value <= 0:
        return default
    return value


def _text_attrs(cfg: RenderConfig, size=None, fill=None, anchor=None, weight=None) -> dict:
    return {
        'font_family': cfg.font_family,
        'font_size': size if size is not None else cfg.font_size,
        'fill': fill or cfg.text_color,
        'text_anchor': anchor,
        'dominant_baseline': 'middle',
        'font_weight': weight,
    }


def render_text_element(ctx: ElementContext) -> RenderedElement:
    """Word-wrapped text; height is lines x fontSize x 1.2."""
    el, cfg = ctx.element, ctx.config
    content = prop_str(el, 'content', el.label) or ''
    width = _positive(prop_number(el, 'width', None), ctx.content_width())
    font_size = _positive(prop_number(el, 'fontSize', None), cfg.font_size)
    color = prop_str(el, 'color', cfg.text_color)
    weight = prop_str(el, 'fontWeight')
    h = ctx.horizontal(width)
    y = ctx.padded_y()

    lines = wrap_text(content, width, font_size, cfg.char_width_factor)
    line_height = font_size * cfg.line_height_factor
    parts = [
        svg_text(
            line,
            h.anchor_x,
            y + (i + 0.5) * line_height,
            **_text_attrs(cfg, font_size, color, h.text_anchor, weight),
        )
        for i, line in enumerate(lines)
    ]
    height = len(lines) * line_height
    return RenderedElement(
        ''.join(parts), Placement(h.x, y, width, height, y + height + cfg.element_spacing)
    )


def render_input_element(ctx: ElementContext) -> RenderedElement:
    el, cfg = ctx.element, ctx.config
    width = _positive(prop_number(el, 'width', None), ctx.content_width())
    fill = prop_str(el, 'backgroundColor', '#ffffff')
    text = el.label or prop_str(el, 'placeholder', '')
    h = ctx.horizontal(width)
    y = ctx.padded_y()
    eh = cfg.element_height
    svg = svg_rect(
        h.x, y, width, eh, fill=fill, stroke=cfg.border_color, rx=cfg.corner_radius
    ) + svg_text(text, h.x + 10, y + eh / 2, **_text_attrs(cfg, fill=cfg.muted_color))
    return RenderedElement(svg, Placement(h.x, y, width, eh, y + eh + cfg.element_spacing))


def render_button_element(ctx: ElementContext) -> RenderedElement:
    el, cfg = ctx.element, ctx.config
    width = _positive(
        prop_number(el, 'width', None), min(cfg.button_max_width, ctx.content_width())
    )
    fill = prop_str(el, 'backgroundColor', cfg.button_color)
    color = prop_str(el, 'color', 'white')
    h = ctx.horizontal(width)
    y = ctx.padded_y()
    eh = cfg.element_height
    svg = svg_rect(h.x, y, width, eh, fill=fill, rx=cfg.corner_radius) + svg_text(
        el.label, h.x + width / 2, y + eh / 2, **_text_attrs(cfg, fill=color, anchor='middle')
    )
    return RenderedElement(svg, Placement(h.x, y, width, eh, y + eh + cfg.element_spacing))


def render_checkbox_element(ctx: ElementContext) -> RenderedElement:
    """Checkbox square plus label, the pair aligned as one unit."""
    el, cfg = ctx.element, ctx.config
    label_width = estimate_text_width(el.label, cfg.font_size, cfg.char_width_factor)
    total_width = CHECKBOX_SIZE + CHECKBOX_GAP + label_width
    h = ctx.horizontal(total_width)
    y = ctx.padded_y()
    eh = cfg.element_height
    box_x = h.x
    box_y = y + (eh - CHECKBOX_SIZE) / 2
    parts = [
        svg_rect(
            box_x,
            box_y,
            CHECKBOX_SIZE,
            CHECKBOX_SIZE,
            fill=prop_str(el, 'backgroundColor', 'white'),
            stroke=cfg.border_color,
            rx=2,
        )
    ]
    if prop_bool(el, 'checked'):
        parts.append(
            svg_polyline(
                [
                    (box_x + 4, box_y + CHECKBOX_SIZE / 2),
                    (box_x + CHECKBOX_SIZE / 3, box_y + CHECKBOX_SIZE - 4),
                    (box_x + CHECKBOX_SIZE - 4, box_y + 4),
                ],
                stroke=cfg.accent_color,
                stroke_width=2,
                fill='none',
            )
        )
    parts.append(
        svg_text(el.label, box_x + CHECKBOX_SIZE + CHECKBOX_GAP, y + eh / 2, **_text_attrs(cfg))
    )
    return RenderedElement(
        ''.join(parts), Placement(h.x, y, total_width, eh, y + eh + cfg.element_spacing)
    )


def render_link_element(ctx: ElementContext) -> RenderedElement:
    el, cfg = ctx.element, ctx.config
    width = _positive(prop_number(el, 'width', None), ctx.content_width())
    color = prop_str(el, 'color', cfg.accent_color)
    h = ctx.horizontal(width)
    y = ctx.padded_y()
    eh = cfg.element_height
    text_x = h.anchor_x
    text_width = estimate_text_width(el.label, cfg.font_size, cfg.char_width_factor)
    if h.align == 'center':
        start = text_x - text_width / 2
    elif h.align == 'right':
        start = text_x - text_width
    else:
        start = text_x
    parts = []
    bg = prop_str(el, 'backgroundColor')
    if bg:
        parts.append(svg_rect(h.x, y, width, eh, fill=bg, rx=cfg.corner_radius))
    parts.append(
        svg_text(el.label, text_x, y + eh / 2, **_text_attrs(cfg, fill=color, anchor=h.text_anchor))
    )
    underline_y = y + eh / 2 + cfg.font_size / 2
    parts.append(svg_line(start, underline_y, start + text_width, underline_y, stroke=color, stroke_width=1))
    return RenderedElement(
        ''.join(parts), Placement(h.x, y, width, eh, y + eh + cfg.element_spacing)
    )


def render_image_element(ctx: ElementContext) -> RenderedElement:
    """Placeholder box; remote URLs also get an ImageSlot for later enrichment."""
    el, cfg = ctx.element, ctx.config
    url = prop_str(el, 'url', el.label)
    width = _positive(prop_number(el, 'width', None), cfg.image_width)
    height = _positive(prop_number(el, 'height', None), cfg.image_height)
    h = ctx.horizontal(width)
    y = ctx.padded_y()
    placeholder = (
        svg_rect(
            h.x,
            y,
            width,
            height,
            fill=prop_str(el, 'backgroundColor', '#f8f9fa'),
            stroke=cfg.border_color,
            rx=cfg.corner_radius,
        )
        + svg_text(
            IMAGE_GLYPH,
            h.x + width / 2,
            y + height / 2 - 15,
            **_text_attrs(cfg, size=24, fill=cfg.muted_color, anchor='middle'),
        )
        + svg_text(
            'Image',
            h.x + width / 2,
            y + height / 2 + 15,
            **_text_attrs(cfg, fill=cfg.muted_color, anchor='middle'),
        )
    )
    placement = Placement(h.x, y, width, height, y + height + cfg.element_spacing)
    if is_remote_url(url):
        slot = ImageSlot(f"slml-image-{ctx.index}", url, h.x, y, width, height)
        return RenderedElement(svg_group(placeholder, id=slot.id), placement, slot)
    return RenderedElement(placeholder, placement)


def render_margin_element(ctx: ElementContext) -> RenderedElement:
    """Blank vertical space; painted only when a backgroundColor is set."""
    el, cfg = ctx.element, ctx.config
    height = prop_number(el, 'height', None)
    if height is None or height < 0:
        height = label_digits(el.label)
    if height is None:
        height = cfg.margin_height
    width = _positive(prop_number(el, 'width', None), ctx.screen_width)
    y = ctx.padded_y()
    h = ctx.horizontal(width)
    bg = prop_str(el, 'backgroundColor')
    svg = svg_rect(h.x, y, width, height, fill=bg) if bg else ''
    return RenderedElement(svg, Placement(h.x, y, width, height, y + height))


def render_generic_element(ctx: ElementContext) -> RenderedElement:
    """Placeholder for element types the renderer does not know."""
    el, cfg = ctx.element, ctx.config
    width = _positive(prop_number(el, 'width', None), ctx.content_width())
    h = ctx.horizontal(width)
    y = ctx.padded_y()
    eh = cfg.element_height
    fill = prop_str(el, 'backgroundColor', cfg.placeholder_color)
    svg = svg_rect(h.x, y, width, eh, fill=fill, rx=cfg.corner_radius) + svg_text(
        f"{el.type}: {el.label}",
        h.x + width / 2,
        y + eh / 2,
        **_text_attrs(cfg, anchor='middle'),
    )
    return RenderedElement(svg, Placement(h.x, y, width, eh, y + eh + cfg.element_spacing))


ELEMENT_RENDERERS: Dict[str, Callable[[ElementContext], RenderedElement]] = {
    'text': render_text_element,
    'input': render_input_element,
    'button': render_button_element,
    'checkbox': render_checkbox_element,
    'link': render_link_element,
    'image': render_image_element,
    'margin': render_margin_element,
}


class ElementRenderer:
    """Renders regular (flowing) elements to SVG by element kind."""

    def __init__(self, renderers: Optional[Dict[str, Callable]] = None):
        self.renderers = dict(ELEMENT_RENDERERS if renderers is None else renderers)

    def render_element(self, ctx: ElementContext) -> RenderedElement:
        render = self.renderers.get(ctx.element.kind, render_generic_element)
        rendered = render(ctx)
        if rendered.svg:
            rendered.svg = svg_group(rendered.svg, class_=f"slml-{ctx.element.kind}")
        return rendered


def render_appbar(
    el: Element,
    y: float,
    screen_width: float,
    cfg: RenderConfig,
    icons: Optional[IconCatalog] = None,
) -> str:
    """Full-width bar pinned at y with optional back button and action icons."""
    height = cfg.appbar_height
    mid_y = y + height / 2
    fg = prop_str(el, 'color', 'white')
    show_back = prop_bool(el, 'showBackButton')
    center_title = prop_bool(el, 'centerTitle')
    parts = [svg_rect(0, y, screen_width, height, fill=prop_str(el, 'backgroundColor', cfg.appbar_color))]
    if show_back:
        parts.append(create_icon_svg('mdiArrowLeft', 24, mid_y, ICON_SIZE, fg, icons))

    if center_title:
        title_x, anchor = screen_width / 2, 'middle'
    else:
        title_x, anchor = (56 if show_back else cfg.side_margin), 'start'
    parts.append(
        svg_text(
            prop_str(el, 'title', el.label) or '',
            title_x,
            mid_y,
            **_text_attrs(cfg, size=20, fill=fg, anchor=anchor),
        )
    )

    raw_icons = prop_str(el, 'actionIcons', '') or ''
    action_icons = [a.strip() for a in raw_icons.split('|') if a.strip()]
    for i, icon in enumerate(action_icons):
        icon_x = screen_width - cfg.side_margin - ICON_SIZE / 2 - (len(action_icons) - i - 1) * 40
        if is_icon_name(icon):
            parts.append(create_icon_svg(icon, icon_x, mid_y, ICON_SIZE, fg, icons))
        else:
            parts.append(
                svg_text(icon, icon_x, mid_y, **_text_attrs(cfg, size=ICON_SIZE, fill=fg, anchor='middle'))
            )
    return svg_group(''.join(parts), class_='slml-appbar')


def _is_image_icon(icon: str) -> bool:
    return icon.startswith('http') or icon.lower().endswith(IMAGE_EXTENSIONS)


def render_bottom_navigation_bar(
    el: Element,
    screen_width: float,
    screen_height: float,
    cfg: RenderConfig,
    icons: Optional[IconCatalog] = None,
) -> str:
    """Full-width bar pinned to the bottom; children become equal columns."""
    height = cfg.bottom_nav_height
    y = screen_height - height
    mid_y = y + height / 2
    parts = [
        svg_rect(0, y, screen_width, height, fill=prop_str(el, 'backgroundColor', cfg.bottom_nav_color)),
        svg_line(0, y, screen_width, y, stroke=cfg.border_color, stroke_width=1),
    ]
    items = el.children or []
    if not items:
        parts.append(
            svg_text(el.label, screen_width / 2, mid_y, **_text_attrs(cfg, anchor='middle'))
        )
    else:
        item_width = screen_width / len(items)
        for i, item in enumerate(items):
            cx = i * item_width + item_width / 2
            active = prop_bool(item, 'active')
            color = cfg.accent_color if active else cfg.muted_color
            icon = prop_str(item, 'icon', '') or ''
            if is_icon_name(icon):
                parts.append(create_icon_svg(icon, cx, mid_y - 10, ICON_SIZE, color, icons))
            elif _is_image_icon(icon):
                parts.append(
                    svg_image(icon, cx - ICON_SIZE / 2, mid_y - 10 - ICON_SIZE / 2, ICON_SIZE, ICON_SIZE)
                )
            elif icon:
                parts.append(
                    svg_text(icon, cx, mid_y - 10, **_text_attrs(cfg, size=20, fill=color, anchor='middle'))
                )
            parts.append(
                svg_text(
                    item.label,
                    cx,
                    mid_y + 15,
                    **_text_attrs(
                        cfg, size=12, fill=color, anchor='middle', weight='bold' if active else None
                    ),
                )
            )
    return svg_group(''.join(parts), class_='slml-bottomnavigationbar')


def render_floating_action_button(
    el: Element,
    screen_width: float,
    screen_height: float,
    has_bottom_nav: bool,
    cfg: RenderConfig,
) -> str:
    """Circle near the bottom edge, lifted above the bottom navigation bar."""
    size = cfg.fab_size
    ctx = ElementContext(el, 0, screen_width, screen_height, cfg)
    x = ctx.horizontal(size, default_align='right').x
    y = screen_height - size - cfg.fab_margin
    if has_bottom_nav:
        y -= cfg.bottom_nav_height
    cx, cy = x + size / 2, y + size / 2
    svg = svg_circle(cx, cy, size / 2, fill=prop_str(el, 'backgroundColor', cfg.fab_color)) + svg_text(
        el.label, cx, cy, **_text_attrs(cfg, size=24, fill=prop_str(el, 'color', 'white'), anchor='middle')
    )
    return svg_group(svg, class_='slml-floatingactionbutton')

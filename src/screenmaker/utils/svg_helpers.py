"""SVG markup generation utilities."""

import html
from typing import Any, Optional


def escape_svg_text(text: Any) -> str:
    """Escape text for safe inclusion in SVG character data or attributes."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def fmt_num(val: Any) -> str:
    """Format a coordinate removing trailing zeros (180.0 -> '180')."""
    try:
        return (f"{float(val):.6f}").rstrip('0').rstrip('.')
    except (TypeError, ValueError):
        return "0"


def _attr_name(key: str) -> str:
    # font_family -> font-family; trailing underscore allows reserved words (class_)
    return key.rstrip('_').replace('_', '-')


def build_attrs(**kwargs) -> str:
    """Build an SVG attribute string.

    Numbers are formatted with fmt_num, strings escaped, None values skipped.
    Keyword names map underscores to dashes.
    """
    args = []
    for key, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif isinstance(value, (int, float)):
            value = fmt_num(value)
        else:
            value = escape_svg_text(value)
        args.append(f'{_attr_name(key)}="{value}"')
    return ' '.join(args)


def svg_rect(x, y, width, height, fill: Optional[str] = None, **kwargs) -> str:
    return f"<rect {build_attrs(x=x, y=y, width=width, height=height, fill=fill, **kwargs)} />"


def svg_text(content: Any, x, y, **kwargs) -> str:
    return f"<text {build_attrs(x=x, y=y, **kwargs)}>{escape_svg_text(content)}</text>"


def svg_line(x1, y1, x2, y2, **kwargs) -> str:
    return f"<line {build_attrs(x1=x1, y1=y1, x2=x2, y2=y2, **kwargs)} />"


def svg_circle(cx, cy, r, **kwargs) -> str:
    return f"<circle {build_attrs(cx=cx, cy=cy, r=r, **kwargs)} />"


def svg_polyline(points, **kwargs) -> str:
    pts = ' '.join(f"{fmt_num(px)},{fmt_num(py)}" for px, py in points)
    return f"<polyline {build_attrs(points=pts, **kwargs)} />"


def svg_image(href: str, x, y, width, height, **kwargs) -> str:
    return f"<image {build_attrs(href=href, x=x, y=y, width=width, height=height, **kwargs)} />"


def svg_group(content: str, **kwargs) -> str:
    attrs = build_attrs(**kwargs)
    return f"<g {attrs}>{content}</g>" if attrs else f"<g>{content}</g>"


def svg_document(width, height, view_width, view_height, content: str) -> str:
    """Wrap content in the root <svg> element.

    width/height are the outer (possibly scaled) pixel size; the viewBox keeps
    the logical coordinate space.
    """
    attrs = build_attrs(
        width=width,
        height=height,
        viewBox=f"0 0 {fmt_num(view_width)} {fmt_num(view_height)}",
        xmlns="http://www.w3.org/2000/svg",
    )
    return f"<svg {attrs}>{content}</svg>"

"""Shared utilities for screenmaker.

This package contains common functionality used across multiple modules:
- alignment: Horizontal placement and text anchors
- file_ops: Export directory and output path handling
- svg_helpers: SVG markup generation helpers
"""

from .alignment import (
    HorizontalPlacement,
    aligned_x,
    normalize_alignment,
    place_horizontally,
)
from .file_ops import (
    ensure_export_dir,
    resolve_output_path,
    screen_svg_filename,
    slugify,
    write_text,
)
from .svg_helpers import (
    build_attrs,
    escape_svg_text,
    fmt_num,
    svg_circle,
    svg_document,
    svg_group,
    svg_image,
    svg_line,
    svg_polyline,
    svg_rect,
    svg_text,
)

__all__ = [
    # Alignment utilities
    'HorizontalPlacement',
    'aligned_x',
    'normalize_alignment',
    'place_horizontally',
    # File operations
    'ensure_export_dir',
    'resolve_output_path',
    'screen_svg_filename',
    'slugify',
    'write_text',
    # SVG helpers
    'build_attrs',
    'escape_svg_text',
    'fmt_num',
    'svg_circle',
    'svg_document',
    'svg_group',
    'svg_image',
    'svg_line',
    'svg_polyline',
    'svg_rect',
    'svg_text',
]

"""File operations and path handling utilities."""

import pathlib
import re
from typing import Union


def ensure_export_dir(export_dir: Union[str, pathlib.Path]) -> pathlib.Path:
    """Ensure export directory exists and return Path object."""
    export_path = pathlib.Path(export_dir)
    export_path.mkdir(parents=True, exist_ok=True)
    return export_path


def resolve_output_path(
    name: Union[str, pathlib.Path], export_dir: Union[str, pathlib.Path]
) -> pathlib.Path:
    """Place relative output names inside export_dir; keep absolute paths."""
    path = pathlib.Path(name)
    if path.is_absolute():
        return path
    return pathlib.Path(export_dir) / path


def write_text(path: pathlib.Path, data: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding='utf-8')


def slugify(s: str) -> str:
    s = (s or '').lower()
    s = re.sub(r'[^a-z0-9]+', '-', s)
    s = s.strip('-')
    return s or 'screen'


def screen_svg_filename(index: int, title: str) -> str:
    """File name for the index-th (1-based) screen of a document."""
    return f"screen-{index}-{slugify(title)}.svg"

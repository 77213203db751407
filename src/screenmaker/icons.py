"""Material Design Icons lookup.

Icons are referenced in SLML by name (``mdiHome``, ``mdiArrowLeft`` ...).
An IconCatalog maps those names to SVG path data; it can be built from a
JSON map, from the text of the ``@mdi/js`` module, or downloaded from the
jsDelivr CDN (cached on disk for 24 hours). When a name is not in the
catalog the renderer draws a visible ``[name]`` text placeholder instead.
"""

import json
import logging
import pathlib
import re
import time
import urllib.request
from typing import Dict, Iterable, Iterator, Mapping, Optional, Union

from .utils.svg_helpers import build_attrs, escape_svg_text

logger = logging.getLogger(__name__)

ICON_PREFIX = 'mdi'
MDI_JS_URL = 'https://cdn.jsdelivr.net/npm/@mdi/js@7.4.47/dist/mdi.js'
CACHE_MAX_AGE_SECONDS = 86400  # 24 hours
PLACEHOLDER_FONT_FAMILY = 'Arial, sans-serif'

MDI_EXPORT_RE = re.compile(r'export\s+(?:var|const|let)\s+(mdi\w+)\s*=\s*"([^"]*)"')

SUPPORTED_ICONS = (
    'mdiAccountCircle',
    'mdiCheckDecagram',
    'mdiEmail',
    'mdiMenu',
    'mdiDotsVertical',
    'mdiMagnify',
    'mdiCog',
    'mdiAccount',
    'mdiHelpCircle',
    'mdiPencil',
    'mdiStar',
    'mdiArrowLeft',
    'mdiHome',
    'mdiCalendar',
    'mdiCamera',
    'mdiDelete',
    'mdiDownload',
    'mdiUpload',
    'mdiFavorite',
    'mdiHeart',
    'mdiInformation',
    'mdiLock',
    'mdiMap',
    'mdiMessage',
    'mdiNotification',
    'mdiPhone',
    'mdiPlus',
    'mdiRefresh',
    'mdiSave',
    'mdiSend',
    'mdiSettings',
    'mdiShare',
    'mdiShoppingCart',
    'mdiThumbUp',
    'mdiThumbDown',
    'mdiTrash',
    'mdiWarning',
)


def is_icon_name(value) -> bool:
    """True when value follows the icon naming convention (mdi prefix)."""
    return isinstance(value, str) and value.startswith(ICON_PREFIX) and len(value) > len(ICON_PREFIX)


class IconCatalog:
    """Read-only mapping of icon name -> SVG path data."""

    def __init__(self, paths: Optional[Mapping[str, str]] = None):
        self._paths: Dict[str, str] = {
            k: v for k, v in (paths or {}).items() if isinstance(v, str) and v
        }

    def get_path(self, name: str) -> Optional[str]:
        return self._paths.get(name)

    def __contains__(self, name) -> bool:
        return name in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    @classmethod
    def from_mdi_js(cls, text: str, names: Optional[Iterable[str]] = SUPPORTED_ICONS) -> 'IconCatalog':
        """Build a catalog from the ``@mdi/js`` module source.

        names restricts the catalog to a subset; None keeps every export.
        """
        wanted = set(names) if names is not None else None
        paths = {}
        for m in MDI_EXPORT_RE.finditer(text or ''):
            if wanted is None or m.group(1) in wanted:
                paths[m.group(1)] = m.group(2)
        return cls(paths)

    @classmethod
    def from_json_file(cls, path: Union[str, pathlib.Path]) -> 'IconCatalog':
        data = json.loads(pathlib.Path(path).read_text(encoding='utf-8'))
        if not isinstance(data, dict):
            raise ValueError(f"Icon map must be a JSON object: {path}")
        return cls(data)

    @classmethod
    def load(cls, path: Union[str, pathlib.Path]) -> 'IconCatalog':
        """Load a catalog from a .json map or an mdi.js module file."""
        p = pathlib.Path(path)
        if p.suffix.lower() == '.json':
            return cls.from_json_file(p)
        return cls.from_mdi_js(p.read_text(encoding='utf-8'), names=None)


EMPTY_CATALOG = IconCatalog()


def create_icon_svg(
    name: str,
    x: float,
    y: float,
    size: float = 24,
    color: str = 'currentColor',
    catalog: Optional[IconCatalog] = None,
) -> str:
    """SVG for an icon centred on (x, y); a text placeholder when unknown."""
    path = (catalog or EMPTY_CATALOG).get_path(name)
    if path:
        attrs = build_attrs(
            xmlns='http://www.w3.org/2000/svg',
            viewBox='0 0 24 24',
            width=size,
            height=size,
            x=x - size / 2,
            y=y - size / 2,
            fill=color,
        )
        return f'<svg {attrs}><path d="{escape_svg_text(path)}" /></svg>'
    attrs = build_attrs(
        x=x,
        y=y,
        font_family=PLACEHOLDER_FONT_FAMILY,
        font_size=size / 2,
        fill=color,
        text_anchor='middle',
        dominant_baseline='middle',
    )
    return f"<text {attrs}>[{escape_svg_text(name)}]</text>"


def get_icon_cache_path() -> pathlib.Path:
    return pathlib.Path.home() / '.screenmaker' / 'cache' / 'mdi.js'


def fetch_mdi_catalog(
    url: str = MDI_JS_URL,
    cache_path: Optional[pathlib.Path] = None,
    timeout: float = 10,
    names: Optional[Iterable[str]] = SUPPORTED_ICONS,
) -> IconCatalog:
    """Download the @mdi/js module (or reuse a fresh cached copy).

    Failures are logged and yield an empty catalog, so rendering falls back
    to text placeholders.
    """
    cache_file = cache_path or get_icon_cache_path()

    if cache_file.exists():
        cache_age = time.time() - cache_file.stat().st_mtime
        if cache_age < CACHE_MAX_AGE_SECONDS:
            try:
                return IconCatalog.from_mdi_js(cache_file.read_text(encoding='utf-8'), names)
            except OSError as e:
                logger.warning("Could not read icon cache %s: %s", cache_file, e)

    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            text = response.read().decode('utf-8')
    except Exception as e:
        logger.warning("Failed to fetch Material Design Icons from %s: %s", url, e)
        return IconCatalog()

    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(text, encoding='utf-8')
    except OSError as e:
        logger.warning("Could not write icon cache %s: %s", cache_file, e)
    return IconCatalog.from_mdi_js(text, names)

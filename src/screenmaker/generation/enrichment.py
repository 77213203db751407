"""Optional image enrichment for rendered screens.

Rendering always emits placeholder boxes for images. For remote images the
renderer also records an ImageSlot; enrich_images fetches those URLs in the
background and returns a patch (slot id -> PNG data URL) that
apply_image_patch applies to a previously rendered SVG string. Nothing here
is needed for a complete render, and failures only ever keep the placeholder.
"""

import asyncio
import base64
import io
import logging
import re
import urllib.request
from typing import Callable, Dict, Iterable, Optional

from PIL import Image

from ..utils.svg_helpers import svg_image
from .elements import ImageSlot

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10
DEFAULT_CONCURRENCY = 4
USER_AGENT = 'screenmaker/1.0'

Fetcher = Callable[[str, float], bytes]


def fetch_url_bytes(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> bytes:
    req = urllib.request.Request(url, headers={'User-Agent': USER_AGENT})
    with urllib.request.urlopen(req, timeout=timeout) as response:
        return response.read()


def to_png_data_url(data: bytes) -> str:
    """Decode image bytes with Pillow and re-encode them as a PNG data URL."""
    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ('RGB', 'RGBA', 'L', 'LA', 'P'):
            img = img.convert('RGBA')
        buf = io.BytesIO()
        img.save(buf, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buf.getvalue()).decode('ascii')


async def enrich_images(
    slots: Iterable[ImageSlot],
    fetch: Optional[Fetcher] = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> Dict[str, str]:
    """Fetch every slot's URL and return {slot id: data URL} for the successes.

    Blocking fetch/decode work runs in worker threads. Cancelling the awaiting
    task cancels the whole enrichment; individual failures are logged and
    simply left out of the patch.
    """
    fetch = fetch or fetch_url_bytes
    slots = list(slots)
    sem = asyncio.Semaphore(max(1, concurrency))

    def _load(slot: ImageSlot) -> str:
        return to_png_data_url(fetch(slot.url, timeout))

    async def _enrich_one(slot: ImageSlot) -> str:
        async with sem:
            return await asyncio.to_thread(_load, slot)

    results = await asyncio.gather(*[_enrich_one(s) for s in slots], return_exceptions=True)

    patch: Dict[str, str] = {}
    for slot, result in zip(slots, results):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.warning("Image enrichment failed for %s (%s): %s", slot.url, slot.id, result)
            continue
        patch[slot.id] = result
    return patch


def apply_image_patch(svg: str, patch: Dict[str, str], slots: Iterable[ImageSlot]) -> str:
    """Return a copy of svg with patched slots' placeholders swapped for images.

    Slots missing from the patch keep their placeholder; the input string is
    never modified.
    """
    out = svg
    for slot in slots:
        href = patch.get(slot.id)
        if not href:
            continue
        group_re = re.compile(r'<g id="' + re.escape(slot.id) + r'">.*?</g>', re.DOTALL)
        image = svg_image(
            href,
            slot.x,
            slot.y,
            slot.width,
            slot.height,
            preserveAspectRatio='xMidYMid slice',
        )
        out = group_re.sub(lambda _m: f'<g id="{slot.id}">{image}</g>', out, count=1)
    return out


def enrich_svg(svg: str, slots: Iterable[ImageSlot], **kwargs) -> str:
    """Synchronous convenience: run enrich_images and apply the patch."""
    slots = list(slots)
    if not slots:
        return svg
    patch = asyncio.run(enrich_images(slots, **kwargs))
    return apply_image_patch(svg, patch, slots)

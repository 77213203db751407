"""Locate SLML fenced blocks in Markdown and swap them for rendered output."""

import re
from typing import Callable, Iterator, List, Optional

from .parser import Screen, ScreenDefaults, parse_slml

DEFAULT_LANGUAGE_TAG = 'slml'


def _fence_re(tag: str) -> re.Pattern:
    # Opening fence carries exactly the tag as its info string; closing fence on its own line
    return re.compile(
        r'^```' + re.escape(tag) + r'[ \t]*\r?\n(?P<body>.*?)^```[ \t]*(?=\r?$)',
        re.MULTILINE | re.DOTALL,
    )


def iter_blocks(markdown: str, tag: str = DEFAULT_LANGUAGE_TAG) -> Iterator[re.Match]:
    return _fence_re(tag).finditer(markdown or '')


def extract_blocks(markdown: str, tag: str = DEFAULT_LANGUAGE_TAG) -> List[str]:
    """Return the trimmed interior of every ```<tag> block, in document order."""
    return [m.group('body').strip() for m in iter_blocks(markdown, tag)]


def process_markdown(
    markdown: str,
    tag: str = DEFAULT_LANGUAGE_TAG,
    defaults: Optional[ScreenDefaults] = None,
) -> List[Screen]:
    return [parse_slml(block, defaults) for block in extract_blocks(markdown, tag)]


def substitute_blocks(
    markdown: str,
    render: Callable[[str], str],
    tag: str = DEFAULT_LANGUAGE_TAG,
) -> str:
    """Replace each ```<tag> block with render(block_text).

    Only the fenced block itself (opening fence through closing fence) is
    replaced; every other character of the document is kept as is.
    """
    if not markdown:
        return markdown
    return _fence_re(tag).sub(lambda m: render(m.group('body').strip()), markdown)

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Bare URL autolinking
====================
``See https://example.com for details`` becomes
``See <a href="https://example.com">https://example.com</a> for details``.

Spans are found with the same pattern mistune's ``url`` plugin uses: a
scheme is required and trailing punctuation is left outside the link.  A
trailing ``)`` is taken back in while the URL has unmatched ``(``, so
``https://en.wikipedia.org/wiki/Foo_(bar)`` links whole.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Callable, List, Tuple

from mistune.plugins.url import URL_LINK_PATTERN


Span = Tuple[int, int]

_URL_RE = re.compile(URL_LINK_PATTERN)


# -----------------------------------------------------------------------------

def _balance_parens(text: str, start: int, end: int) -> int:
    opened = text.count("(", start, end) - text.count(")", start, end)
    while opened > 0 and text.startswith(")", end):
        end += 1
        opened -= 1
    return end


def find_links(text: str) -> List[Span]:
    """Return ``(start, end)`` offsets of every URL in *text*, left to right."""
    spans = []
    for m in _URL_RE.finditer(text):
        start, end = m.span()
        spans.append((start, _balance_parens(text, start, end)))
    return spans


def autolink(text: str, finder: Callable[[str], List[Span]] = find_links) -> str:
    """Wrap each URL in *text* in an anchor.

    Text outside the spans is kept exactly as it was.  When nothing is found
    *text* itself is returned.  URLs are not escaped.
    """
    spans = finder(text)
    if not spans:
        return text

    out: list[str] = []
    last = 0
    for start, end in spans:
        url = text[start:end]
        out.append(text[last:start])
        out.append(f'<a href="{url}">{url}</a>')
        last = end
    out.append(text[last:])
    return "".join(out)


def has_url_scheme(text: str) -> bool:
    return "http://" in text or "https://" in text


# -----------------------------------------------------------------------------

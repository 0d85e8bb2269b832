#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Wiki references
===============
``[Solar Power]`` links to the page named ``solar_power``.  When no such page
exists the link points at the "create page" form instead.

The parser hands over ``[``, the enclosed text and ``]`` as separate
fragments, possibly with many fragments in between, so the reference is
tracked by a small state machine:

    Outside --"["--> InsideReference("") --text--> InsideReference(buf + text)
    InsideReference(buf) --"]"--> Outside, emits the link for buf

Link text and hrefs are not HTML-escaped; page source is expected to be
sanitised upstream.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from wikirender.services.names import title_to_name as default_title_to_name


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# States
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Outside:
    pass


@dataclass(frozen=True)
class InsideReference:
    buffer: str = ""


ReferenceState = Union[Outside, InsideReference]

OUTSIDE = Outside()


# -----------------------------------------------------------------------------

class WikiLinkState:
    """Holds the reference state for one conversion call."""

    def __init__(self) -> None:
        self.state: ReferenceState = OUTSIDE

    @property
    def is_open(self) -> bool:
        return isinstance(self.state, InsideReference)

    @property
    def buffer(self) -> str:
        if isinstance(self.state, InsideReference):
            return self.state.buffer
        return ""

    def open(self) -> None:
        self.state = InsideReference()

    def feed(self, text: str) -> None:
        if not isinstance(self.state, InsideReference):
            raise RuntimeError("no reference is open")
        self.state = InsideReference(self.state.buffer + text)

    def close(self) -> str:
        """Leave the reference and return the text collected inside it."""
        text = self.buffer
        self.state = OUTSIDE
        return text

    def reset(self) -> None:
        self.state = OUTSIDE


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

def find_page(name: str, known_pages: Sequence[str]) -> int | None:
    """Index of the first page whose name equals *name*, ignoring case."""
    key = name.lower()
    for idx, candidate in enumerate(known_pages):
        if candidate.lower() == key:
            return idx
    return None


def resolve_wiki_link(
    text: str,
    known_pages: Sequence[str],
    title_to_name: Callable[[str], str] = default_title_to_name,
) -> str:
    """Return the anchor for the reference text *text*.

    The href uses the stored page name when the page exists, and the
    canonical name on the "new page" link otherwise.  The visible text is
    always *text* as written.
    """
    page_name = title_to_name(text)
    idx = find_page(page_name, known_pages)
    if idx is not None:
        link_class, link_href = "", f"/{known_pages[idx]}"
    else:
        log.debug("wiki link %r: no page named %r", text, page_name)
        link_class, link_href = "new", f"/new?name={page_name}"
    return f'<a href="{link_href}" class="{link_class}">{text}</a>'


# -----------------------------------------------------------------------------

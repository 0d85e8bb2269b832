#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Inline fragments
================
The rewriter works on a flat, document-order stream of inline fragments:

  - ``Text``  : raw inline text, HTML-escaped when serialised
  - ``Html``  : pre-rendered HTML, written out verbatim

Anything else the Markdown parser produces (emphasis, code spans, links,
block structure, ...) is opaque and passes through untouched.

mistune represents inline content as nested token dicts.  The helpers below
walk those tokens in document order and write rewritten fragments back into
them, so the stock HTML renderer can serialise the result.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union


# Token types carrying plain inline text.  "wiki_bracket" is a lone "[" / "]"
# split out by the bracket plugin in services.renderer.
TEXT_TOKEN_TYPES = ("text", "wiki_bracket")

# Token type used for Html fragments; rendered verbatim even when the
# renderer escapes inline HTML from page source.
HTML_TOKEN_TYPE = "wiki_html"


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Text:
    raw: str


@dataclass(frozen=True)
class Html:
    raw: str


# What the rewriter produces for a Text fragment.  Other fragments are plain
# ``object``s and come back out unchanged.
Fragment = Union[Text, Html]

EMPTY = Text("")


# -----------------------------------------------------------------------------
# mistune token bridge
# -----------------------------------------------------------------------------

def iter_text_tokens(tokens: Iterable[dict[str, Any]]) -> Iterator[dict[str, Any]]:
    """Yield every text-bearing token, depth first, in document order."""
    for token in tokens:
        if token["type"] in TEXT_TOKEN_TYPES:
            yield token
        elif "children" in token:
            yield from iter_text_tokens(token["children"])


def token_fragment(token: dict[str, Any]) -> Text:
    return Text(token["raw"])


def write_fragment(token: dict[str, Any], fragment: Fragment) -> None:
    """Store *fragment* in *token* in place."""
    if isinstance(fragment, Html):
        token["type"] = HTML_TOKEN_TYPE
    else:
        token["type"] = "text"
    token["raw"] = fragment.raw


# -----------------------------------------------------------------------------

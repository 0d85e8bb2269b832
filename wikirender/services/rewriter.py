#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Fragment rewriter
=================
Applies the wiki syntax extensions to a stream of inline fragments.

Each ``Text`` fragment is matched against an ordered list of rules; the first
rule whose guard accepts the fragment produces the output:

  1. open_reference   : "[" while outside a reference
  2. close_reference  : "]" while inside a reference
  3. collect_reference: any text while inside a reference
  4. autolink         : text containing http:// or https://
  5. hashtags         : text containing "#"
  6. plain            : everything else, unchanged

Because rule 4 comes first, a fragment holding both a URL and a hashtag only
gets its URL linked.  Every other fragment type passes through unmodified.

One rewriter serves exactly one conversion call.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from wikirender.services.autolink import autolink, has_url_scheme
from wikirender.services.fragments import EMPTY, Fragment, Html, Text
from wikirender.services.hashtags import link_hashtags_in
from wikirender.services.names import title_to_name as default_title_to_name
from wikirender.services.wikilinks import WikiLinkState, resolve_wiki_link


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    name: str
    guard: Callable[["FragmentRewriter", str], bool]
    handler: Callable[["FragmentRewriter", str], Fragment]


# -----------------------------------------------------------------------------

class FragmentRewriter:

    def __init__(
        self,
        known_pages: Sequence[str],
        title_to_name: Callable[[str], str] = default_title_to_name,
    ) -> None:
        self.known_pages = known_pages
        self.title_to_name = title_to_name
        self.wiki_link = WikiLinkState()

    @property
    def in_reference(self) -> bool:
        return self.wiki_link.is_open

    # ── guards ─────────────────────────────────────────────────────────────

    def _opens_reference(self, text: str) -> bool:
        return text == "[" and not self.wiki_link.is_open

    def _closes_reference(self, text: str) -> bool:
        return text == "]" and self.wiki_link.is_open

    def _inside_reference(self, text: str) -> bool:
        return self.wiki_link.is_open

    def _has_url(self, text: str) -> bool:
        return has_url_scheme(text)

    def _has_hashtag(self, text: str) -> bool:
        return "#" in text

    def _always(self, text: str) -> bool:
        return True

    # ── handlers ───────────────────────────────────────────────────────────

    def _open_reference(self, text: str) -> Fragment:
        log.debug("wiki reference opened")
        self.wiki_link.open()
        return EMPTY

    def _close_reference(self, text: str) -> Fragment:
        link_text = self.wiki_link.close()
        log.debug("wiki reference closed: %r", link_text)
        return Html(resolve_wiki_link(link_text, self.known_pages, self.title_to_name))

    def _collect_reference(self, text: str) -> Fragment:
        self.wiki_link.feed(text)
        return EMPTY

    def _autolink(self, text: str) -> Fragment:
        linked = autolink(text)
        if linked == text:
            return Text(text)
        return Html(linked)

    def _link_hashtags(self, text: str) -> Fragment:
        return Html(link_hashtags_in(text))

    def _plain(self, text: str) -> Fragment:
        return Text(text)

    # ── driving ────────────────────────────────────────────────────────────

    RULES: tuple[Rule, ...] = (
        Rule("open_reference",    _opens_reference,  _open_reference),
        Rule("close_reference",   _closes_reference, _close_reference),
        Rule("collect_reference", _inside_reference, _collect_reference),
        Rule("autolink",          _has_url,          _autolink),
        Rule("hashtags",          _has_hashtag,      _link_hashtags),
        Rule("plain",             _always,           _plain),
    )

    def match_rule(self, text: str) -> Rule:
        """Return the first rule accepting *text* in the current state."""
        for rule in self.RULES:
            if rule.guard(self, text):
                return rule
        raise AssertionError("the plain rule accepts everything")

    def rewrite(self, fragment: object) -> object:
        if not isinstance(fragment, Text):
            return fragment
        rule = self.match_rule(fragment.raw)
        return rule.handler(self, fragment.raw)

    def rewrite_all(self, fragments: Iterable[object]) -> Iterator[object]:
        for fragment in fragments:
            yield self.rewrite(fragment)

    def finish(self) -> str | None:
        """End of stream.  Returns the text of a reference left open, if any.

        Text swallowed by an unclosed reference is not emitted anywhere;
        callers decide whether to restore it.
        """
        if not self.wiki_link.is_open:
            return None
        buffer = self.wiki_link.buffer
        log.warning("unterminated wiki reference swallowed %d characters", len(buffer))
        return buffer

    def reset(self) -> None:
        self.wiki_link.reset()


# -----------------------------------------------------------------------------

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup renderer
===============
Renders wiki page Markdown to HTML.

Markdown is parsed by mistune (tables, footnotes, strikethrough and task
lists by default, see ``Settings.markdown_plugins``).  Before serialising,
the inline text of the whole document is run through a ``FragmentRewriter``
which adds the wiki extensions:

  - ``[Page Title]``  : link to an existing page, or to the "new page" form
  - ``#tag``          : link to the tag search
  - ``https://...``   : bare URLs become links

Re-rendering already rendered HTML is not supported.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from re import Match
from typing import Any, Callable, Optional, Sequence

import mistune
from mistune.helpers import unescape_char
from mistune.plugins import import_plugin

from wikirender.core.config import get_settings
from wikirender.core.errors import ConfigError
from wikirender.services.fragments import (
    HTML_TOKEN_TYPE,
    Text,
    iter_text_tokens,
    token_fragment,
    write_fragment,
)
from wikirender.services.names import title_to_name as default_title_to_name
from wikirender.services.rewriter import FragmentRewriter


log = logging.getLogger(__name__)

# Key of the per-call token rewriter in mistune's state.env
_ENV_REWRITER = "wiki_rewriter"


# -----------------------------------------------------------------------------
# Bracket plugin: hand lone "[" and "]" to the rewriter as separate fragments
# -----------------------------------------------------------------------------

def _parse_link_or_bracket(
    inline: mistune.InlineParser, m: Match[str], state: mistune.InlineState,
) -> Optional[int]:
    marker = m.group(0)
    count = len(state.tokens)
    pos = inline.parse_link(m, state)
    if pos is None:
        state.append_token({"type": "wiki_bracket", "raw": marker})
        return m.end()
    # mistune gave up on the link but kept the marker as text
    if len(state.tokens) == count + 1 and state.tokens[-1] == {"type": "text", "raw": marker}:
        state.tokens[-1]["type"] = "wiki_bracket"
    return pos


def _parse_close_bracket(
    inline: mistune.InlineParser, m: Match[str], state: mistune.InlineState,
) -> int:
    state.append_token({"type": "wiki_bracket", "raw": m.group(0)})
    return m.end()


def _parse_escape(
    inline: mistune.InlineParser, m: Match[str], state: mistune.InlineState,
) -> int:
    # backslash-escaped punctuation is literal: never a bracket, tag or URL
    state.append_token({"type": "wiki_literal", "raw": unescape_char(m.group(0))})
    return m.end()


def _render_wiki_html(renderer: mistune.BaseRenderer, html: str) -> str:
    return html


def _render_literal(renderer: mistune.HTMLRenderer, text: str) -> str:
    return renderer.text(text)


def wiki_brackets(md: mistune.Markdown) -> None:
    """mistune plugin: unmatched ``[`` and every ``]`` become their own tokens.

    Backslash escapes become ``wiki_literal`` tokens, which the rewriter
    never sees, so ``\\[Title\\]`` stays plain text.
    """
    md.inline.register("escape", md.inline.specification["escape"], _parse_escape)
    md.inline.register("link", r"!?\[", _parse_link_or_bracket)
    md.inline.register("wiki_close_bracket", r"\]", _parse_close_bracket)
    if md.renderer and md.renderer.NAME == "html":
        md.renderer.register(HTML_TOKEN_TYPE, _render_wiki_html)
        md.renderer.register("wiki_bracket", _render_literal)
        md.renderer.register("wiki_literal", _render_literal)


# -----------------------------------------------------------------------------
# Token rewriting
# -----------------------------------------------------------------------------

class _TokenRewriter:
    """Runs one call's ``FragmentRewriter`` over mistune inline tokens."""

    def __init__(self, rewriter: FragmentRewriter, flush_unclosed: bool = False) -> None:
        self.rewriter = rewriter
        self.flush_unclosed = flush_unclosed
        # tokens consumed since the currently open "[" (inclusive)
        self._swallowed: list[tuple[dict[str, Any], str]] = []
        # set once an unclosed reference has been reported and kept swallowed
        self._reported = False

    def __call__(self, tokens: list[dict[str, Any]]) -> None:
        for token in iter_text_tokens(tokens):
            fragment = token_fragment(token)
            write_fragment(token, self.rewriter.rewrite(fragment))
            if self.rewriter.in_reference:
                self._swallowed.append((token, fragment.raw))
            else:
                self._swallowed.clear()
        self._finish()

    def _finish(self) -> None:
        # called after the body and again after footnotes; report once
        if self._reported or self.rewriter.finish() is None:
            return
        if not self.flush_unclosed:
            self._reported = True
            return
        for token, raw in self._swallowed:
            write_fragment(token, Text(raw))
        self._swallowed.clear()
        self.rewriter.reset()


# -----------------------------------------------------------------------------
# Markdown instance
# -----------------------------------------------------------------------------

class WikiMarkdown(mistune.Markdown):
    """mistune ``Markdown`` that rewrites inline tokens before rendering.

    The instance holds no per-call data: the rewriter travels in the parse
    state's ``env``, which footnote rendering shares with the main pass.
    """

    def render_state(self, state: mistune.BlockState) -> Any:
        tokens = list(self._iter_render(state.tokens, state))
        token_rewriter = state.env.get(_ENV_REWRITER)
        if token_rewriter is not None:
            token_rewriter(tokens)
        if self.renderer:
            return self.renderer(tokens, state)
        return tokens


@lru_cache(maxsize=8)
def _make_md_renderer(plugins: tuple[str, ...], escape: bool) -> WikiMarkdown:
    try:
        real_plugins = [import_plugin(name) for name in plugins]
    except (ValueError, ImportError, AttributeError) as exc:
        raise ConfigError(
            f"unknown markdown plugin in {list(plugins)!r}: {exc}",
            setting="markdown_plugins",
        ) from exc
    real_plugins.append(wiki_brackets)
    log.debug("building markdown renderer: plugins=%s escape=%s", plugins, escape)
    return WikiMarkdown(
        renderer=mistune.HTMLRenderer(escape=escape),
        inline=mistune.InlineParser(),
        plugins=real_plugins,
    )


def _get_md_renderer() -> WikiMarkdown:
    settings = get_settings()
    return _make_md_renderer(tuple(settings.markdown_plugins), settings.escape_html)


# -----------------------------------------------------------------------------
# Public render function
# -----------------------------------------------------------------------------

def render(
    markdown_text: str,
    known_page_names: Sequence[str],
    title_to_name: Callable[[str], str] | None = None,
) -> str:
    """
    Render *markdown_text* to HTML.

    Parameters
    ----------
    markdown_text    : raw page source
    known_page_names : names of every existing page, for ``[Page]`` links.
                       Only read, never stored.
    title_to_name    : page title canonicaliser; defaults to
                       ``wikirender.services.names.title_to_name``
    """
    settings = get_settings()
    md = _get_md_renderer()

    rewriter = FragmentRewriter(known_page_names, title_to_name or default_title_to_name)
    state = md.block.state_cls()
    state.env[_ENV_REWRITER] = _TokenRewriter(
        rewriter, flush_unclosed=settings.flush_unclosed_references,
    )
    html, _ = md.parse(markdown_text, state)
    return html


# -----------------------------------------------------------------------------

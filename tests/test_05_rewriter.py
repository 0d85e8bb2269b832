#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tests for the fragment rewriter, one fragment stream at a time.

These drive FragmentRewriter directly with Text/Html fragments, the way the
Markdown parser feeds it, so rule priority can be checked without mistune.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from wikirender.services.fragments import Html, Text
from wikirender.services.rewriter import FragmentRewriter


def _run(fragments, pages=("solar_power",)):
    rewriter = FragmentRewriter(list(pages))
    return list(rewriter.rewrite_all(fragments)), rewriter


def _texts(*parts):
    return [Text(p) for p in parts]


# ── rule selection ───────────────────────────────────────────────────────────

@pytest.mark.parametrize("text,rule", [
    ("[", "open_reference"),
    ("]", "plain"),
    ("https://x.io", "autolink"),
    ("#tag", "hashtags"),
    ("see #tag at https://x.io", "autolink"),
    ("[x", "plain"),
    ("words", "plain"),
])
def test_rule_selection_outside_reference(text, rule):
    assert FragmentRewriter([]).match_rule(text).name == rule


@pytest.mark.parametrize("text,rule", [
    ("[", "collect_reference"),
    ("]", "close_reference"),
    ("https://x.io", "collect_reference"),
    ("#tag", "collect_reference"),
])
def test_rule_selection_inside_reference(text, rule):
    rewriter = FragmentRewriter([])
    rewriter.rewrite(Text("["))
    assert rewriter.match_rule(text).name == rule


# ── wiki references ──────────────────────────────────────────────────────────

def test_reference_to_existing_page():
    out, rewriter = _run(_texts("See ", "[", "Solar Power", "]", " now"))
    assert out == [
        Text("See "),
        Text(""),
        Text(""),
        Html('<a href="/solar_power" class="">Solar Power</a>'),
        Text(" now"),
    ]
    assert not rewriter.in_reference


def test_reference_to_missing_page():
    out, _ = _run(_texts("[", "Tidal Energy", "]"))
    assert out[-1] == Html('<a href="/new?name=tidal_energy" class="new">Tidal Energy</a>')


def test_reference_text_spans_many_fragments():
    out, _ = _run(_texts("[", "Solar", " ", "Power", "]"))
    assert out[-1] == Html('<a href="/solar_power" class="">Solar Power</a>')
    assert out[:-1] == [Text("")] * 4


def test_nested_open_bracket_is_collected():
    out, _ = _run(_texts("[", "[", "x", "]", "]"))
    assert out[3] == Html('<a href="/new?name=[x" class="new">[x</a>')
    assert out[4] == Text("]")


def test_close_bracket_outside_reference_is_plain():
    out, _ = _run(_texts("]"))
    assert out == [Text("]")]


def test_empty_reference():
    out, _ = _run(_texts("[", "]"))
    assert out[-1] == Html('<a href="/new?name=" class="new"></a>')


def test_url_inside_reference_is_not_autolinked():
    out, _ = _run(_texts("[", "https://x.io", "]"))
    assert out[-1] == Html('<a href="/new?name=https://x.io" class="new">https://x.io</a>')


def test_state_resets_between_references():
    out, _ = _run(_texts("[", "a", "]", " and ", "[", "b", "]"))
    assert out[2] == Html('<a href="/new?name=a" class="new">a</a>')
    assert out[6] == Html('<a href="/new?name=b" class="new">b</a>')


def test_custom_canonicaliser_is_used():
    rewriter = FragmentRewriter(["SOLAR"], title_to_name=lambda t: t.split()[0].upper())
    out = list(rewriter.rewrite_all(_texts("[", "solar power", "]")))
    assert out[-1] == Html('<a href="/SOLAR" class="">solar power</a>')


# ── unterminated reference ───────────────────────────────────────────────────

def test_unterminated_reference_swallows_the_rest():
    out, rewriter = _run(_texts("Intro ", "[", "Title without close", "https://x.io", "#tag", "more"))
    assert out[0] == Text("Intro ")
    assert out[1:] == [Text("")] * 5
    assert not any(isinstance(f, Html) for f in out)
    assert rewriter.in_reference
    assert rewriter.finish() == "Title without closehttps://x.io#tagmore"


def test_finish_without_open_reference():
    _, rewriter = _run(_texts("[", "a", "]"))
    assert rewriter.finish() is None


def test_reset_after_unterminated_reference():
    _, rewriter = _run(_texts("[", "a"))
    rewriter.reset()
    assert rewriter.rewrite(Text("plain")) == Text("plain")


# ── URLs and hashtags ────────────────────────────────────────────────────────

def test_url_fragment():
    out, _ = _run(_texts("See https://example.com/x for details"))
    assert out == [Html(
        'See <a href="https://example.com/x">https://example.com/x</a> for details'
    )]


def test_scheme_without_url_stays_text():
    out, _ = _run(_texts("http:// is a scheme"))
    assert out == [Text("http:// is a scheme")]


def test_hashtag_fragment():
    out, _ = _run(_texts("#rust #go notes"))
    assert out == [Html(
        "<a href='/search?tag=rust'>#rust</a> <a href='/search?tag=go'>#go</a> notes"
    )]


def test_url_takes_precedence_over_hashtag():
    out, _ = _run(_texts("#tag https://x.io"))
    assert out == [Html('#tag <a href="https://x.io">https://x.io</a>')]


def test_lone_hash_still_becomes_html():
    out, _ = _run(_texts("C# rocks"))
    assert out == [Html("C# rocks")]


# ── pass-through ─────────────────────────────────────────────────────────────

def test_plain_text_identity():
    out, _ = _run(_texts("nothing special here"))
    assert out == [Text("nothing special here")]


def test_non_text_fragments_pass_through():
    opaque = object()
    html = Html("<em>")
    out, _ = _run([opaque, html])
    assert out[0] is opaque
    assert out[1] is html


def test_non_text_fragments_pass_through_inside_reference():
    opaque = object()
    out, rewriter = _run([Text("["), opaque, Text("x"), Text("]")])
    assert out[1] is opaque
    assert out[3] == Html('<a href="/new?name=x" class="new">x</a>')


def test_stream_is_one_to_one():
    fragments = _texts("a", "[", "b", "]", "#c", "https://d.io", "[")
    out, _ = _run(fragments)
    assert len(out) == len(fragments)


def test_rewrite_all_is_lazy():
    rewriter = FragmentRewriter([])
    stream = rewriter.rewrite_all(iter(_texts("[", "x")))
    next(stream)
    assert rewriter.in_reference
    assert rewriter.wiki_link.buffer == ""

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Hashtags
========
``#solar`` links to the tag search page: ``/search?tag=solar``.

Words are split on the space character only and joined back the same way,
so runs of spaces survive and tabs stay inside the word they touch.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations


# -----------------------------------------------------------------------------

def _link_word(word: str) -> str:
    if word.startswith("#") and len(word) > 1:
        tag = word.lstrip("#")
        return f"<a href='/search?tag={tag}'>#{tag}</a>"
    return word


def link_hashtags(text: str) -> str:
    """Link every ``#word`` in *text*."""
    return " ".join(_link_word(word) for word in text.split(" "))


def link_hashtags_in(text: str) -> str:
    """Leave everything before the first ``#`` alone and link the rest."""
    idx = text.find("#")
    if idx < 0:
        return text
    return text[:idx] + link_hashtags(text[idx:])


def extract_hashtags(text: str) -> list[str]:
    """Distinct tags in *text*, in the order they first appear."""
    seen: set[str] = set()
    tags: list[str] = []
    for word in text.split(" "):
        if not word.startswith("#") or len(word) < 2:
            continue
        tag = word.lstrip("#")
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


# -----------------------------------------------------------------------------

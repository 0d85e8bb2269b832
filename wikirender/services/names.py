#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page name helpers
=================
A page *title* is what people type ("Solar Power"); a page *name* is the key
pages are stored and linked under ("solar_power").
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re


_WS_RE = re.compile(r"\s+")


# -----------------------------------------------------------------------------

def title_to_name(title: str) -> str:
    """Convert a page title to its page name.

    >>> title_to_name("  Solar Power ")
    'solar_power'
    """
    return _WS_RE.sub("_", title.strip()).lower()


def name_to_title(name: str) -> str:
    """Best-effort reverse of :func:`title_to_name`, for display."""
    words = [w for w in name.split("_") if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


# -----------------------------------------------------------------------------

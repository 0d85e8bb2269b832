#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Exceptions raised by the renderer.

Rendering itself is total: any input string produces HTML.  Only a broken
configuration can fail.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations


# -----------------------------------------------------------------------------

class RenderError(Exception):
    """Base class for wikirender errors."""


class ConfigError(RenderError):
    """Settings name something the Markdown parser cannot provide."""

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


# -----------------------------------------------------------------------------

#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Renderer configuration.

All values can be overridden via ``WIKIRENDER_*`` environment variables or a
.env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from wikirender._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="WIKIRENDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "wikirender"
    app_version: str = _pkg_version
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # ── Markdown parser ────────────────────────────────────────────────────

    # mistune plugin names, loaded with mistune.plugins.import_plugin
    markdown_plugins: list[str] = [
        "table",
        "footnotes",
        "strikethrough",
        "task_lists",
    ]
    # Raw HTML in page source is passed through unless this is set.
    escape_html: bool = False

    # ── Wiki references ────────────────────────────────────────────────────

    # When an opening "[" is never closed, restore the swallowed text at the
    # end of the document instead of dropping it.
    flush_unclosed_references: bool = False


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level to the ``wikirender`` logger tree."""
    settings = settings or get_settings()
    logging.getLogger("wikirender").setLevel(settings.log_level)


# -----------------------------------------------------------------------------

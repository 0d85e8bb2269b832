#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for wikirender tests.
Every test starts from default settings; environment overrides go through
the ``settings_env`` fixture.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os

import pytest

from wikirender.core.config import get_settings


# -----------------------------------------------------------------------------

KNOWN_PAGES = ["solar_power", "Wind_Turbines", "help"]


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop cached settings and ignore any WIKIRENDER_* variables from the shell."""
    for key in list(os.environ):
        if key.upper().startswith("WIKIRENDER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(os.path.dirname(__file__))   # keep a stray .env out of reach
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_env(monkeypatch):
    """Set WIKIRENDER_* variables for one test: ``settings_env(escape_html="true")``."""
    def _set(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(f"WIKIRENDER_{key.upper()}", value)
        get_settings.cache_clear()
    return _set


@pytest.fixture
def known_pages() -> list[str]:
    return list(KNOWN_PAGES)


# -----------------------------------------------------------------------------

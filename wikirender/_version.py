"""Package version, from installed metadata or a source checkout's pyproject.toml."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def _source_version() -> str:
    try:
        match = _VERSION_RE.search(_PYPROJECT.read_text(encoding="utf-8"))
    except OSError:
        return "0.0.0"
    return match.group(1) if match else "0.0.0"


try:
    __version__: str = version("wikirender")
except PackageNotFoundError:
    __version__ = _source_version()

from wikirender._version import __version__
from wikirender.core.errors import ConfigError, RenderError
from wikirender.services.hashtags import extract_hashtags
from wikirender.services.names import name_to_title, title_to_name
from wikirender.services.renderer import render

__all__ = [
    "__version__",
    "render",
    "title_to_name", "name_to_title",
    "extract_hashtags",
    "RenderError", "ConfigError",
]

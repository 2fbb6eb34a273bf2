"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Earthquake feed and plate boundary client (HTTP)
- Map renderer (folium / HTML)
- Configuration loading (environment/files)

Keep this layer thin and simple. All map logic should be in core.
"""

from src.shell.feed_client import FeedClient, FetchResult
from src.shell.map_renderer import MapRenderer, RenderedMap
from src.shell.config_loader import load_config, Config

__all__ = [
    "FeedClient",
    "FetchResult",
    "MapRenderer",
    "RenderedMap",
    "load_config",
    "Config",
]

"""Functional Core - Pure functions with no side effects.

This module contains all map logic as pure functions:
- Earthquake feature parsing
- Depth colors and magnitude radii
- Scene building (markers, heat samples, legend)
- Configuration validation

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import Earthquake, has_position, parse_earthquakes
from src.core.depth_scale import choose_color, get_radius, legend_entries
from src.core.scene import SceneSpec, build_scene
from src.core.config import Config, validate_config

__all__ = [
    # Earthquake
    "Earthquake",
    "has_position",
    "parse_earthquakes",
    # Depth scale
    "choose_color",
    "get_radius",
    "legend_entries",
    # Scene
    "SceneSpec",
    "build_scene",
    # Config
    "Config",
    "validate_config",
]

"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the src package.
"""

from src.main import earthquake_map
from src.api_handler import get_scene

__all__ = [
    "earthquake_map",
    "get_scene",
]

"""Earthquake data models and parsing - Pure functions.

This module handles parsing USGS GeoJSON summary feed features into typed
Earthquake objects. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from typing import Any


DEFAULT_TITLE = "Unknown earthquake"


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake feature record.

    Attributes:
        id: USGS event ID (empty if the feature has none)
        magnitude: Earthquake magnitude (0 when the feed has none)
        title: Human-readable title (e.g., "M 3.0 - 10km NE of Somewhere")
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        depth: Depth below the surface, as reported by the feed
    """
    id: str
    magnitude: float
    title: str
    latitude: float
    longitude: float
    depth: float

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def parse_earthquake(feature: dict[str, Any]) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if invalid.

    Args:
        feature: GeoJSON feature dict from the USGS summary feed

    Returns:
        Earthquake object or None if parsing fails
    """
    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        coords = geometry.get("coordinates") or []

        if len(coords) < 2:
            return None

        # A missing magnitude plots at radius 0
        magnitude = props.get("mag")
        if magnitude is None:
            magnitude = 0.0

        # GeoJSON order is [longitude, latitude, depth]
        depth = coords[2] if len(coords) > 2 and coords[2] is not None else 0.0

        return Earthquake(
            id=feature.get("id") or "",
            magnitude=float(magnitude),
            title=str(props.get("title") or DEFAULT_TITLE),
            longitude=float(coords[0]),
            latitude=float(coords[1]),
            depth=float(depth),
        )
    except (AttributeError, TypeError, ValueError):
        return None


def has_position(earthquake: Earthquake) -> bool:
    """Check whether an earthquake has a usable map position.

    Pure function. Both latitude and longitude must be non-zero; a feature
    sitting exactly on the equator or prime meridian is treated as missing.
    """
    return bool(earthquake.latitude) and bool(earthquake.longitude)


def parse_earthquakes(geojson: dict[str, Any]) -> list[Earthquake]:
    """Parse a USGS GeoJSON FeatureCollection into mappable Earthquakes.

    Pure function: drops features that fail to parse or have no position,
    and keeps the feed order of the rest.

    Args:
        geojson: Full GeoJSON FeatureCollection from the USGS feed

    Returns:
        List of valid Earthquake objects
    """
    earthquakes = []

    for feature in geojson.get("features") or []:
        earthquake = parse_earthquake(feature)
        if earthquake is not None and has_position(earthquake):
            earthquakes.append(earthquake)

    return earthquakes

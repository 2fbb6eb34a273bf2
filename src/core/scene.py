"""Scene description - Pure functions.

This module turns the two fetched GeoJSON documents into a complete,
renderer-independent description of the map: base layers, the three
overlays (markers, heatmap, plate boundaries) and the legend.
The actual map construction (folium) is handled by the shell layer.
"""

import html
from dataclasses import dataclass
from typing import Any

from src.core.config import Config, TileLayerConfig
from src.core.depth_scale import LegendEntry, choose_color, get_radius, legend_entries
from src.core.earthquake import Earthquake, parse_earthquakes


MARKER_OUTLINE_COLOR = "white"
MARKER_FILL_OPACITY = 0.75

BOUNDARY_COLOR = "purple"
BOUNDARY_WEIGHT = 5

LEGEND_TITLE = "Earthquake <br> Depth"
LEGEND_POSITION = "bottomright"

# Overlay names shown in the layer switcher
EARTHQUAKES_OVERLAY = "Earthquakes"
PLATES_OVERLAY = "Tectonic Plates"
HEATMAP_OVERLAY = "Heatmap"


@dataclass(frozen=True)
class MarkerSpec:
    """Visual parameters for one earthquake marker.

    Attributes:
        latitude: Marker latitude
        longitude: Marker longitude
        fill_color: Fill color from the depth scale
        radius: Radius from the magnitude (may be negative)
        popup_html: Popup body with title and depth
    """
    latitude: float
    longitude: float
    fill_color: str
    radius: float
    popup_html: str
    outline_color: str = MARKER_OUTLINE_COLOR
    fill_opacity: float = MARKER_FILL_OPACITY


@dataclass(frozen=True)
class BoundaryStyle:
    """Uniform line style for every plate boundary feature."""
    color: str = BOUNDARY_COLOR
    weight: int = BOUNDARY_WEIGHT

    def as_dict(self) -> dict[str, Any]:
        return {"color": self.color, "weight": self.weight}


@dataclass(frozen=True)
class LegendSpec:
    """Static depth legend shown on the map."""
    title: str
    entries: tuple[LegendEntry, ...]
    position: str = LEGEND_POSITION


@dataclass(frozen=True)
class SceneSpec:
    """Complete description of one rendered map.

    Recreated in full on every render; nothing is carried over from a
    previous scene.

    Attributes:
        time_frame: Feed time frame the scene was built from
        center: Initial (latitude, longitude)
        zoom: Initial zoom level
        base_layers: Tile layers; the first is active by default
        markers: One marker per mappable earthquake
        heat_samples: (latitude, longitude) per mappable earthquake
        heat_radius: Heatmap point radius
        heat_blur: Heatmap blur amount
        boundaries: Plate boundary GeoJSON document, consumed as-is
        boundary_style: Style applied to every boundary feature
        legend: Depth legend
    """
    time_frame: str
    center: tuple[float, float]
    zoom: int
    base_layers: tuple[TileLayerConfig, ...]
    markers: tuple[MarkerSpec, ...]
    heat_samples: tuple[tuple[float, float], ...]
    heat_radius: int
    heat_blur: int
    boundaries: dict[str, Any]
    boundary_style: BoundaryStyle
    legend: LegendSpec

    @property
    def boundary_count(self) -> int:
        """Number of boundary features in the scene.

        A FeatureCollection counts its features; a single Feature or bare
        geometry counts as one.
        """
        if "features" in self.boundaries:
            return len(self.boundaries["features"] or [])
        return 1 if self.boundaries.get("type") else 0


def format_depth(depth: float) -> str:
    """Format a depth for display, dropping a trailing .0."""
    if float(depth).is_integer():
        return str(int(depth))
    return str(depth)


def format_popup(earthquake: Earthquake) -> str:
    """Build popup HTML for an earthquake marker.

    Pure function.

    Args:
        earthquake: Earthquake to describe

    Returns:
        HTML string with the (escaped) title and the depth
    """
    return (
        f"<h1>{html.escape(earthquake.title)}</h1><hr>"
        f"<h2>Depth: {format_depth(earthquake.depth)}m</h2>"
    )


def create_marker(earthquake: Earthquake) -> MarkerSpec:
    """Derive marker parameters for an earthquake.

    Pure function. Color comes from depth, radius from magnitude.
    """
    return MarkerSpec(
        latitude=earthquake.latitude,
        longitude=earthquake.longitude,
        fill_color=choose_color(earthquake.depth),
        radius=get_radius(earthquake.magnitude),
        popup_html=format_popup(earthquake),
    )


def build_legend() -> LegendSpec:
    """Build the depth legend from the depth scale."""
    return LegendSpec(
        title=LEGEND_TITLE,
        entries=tuple(legend_entries()),
    )


def build_scene(
    time_frame: str,
    feature_collection: dict[str, Any],
    boundary_collection: dict[str, Any],
    config: Config,
) -> SceneSpec:
    """Build the full scene description from the fetched documents.

    Pure function. Features without a usable position are dropped from both
    the markers and the heat samples.

    Args:
        time_frame: Time frame the feature collection was fetched for
        feature_collection: USGS GeoJSON FeatureCollection
        boundary_collection: Plate boundary GeoJSON FeatureCollection
        config: Map configuration (center, zoom, heatmap, base layers)

    Returns:
        SceneSpec ready to be rendered
    """
    earthquakes = parse_earthquakes(feature_collection)

    return SceneSpec(
        time_frame=time_frame,
        center=config.center,
        zoom=config.zoom,
        base_layers=tuple(config.base_layers),
        markers=tuple(create_marker(e) for e in earthquakes),
        heat_samples=tuple(e.coordinates for e in earthquakes),
        heat_radius=config.heat_radius,
        heat_blur=config.heat_blur,
        boundaries=boundary_collection,
        boundary_style=BoundaryStyle(),
        legend=build_legend(),
    )

"""Map Renderer - Imperative Shell.

This module builds interactive Leaflet maps with folium from a SceneSpec.
Scene content (colors, radii, popups, legend rows) is decided in the core
module; this layer only maps it onto folium objects and serializes HTML.
"""

import copy
import logging
from dataclasses import dataclass

import folium
from folium.plugins import HeatMap

from src.core.scene import (
    EARTHQUAKES_OVERLAY,
    HEATMAP_OVERLAY,
    PLATES_OVERLAY,
    LegendSpec,
    SceneSpec,
)


logger = logging.getLogger(__name__)


# Bottom/right offsets of the legend box, keyed by legend position
LEGEND_OFFSETS = {
    "bottomright": "bottom: 30px; right: 10px;",
    "bottomleft": "bottom: 30px; left: 10px;",
    "topright": "top: 10px; right: 10px;",
    "topleft": "top: 10px; left: 10px;",
}

LEGEND_CLASS = "info legend"


@dataclass
class RenderedMap:
    """A live folium map together with its overlay layers.

    Attributes:
        map: The folium Map
        markers: Feature group holding one CircleMarker per earthquake
        heatmap: Heat density layer
        boundaries: Plate boundary layer
    """
    map: folium.Map
    markers: folium.FeatureGroup
    heatmap: HeatMap
    boundaries: folium.GeoJson

    def to_html(self) -> str:
        """Serialize the map to a standalone HTML document."""
        return self.map.get_root().render()


def render_legend_html(legend: LegendSpec) -> str:
    """Build legend HTML for a legend spec."""
    offset = LEGEND_OFFSETS.get(legend.position, LEGEND_OFFSETS["bottomright"])
    rows = "".join(
        f'<i style="background:{entry.color}; width: 18px; height: 18px; '
        f'float: left; margin-right: 8px; opacity: 0.8;"></i>{entry.label}<br>'
        for entry in legend.entries
    )
    return (
        f'<div class="{LEGEND_CLASS}" style="position: fixed; {offset} '
        f'z-index: 9999; background-color: white; padding: 6px 8px; '
        f'border-radius: 5px; box-shadow: 0 0 15px rgba(0,0,0,0.2); '
        f'line-height: 18px; color: #555;">'
        f"<h3>{legend.title}</h3>{rows}</div>"
    )


class MapRenderer:
    """Renders SceneSpecs into folium maps.

    This is part of the imperative shell. Every call builds a brand new
    folium.Map, so nothing from a previous render leaks into the next one.
    """

    def __init__(self, collapsed_layer_control: bool = True) -> None:
        """Initialize map renderer.

        Args:
            collapsed_layer_control: Whether the layer switcher starts collapsed
        """
        self.collapsed_layer_control = collapsed_layer_control

    def _add_base_layers(self, scene: SceneSpec, fmap: folium.Map) -> None:
        for index, layer in enumerate(scene.base_layers):
            folium.TileLayer(
                tiles=layer.url,
                attr=layer.attribution,
                name=layer.name,
                overlay=False,
                control=True,
                show=index == 0,
            ).add_to(fmap)

    def _build_markers(self, scene: SceneSpec) -> folium.FeatureGroup:
        group = folium.FeatureGroup(name=EARTHQUAKES_OVERLAY, show=True)

        for marker in scene.markers:
            folium.CircleMarker(
                location=[marker.latitude, marker.longitude],
                radius=marker.radius,
                color=marker.outline_color,
                fill=True,
                fill_color=marker.fill_color,
                fill_opacity=marker.fill_opacity,
                popup=folium.Popup(marker.popup_html),
            ).add_to(group)

        return group

    def _build_heatmap(self, scene: SceneSpec) -> HeatMap:
        return HeatMap(
            [list(sample) for sample in scene.heat_samples],
            name=HEATMAP_OVERLAY,
            radius=scene.heat_radius,
            blur=scene.heat_blur,
            show=False,
        )

    def _build_boundaries(self, scene: SceneSpec) -> folium.GeoJson:
        # folium may tag features with ids; keep the scene document untouched
        data = copy.deepcopy(scene.boundaries)
        if not scene.boundary_count:
            return folium.GeoJson(data, name=PLATES_OVERLAY, show=True)

        style = scene.boundary_style.as_dict()
        return folium.GeoJson(
            data,
            name=PLATES_OVERLAY,
            style_function=lambda feature: dict(style),
            show=True,
        )

    def render(self, scene: SceneSpec) -> RenderedMap:
        """Build a live folium map for a scene.

        Args:
            scene: Scene description from the core module

        Returns:
            RenderedMap with the map and its three overlays
        """
        logger.info(
            "Rendering map for '%s': %d markers, %d boundary features",
            scene.time_frame,
            len(scene.markers),
            scene.boundary_count,
        )

        fmap = folium.Map(
            location=list(scene.center),
            zoom_start=scene.zoom,
            tiles=None,
        )
        self._add_base_layers(scene, fmap)

        markers = self._build_markers(scene)
        heatmap = self._build_heatmap(scene)
        boundaries = self._build_boundaries(scene)

        markers.add_to(fmap)
        boundaries.add_to(fmap)
        heatmap.add_to(fmap)

        folium.LayerControl(collapsed=self.collapsed_layer_control).add_to(fmap)

        fmap.get_root().html.add_child(folium.Element(render_legend_html(scene.legend)))

        return RenderedMap(
            map=fmap,
            markers=markers,
            heatmap=heatmap,
            boundaries=boundaries,
        )

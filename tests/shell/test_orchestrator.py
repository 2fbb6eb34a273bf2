"""Tests for the Orchestrator module.

Tests the coordination between functional core and imperative shell.
The feed client is mocked; scenes are rendered with the real folium renderer.
"""

from unittest.mock import Mock

import folium
import pytest

from src.core.config import Config
from src.orchestrator import Orchestrator, RenderResult, SceneHandle
from src.shell.feed_client import FeedClient, FetchResult
from src.shell.map_renderer import LEGEND_CLASS, MapRenderer


def _feature(lon, lat, depth, mag, title):
    return {
        "type": "Feature",
        "properties": {"mag": mag, "title": title},
        "geometry": {"type": "Point", "coordinates": [lon, lat, depth]},
    }


BOUNDARIES = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"Name": "PA-NA"},
            "geometry": {"type": "LineString", "coordinates": [[-125.0, 40.3], [-124.4, 40.5]]},
        },
        {
            "type": "Feature",
            "properties": {"Name": "NA-CO"},
            "geometry": {"type": "LineString", "coordinates": [[-104.0, 18.0], [-103.0, 17.5]]},
        },
    ],
}

FEEDS = {
    "day": {
        "type": "FeatureCollection",
        "features": [_feature(-94.5, 40.7, 10, 3, "M 3.0 - test")],
    },
    "week": {
        "type": "FeatureCollection",
        "features": [
            _feature(-150.2, 61.3, 95, 4.5, "M 4.5 - Alaska"),
            _feature(-117.6, 35.7, 8, 2.1, "M 2.1 - Ridgecrest"),
            _feature(139.7, 35.6, 45, 5.0, "M 5.0 - Tokyo"),
        ],
    },
}


def _fetch_ok(time_frame):
    return FetchResult(success=True, features=FEEDS[time_frame], boundaries=BOUNDARIES)


@pytest.fixture
def feed_client():
    client = Mock(spec=FeedClient)
    client.fetch_all.side_effect = _fetch_ok
    return client


@pytest.fixture
def orchestrator(feed_client):
    return Orchestrator(Config(), feed_client=feed_client, renderer=MapRenderer())


class TestOrchestratorInit:
    """Tests for Orchestrator construction."""

    def test_starts_idle(self, orchestrator):
        assert orchestrator.current is None
        assert orchestrator.is_rendered is False

    def test_builds_feed_client_from_config(self):
        config = Config(
            feed_url_template="https://example.com/{time_frame}.json",
            boundaries_url="https://example.com/plates.json",
            request_timeout=5,
        )
        orchestrator = Orchestrator(config)

        assert orchestrator.feed_client.feed_url("day") == "https://example.com/day.json"
        assert orchestrator.feed_client.boundaries_url == "https://example.com/plates.json"
        assert orchestrator.feed_client.timeout == 5


class TestRender:
    """Tests for Orchestrator.render()."""

    def test_successful_render_installs_scene(self, orchestrator, feed_client):
        result = orchestrator.render("day")

        assert isinstance(result, RenderResult)
        assert result.success is True
        assert isinstance(result.handle, SceneHandle)
        assert orchestrator.current is result.handle
        assert orchestrator.is_rendered is True
        feed_client.fetch_all.assert_called_once_with("day")

    def test_scene_content(self, orchestrator):
        result = orchestrator.render("day")
        scene = result.handle.scene

        assert len(scene.markers) == 1
        assert scene.markers[0].fill_color == "#98ee00"
        assert scene.markers[0].radius == 12
        assert "Depth: 10m" in scene.markers[0].popup_html
        assert scene.boundary_count == 2

    def test_html_is_serialized(self, orchestrator):
        result = orchestrator.render("day")
        assert result.handle.html.startswith("<!DOCTYPE html>")
        assert result.handle.time_frame == "day"

    def test_uses_default_time_frame(self, orchestrator, feed_client):
        result = orchestrator.render()

        assert result.time_frame == "week"
        feed_client.fetch_all.assert_called_once_with("week")

    def test_summary(self, orchestrator):
        result = orchestrator.render("week")
        assert result.summary == "Rendered 'week': 3 earthquakes, 2 plate boundaries"

    def test_rerender_replaces_previous_scene(self, orchestrator):
        first = orchestrator.render("week")
        second = orchestrator.render("day")

        assert orchestrator.current is second.handle
        assert second.handle is not first.handle
        assert second.handle.rendered.map is not first.handle.rendered.map
        assert second.handle.generation > first.handle.generation

        # Nothing from the week scene is carried into the day scene
        assert len(second.handle.scene.markers) == 1
        circles = [
            child for child in second.handle.rendered.markers._children.values()
            if isinstance(child, folium.CircleMarker)
        ]
        assert len(circles) == 1
        html = second.handle.html
        assert html.count(f'class="{LEGEND_CLASS}"') == 1
        assert "Alaska" not in html
        assert "M 3.0 - test" in html

    def test_fetch_failure_keeps_current_scene(self, orchestrator, feed_client):
        installed = orchestrator.render("day").handle
        feed_client.fetch_all.side_effect = lambda tf: FetchResult(
            success=False, error="Failed to fetch earthquakes: 503"
        )

        result = orchestrator.render("week")

        assert result.success is False
        assert result.handle is None
        assert result.error == "Failed to fetch earthquakes: 503"
        assert orchestrator.current is installed
        assert "failed" in result.summary

    def test_fetch_failure_from_idle_stays_idle(self, orchestrator, feed_client):
        feed_client.fetch_all.side_effect = lambda tf: FetchResult(
            success=False, error="Failed to fetch plate boundaries: 404"
        )

        result = orchestrator.render("day")

        assert result.success is False
        assert orchestrator.current is None

    def test_renderer_not_called_on_failure(self, feed_client):
        feed_client.fetch_all.side_effect = lambda tf: FetchResult(success=False, error="boom")
        renderer = Mock(spec=MapRenderer)
        orchestrator = Orchestrator(Config(), feed_client=feed_client, renderer=renderer)

        orchestrator.render("day")

        renderer.render.assert_not_called()


class TestSupersededRenders:
    """Tests for renders overtaken by a newer request."""

    def test_older_render_is_discarded(self, orchestrator, feed_client):
        """A render that finishes after a newer one started is not installed."""
        newer_results = []

        def slow_fetch(time_frame):
            if time_frame == "week" and not newer_results:
                # A newer request arrives while this fetch is still in flight
                newer_results.append(orchestrator.render("day"))
            return _fetch_ok(time_frame)

        feed_client.fetch_all.side_effect = slow_fetch

        older = orchestrator.render("week")

        assert older.success is False
        assert older.superseded is True
        assert older.handle is None
        assert "superseded" in older.summary

        newer = newer_results[0]
        assert newer.success is True
        assert orchestrator.current is newer.handle
        assert orchestrator.current.time_frame == "day"

    def test_older_success_installed_when_newer_fails(self, orchestrator, feed_client):
        """A failed newer request does not discard an older successful render."""
        newer_results = []

        def fetch(time_frame):
            if time_frame == "week" and not newer_results:
                newer_results.append(orchestrator.render("day"))
            if time_frame == "day":
                return FetchResult(success=False, error="Failed to fetch earthquakes: 503")
            return _fetch_ok(time_frame)

        feed_client.fetch_all.side_effect = fetch

        older = orchestrator.render("week")

        newer = newer_results[0]
        assert newer.success is False
        assert newer.superseded is False

        assert older.success is True
        assert older.superseded is False
        assert orchestrator.current is older.handle
        assert orchestrator.current.time_frame == "week"

    def test_sequential_renders_are_not_superseded(self, orchestrator):
        first = orchestrator.render("day")
        second = orchestrator.render("week")

        assert first.superseded is False
        assert second.superseded is False
        assert orchestrator.current.time_frame == "week"

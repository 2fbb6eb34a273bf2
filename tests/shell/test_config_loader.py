"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from src.core.config import Config, TileLayerConfig
from src.shell.config_loader import (
    _parse_tile_layer,
    _resolve_value,
    load_config,
    load_config_from_dict,
    load_config_from_env,
)


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        """Non-string values are returned unchanged."""
        assert _resolve_value(123) == 123
        assert _resolve_value(None) is None
        assert _resolve_value(True) is True

    def test_returns_plain_string_unchanged(self):
        assert _resolve_value("https://example.com") == "https://example.com"

    def test_resolves_env_var_placeholder(self):
        with patch.dict(os.environ, {"TEST_FEED_URL": "https://feed.example/{time_frame}"}):
            assert _resolve_value("${TEST_FEED_URL}") == "https://feed.example/{time_frame}"

    def test_returns_placeholder_if_env_var_not_set(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"

    def test_feed_template_placeholder_is_not_env_var(self):
        """{time_frame} without a leading $ is left alone."""
        value = "https://example.com/all_{time_frame}.geojson"
        assert _resolve_value(value) == value


class TestParseTileLayer:
    """Tests for _parse_tile_layer function."""

    def test_parses_layer(self):
        layer = _parse_tile_layer({
            "name": "Dark",
            "url": "https://tiles.example/{z}/{x}/{y}.png",
            "attribution": "Example",
        })
        assert layer == TileLayerConfig(
            name="Dark",
            url="https://tiles.example/{z}/{x}/{y}.png",
            attribution="Example",
        )

    def test_attribution_optional(self):
        layer = _parse_tile_layer({"name": "Plain", "url": "https://t/{z}/{x}/{y}.png"})
        assert layer.attribution == ""

    def test_missing_name_raises(self):
        with pytest.raises(KeyError):
            _parse_tile_layer({"url": "https://t/{z}/{x}/{y}.png"})


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == Config()

    def test_parses_all_fields(self):
        config = load_config_from_dict({
            "feed_url_template": "https://example.com/{time_frame}.json",
            "boundaries_url": "https://example.com/plates.json",
            "default_time_frame": "day",
            "time_frames": ["hour", "day"],
            "center": {"latitude": 35.0, "longitude": 139.0},
            "zoom": 5,
            "heat_radius": 30,
            "heat_blur": 10,
            "request_timeout": 10,
            "base_layers": [
                {"name": "Only", "url": "https://t/{z}/{x}/{y}.png", "attribution": "A"},
            ],
        })

        assert config.feed_url_template == "https://example.com/{time_frame}.json"
        assert config.boundaries_url == "https://example.com/plates.json"
        assert config.default_time_frame == "day"
        assert config.time_frames == ["hour", "day"]
        assert config.center == (35.0, 139.0)
        assert config.zoom == 5
        assert config.heat_radius == 30
        assert config.heat_blur == 10
        assert config.request_timeout == 10
        assert [layer.name for layer in config.base_layers] == ["Only"]

    def test_partial_center(self):
        config = load_config_from_dict({"center": {"latitude": 10.0}})
        assert config.center == (10.0, -94.5)

    def test_resolves_url_placeholders(self):
        with patch.dict(os.environ, {"PLATES_URL": "https://mirror.example/plates.json"}):
            config = load_config_from_dict({"boundaries_url": "${PLATES_URL}"})
        assert config.boundaries_url == "https://mirror.example/plates.json"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_gives_defaults(self):
        config = load_config("/nonexistent/config.yaml")
        assert config == Config()

    def test_empty_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("")
            assert load_config(path) == Config()

    def test_loads_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text(yaml.safe_dump({"default_time_frame": "month", "zoom": 4}))

            config = load_config(str(path))

        assert config.default_time_frame == "month"
        assert config.zoom == 4

    def test_uses_config_path_env(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text("default_time_frame: hour\n")

            with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
                config = load_config()

        assert config.default_time_frame == "hour"

    def test_invalid_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("zoom: [3\n")

            with pytest.raises(yaml.YAMLError):
                load_config(path)

    def test_repo_config_matches_defaults(self):
        """The shipped config/config.yaml spells out the defaults."""
        path = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
        assert load_config(path) == Config()


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_defaults_without_env(self):
        with patch.dict(os.environ, {}, clear=True):
            assert load_config_from_env() == Config()

    def test_reads_env_vars(self):
        env = {
            "EARTHQUAKE_FEED_URL": "https://example.com/{time_frame}.json",
            "PLATE_BOUNDARIES_URL": "https://example.com/plates.json",
            "DEFAULT_TIME_FRAME": "day",
            "REQUEST_TIMEOUT": "7",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.feed_url_template == "https://example.com/{time_frame}.json"
        assert config.boundaries_url == "https://example.com/plates.json"
        assert config.default_time_frame == "day"
        assert config.request_timeout == 7

"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, TileLayerConfig) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, TileLayerConfig, validate_config


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be a ${VAR} environment placeholder.

    Non-string values and unset variables are returned unchanged.

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        env_value = os.environ.get(value[2:-1])
        if env_value:
            return env_value

    return value


def _parse_tile_layer(data: dict[str, Any]) -> TileLayerConfig:
    """Parse a base map tile layer from config data."""
    return TileLayerConfig(
        name=data["name"],
        url=_resolve_value(data["url"]),
        attribution=data.get("attribution", ""),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).
    Missing keys fall back to the Config defaults.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    center = data.get("center", {})

    base_layers = defaults.base_layers
    if "base_layers" in data:
        base_layers = [_parse_tile_layer(layer) for layer in data["base_layers"]]

    return Config(
        feed_url_template=_resolve_value(
            data.get("feed_url_template", defaults.feed_url_template)
        ),
        boundaries_url=_resolve_value(
            data.get("boundaries_url", defaults.boundaries_url)
        ),
        default_time_frame=data.get("default_time_frame", defaults.default_time_frame),
        time_frames=list(data.get("time_frames", defaults.time_frames)),
        center_latitude=float(center.get("latitude", defaults.center_latitude)),
        center_longitude=float(center.get("longitude", defaults.center_longitude)),
        zoom=int(data.get("zoom", defaults.zoom)),
        heat_radius=int(data.get("heat_radius", defaults.heat_radius)),
        heat_blur=int(data.get("heat_blur", defaults.heat_blur)),
        request_timeout=int(data.get("request_timeout", defaults.request_timeout)),
        base_layers=base_layers,
    )


def _log_validation(config: Config) -> None:
    """Log configuration problems without failing the load."""
    result = validate_config(config)

    for warning in result.warnings:
        logger.warning("Config warning (%s): %s", warning.field, warning.message)

    for error in result.critical_errors:
        logger.error("Config error (%s): %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: default time frame '%s', %d base layers",
        config.default_time_frame,
        len(config.base_layers),
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        EARTHQUAKE_FEED_URL: Feed URL template with a {time_frame} placeholder
        PLATE_BOUNDARIES_URL: Plate boundary GeoJSON URL
        DEFAULT_TIME_FRAME: Time frame used when a request gives none
        REQUEST_TIMEOUT: HTTP timeout in seconds

    Returns:
        Config object from environment
    """
    defaults = Config()

    config = Config(
        feed_url_template=os.environ.get("EARTHQUAKE_FEED_URL", defaults.feed_url_template),
        boundaries_url=os.environ.get("PLATE_BOUNDARIES_URL", defaults.boundaries_url),
        default_time_frame=os.environ.get("DEFAULT_TIME_FRAME", defaults.default_time_frame),
        request_timeout=int(os.environ.get("REQUEST_TIMEOUT", defaults.request_timeout)),
    )
    _log_validation(config)

    return config

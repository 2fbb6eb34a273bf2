"""Web API Handler - Serves derived map scene data as JSON.

This module provides an HTTP endpoint for frontends that draw the map
themselves. It exposes the same markers, heat samples and legend the
HTML map is built from.
Part of the imperative shell - handles HTTP I/O.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from flask import Request, Response

from src.core.config import Config
from src.core.scene import SceneSpec, build_scene
from src.shell.feed_client import FeedClient

logger = logging.getLogger(__name__)

# CORS allowed origins
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8080",
]


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Generate CORS headers for the response."""
    headers = {
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": "3600",
    }
    if origin and origin in ALLOWED_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    else:
        headers["Access-Control-Allow-Origin"] = ALLOWED_ORIGINS[0]
    return headers


def _json_response(
    data: dict[str, Any],
    status: int = 200,
    origin: str | None = None,
) -> Response:
    """Create a JSON response with CORS headers."""
    response = Response(
        json.dumps(data, default=str),
        status=status,
        mimetype="application/json",
    )
    for key, value in _cors_headers(origin).items():
        response.headers[key] = value
    return response


def scene_to_dict(scene: SceneSpec) -> dict[str, Any]:
    """Convert a SceneSpec to a JSON-serializable dict.

    The boundary document itself is not included, only its feature count.
    """
    return {
        "time_frame": scene.time_frame,
        "center": {"lat": scene.center[0], "lng": scene.center[1]},
        "zoom": scene.zoom,
        "base_layers": [
            {"name": layer.name, "url": layer.url}
            for layer in scene.base_layers
        ],
        "markers": [asdict(marker) for marker in scene.markers],
        "heat_samples": [list(sample) for sample in scene.heat_samples],
        "heat": {"radius": scene.heat_radius, "blur": scene.heat_blur},
        "boundary_count": scene.boundary_count,
        "boundary_style": scene.boundary_style.as_dict(),
        "legend": {
            "title": scene.legend.title,
            "position": scene.legend.position,
            "entries": [asdict(entry) for entry in scene.legend.entries],
        },
    }


def get_scene(
    request: Request,
    config: Config | None = None,
    client: FeedClient | None = None,
) -> Response:
    """API endpoint: Get the map scene for a time frame.

    Query params:
        time_frame: Feed time frame (e.g., "hour", "day", "week", "month")

    Returns:
        JSON with the scene description
    """
    origin = request.headers.get("Origin")

    # Handle CORS preflight
    if request.method == "OPTIONS":
        response = Response("", status=204)
        for key, value in _cors_headers(origin).items():
            response.headers[key] = value
        return response

    config = config or Config()
    time_frame = request.args.get("time_frame") or config.default_time_frame

    client = client or FeedClient(
        feed_url_template=config.feed_url_template,
        boundaries_url=config.boundaries_url,
        timeout=config.request_timeout,
    )

    fetched = client.fetch_all(time_frame)
    if not fetched.success:
        logger.error("Scene request for '%s' failed: %s", time_frame, fetched.error)
        return _json_response(
            {"error": "Failed to fetch earthquake data", "time_frame": time_frame},
            status=502,
            origin=origin,
        )

    scene = build_scene(time_frame, fetched.features, fetched.boundaries, config)

    response_data = scene_to_dict(scene)
    response_data["fetched_at"] = datetime.now(timezone.utc).isoformat()

    return _json_response(response_data, origin=origin)

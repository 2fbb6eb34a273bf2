"""Cloud Function Entry Point.

This module provides the HTTP entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration, invokes the orchestrator
and returns the rendered map page.
"""

import html
import logging
import os

import functions_framework
from flask import Request, Response

from src.core.config import Config
from src.orchestrator import Orchestrator, SceneHandle
from src.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


_orchestrator: Orchestrator | None = None


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("EARTHQUAKE_FEED_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def get_orchestrator() -> Orchestrator:
    """Get or create the orchestrator holding the installed scene."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator(_get_config())
    return _orchestrator


def render_time_frame_form(time_frames: list[str], selected: str) -> str:
    """Build the time frame selector and filter button.

    The form re-requests the page with ?time_frame=<value>.
    """
    options = "".join(
        '<option value="{0}"{1}>{0}</option>'.format(
            html.escape(frame),
            " selected" if frame == selected else "",
        )
        for frame in time_frames
    )
    return (
        '<form id="filter-form" method="get" style="position: fixed; top: 10px; '
        'left: 60px; z-index: 9999; background-color: white; padding: 6px 8px; '
        'border-radius: 5px;">'
        '<label for="time_frame">Time frame: </label>'
        f'<select id="time_frame" name="time_frame">{options}</select> '
        '<button id="filter-btn" type="submit">Filter</button>'
        "</form>"
    )


def build_page(handle: SceneHandle, config: Config) -> str:
    """Insert the selector form into the rendered map page."""
    form = render_time_frame_form(config.time_frames, handle.time_frame)
    return handle.html.replace("<body>", f"<body>\n{form}", 1)


def _error_page(message: str) -> str:
    return (
        "<!DOCTYPE html><html><head><title>Earthquake map</title></head>"
        f"<body><h1>Earthquake map unavailable</h1><p>{html.escape(message)}</p>"
        "</body></html>"
    )


@functions_framework.http
def earthquake_map(request: Request) -> Response:
    """HTTP Cloud Function entry point.

    Renders the earthquake map for the requested time frame.

    Query params:
        time_frame: Feed time frame (e.g., "hour", "day", "week", "month")

    Args:
        request: Flask request object

    Returns:
        HTML page with the map, or an error page
    """
    try:
        orchestrator = get_orchestrator()
        time_frame = request.args.get("time_frame") or orchestrator.config.default_time_frame

        result = orchestrator.render(time_frame)

        if result.superseded:
            # A newer request owns the scene now; serve what is installed
            current = orchestrator.current
            if current is not None:
                return Response(
                    build_page(current, orchestrator.config),
                    status=200,
                    mimetype="text/html",
                )

        if not result.success:
            logger.error("Render failed: %s", result.summary)
            return Response(
                _error_page(result.error or result.summary),
                status=502,
                mimetype="text/html",
            )

        return Response(
            build_page(result.handle, orchestrator.config),
            status=200,
            mimetype="text/html",
        )

    except Exception as e:
        logger.exception("Unexpected error rendering earthquake map")
        return Response(_error_page(str(e)), status=500, mimetype="text/html")


# For local testing
if __name__ == "__main__":
    print("Rendering earthquake map locally...")

    # Mock request for local testing
    class MockRequest:
        args: dict[str, str] = {}

    response = earthquake_map(MockRequest())
    print(f"Response ({response.status_code}): {len(response.get_data())} bytes")

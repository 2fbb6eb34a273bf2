#!/usr/bin/env python3
"""Render the earthquake map to a standalone HTML file.

Fetches the USGS feed for a time frame plus the tectonic plate boundaries
and writes an interactive Leaflet map (markers, heatmap, plate boundaries,
layer switcher and depth legend).

Usage:
    # Last week of earthquakes (default time frame from config)
    python scripts/render_map.py

    # Last day, custom output path
    python scripts/render_map.py --time-frame day --output day.html

    # Only print what would be fetched
    python scripts/render_map.py --time-frame month --dry-run

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.orchestrator import Orchestrator
from src.shell.config_loader import load_config

logging.basicConfig(
    level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render USGS earthquakes and tectonic plates to an HTML map",
    )
    parser.add_argument(
        "--time-frame",
        type=str,
        default=None,
        help="Feed time frame: hour, day, week or month (default: from config)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="earthquake_map.html",
        help="Output HTML path (default: earthquake_map.html)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (default: CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the URLs that would be fetched without fetching",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    orchestrator = Orchestrator(config)
    time_frame = args.time_frame or config.default_time_frame

    if args.dry_run:
        logger.info("DRY RUN - Would fetch:")
        logger.info("  - %s", orchestrator.feed_client.feed_url(time_frame))
        logger.info("  - %s", orchestrator.feed_client.boundaries_url)
        return 0

    result = orchestrator.render(time_frame)

    if not result.success:
        logger.error(result.summary)
        return 1

    output = Path(args.output)
    output.write_text(result.handle.html, encoding="utf-8")

    logger.info(result.summary)
    logger.info("Map written to %s", output)

    return 0


if __name__ == "__main__":
    sys.exit(main())

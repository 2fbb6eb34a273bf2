"""GeoJSON Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS earthquake summary feed
and the tectonic plate boundary dataset. All I/O is contained here; parsing
and scene building are in the core modules.
"""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from src.core.config import DEFAULT_BOUNDARIES_URL, DEFAULT_FEED_URL_TEMPLATE


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


@dataclass
class FetchResult:
    """Result of fetching both documents needed for a scene.

    Either both documents are present, or neither is and error says why.

    Attributes:
        success: Whether both fetches succeeded
        features: Earthquake FeatureCollection
        boundaries: Plate boundary FeatureCollection
        error: Error message if failed
    """
    success: bool
    features: dict[str, Any] | None = None
    boundaries: dict[str, Any] | None = None
    error: str | None = None


class FeedClient:
    """Client for fetching the earthquake feed and plate boundaries.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        feed_url_template: str = DEFAULT_FEED_URL_TEMPLATE,
        boundaries_url: str = DEFAULT_BOUNDARIES_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize feed client.

        Args:
            feed_url_template: Earthquake feed URL with {time_frame} placeholder
            boundaries_url: Plate boundary GeoJSON URL
            timeout: Request timeout in seconds
        """
        self.feed_url_template = feed_url_template
        self.boundaries_url = boundaries_url
        self.timeout = timeout

    def feed_url(self, time_frame: str) -> str:
        """Build the feed URL for a time frame.

        The token is interpolated as-is; the feed decides what is valid.
        """
        return self.feed_url_template.format(time_frame=time_frame)

    def _get_json(self, url: str) -> dict[str, Any]:
        """GET a URL and decode its JSON body.

        Raises:
            requests.RequestException: If the request fails or the body is not JSON
        """
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise requests.exceptions.InvalidJSONError(
                f"Expected a GeoJSON object from {url}, got {type(data).__name__}"
            )
        return data

    def fetch_earthquakes(self, time_frame: str) -> dict[str, Any]:
        """Fetch the earthquake FeatureCollection for a time frame.

        This method performs HTTP I/O.

        Args:
            time_frame: Feed selector token (e.g., "hour", "day", "week", "month")

        Returns:
            Raw GeoJSON FeatureCollection

        Raises:
            requests.RequestException: If the request fails
        """
        url = self.feed_url(time_frame)

        logger.info("Fetching earthquakes from %s", url)

        data = self._get_json(url)
        count = len(data.get("features") or [])

        logger.info("Fetched %d earthquake features (%s)", count, time_frame)

        return data

    def fetch_boundaries(self) -> dict[str, Any]:
        """Fetch the tectonic plate boundary FeatureCollection.

        This method performs HTTP I/O.

        Returns:
            Raw GeoJSON FeatureCollection

        Raises:
            requests.RequestException: If the request fails
        """
        logger.info("Fetching plate boundaries from %s", self.boundaries_url)

        data = self._get_json(self.boundaries_url)

        logger.info(
            "Fetched %d plate boundary features",
            len(data.get("features") or []),
        )

        return data

    def fetch_all(self, time_frame: str) -> FetchResult:
        """Fetch the earthquake feed, then the plate boundaries.

        The boundary request is only issued once the earthquake request has
        succeeded. Any failure is reported in the result instead of raised.

        Args:
            time_frame: Feed selector token

        Returns:
            FetchResult with both documents or an error
        """
        try:
            features = self.fetch_earthquakes(time_frame)
        except requests.RequestException as e:
            error_msg = f"Failed to fetch earthquakes: {e}"
            logger.error(error_msg)
            return FetchResult(success=False, error=error_msg)

        try:
            boundaries = self.fetch_boundaries()
        except requests.RequestException as e:
            error_msg = f"Failed to fetch plate boundaries: {e}"
            logger.error(error_msg)
            return FetchResult(success=False, error=error_msg)

        return FetchResult(
            success=True,
            features=features,
            boundaries=boundaries,
        )

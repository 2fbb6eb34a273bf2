"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components:

    fetch (feed, then boundaries) -> build scene (pure) -> render (folium)

It also owns the single installed scene handle, which every successful
render replaces as a whole.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.core.config import Config
from src.core.scene import SceneSpec, build_scene
from src.shell.feed_client import FeedClient
from src.shell.map_renderer import MapRenderer, RenderedMap


logger = logging.getLogger(__name__)


@dataclass
class SceneHandle:
    """The currently installed map scene.

    Attributes:
        generation: Sequence number of the render that produced it
        scene: Scene description
        rendered: Live folium map and overlays
        html: Serialized standalone HTML page
        rendered_at: When the scene was installed (UTC)
    """
    generation: int
    scene: SceneSpec
    rendered: RenderedMap
    html: str
    rendered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def time_frame(self) -> str:
        return self.scene.time_frame


@dataclass
class RenderResult:
    """Result of a render request.

    Attributes:
        time_frame: Requested time frame
        success: Whether a new scene was installed
        handle: The installed scene handle, if successful
        superseded: True if a newer render installed its scene first
        error: Error message if failed
    """
    time_frame: str
    success: bool
    handle: SceneHandle | None = None
    superseded: bool = False
    error: str | None = None

    @property
    def summary(self) -> str:
        """Human-readable summary of the render result."""
        if self.success and self.handle is not None:
            return (
                f"Rendered '{self.time_frame}': "
                f"{len(self.handle.scene.markers)} earthquakes, "
                f"{self.handle.scene.boundary_count} plate boundaries"
            )
        if self.superseded:
            return f"Render of '{self.time_frame}' superseded by a newer request"
        return f"Render of '{self.time_frame}' failed: {self.error}"


class Orchestrator:
    """Coordinates fetching, scene building and map rendering.

    This class wires together:
    - Feed client (fetches earthquakes, then plate boundaries)
    - Core functions (parsing, depth colors, scene building)
    - Map renderer (folium)

    A render installs its scene unless a newer render has already installed
    one. The installed scene is always the newest successful request.
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        renderer: MapRenderer | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
            renderer: Map renderer (created if not provided)
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(
            feed_url_template=config.feed_url_template,
            boundaries_url=config.boundaries_url,
            timeout=config.request_timeout,
        )
        self.renderer = renderer or MapRenderer()

        self._lock = threading.Lock()
        self._generation = 0
        self._current: SceneHandle | None = None
        self._installed_generation = 0

    @property
    def current(self) -> SceneHandle | None:
        """The installed scene handle, or None before the first render."""
        with self._lock:
            return self._current

    @property
    def is_rendered(self) -> bool:
        return self.current is not None

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _install(self, handle: SceneHandle) -> bool:
        """Install a handle unless a newer scene is already installed.

        Returns:
            True if the handle was installed
        """
        with self._lock:
            if handle.generation <= self._installed_generation:
                return False
            self._current = handle
            self._installed_generation = handle.generation
            return True

    def render(self, time_frame: str | None = None) -> RenderResult:
        """Fetch data and render a fresh map scene.

        This is the main entry point that:
        1. Fetches the earthquake feed for the time frame
        2. Fetches the plate boundaries (only after step 1 succeeds)
        3. Builds the scene description (pure core function)
        4. Renders it with folium and serializes HTML
        5. Replaces the installed scene handle

        On failure the installed scene is left as it was.

        Args:
            time_frame: Feed time frame (config default if None)

        Returns:
            RenderResult describing what happened
        """
        time_frame = time_frame or self.config.default_time_frame
        generation = self._next_generation()

        logger.info("Starting render #%d for time frame '%s'", generation, time_frame)

        # Steps 1-2: Sequential fetches
        fetched = self.feed_client.fetch_all(time_frame)
        if not fetched.success:
            return RenderResult(
                time_frame=time_frame,
                success=False,
                error=fetched.error,
            )

        # Step 3: Build scene (pure core function)
        scene = build_scene(
            time_frame,
            fetched.features,
            fetched.boundaries,
            self.config,
        )

        dropped = len(fetched.features.get("features") or []) - len(scene.markers)
        if dropped:
            logger.debug("Dropped %d features without a usable position", dropped)

        # Step 4: Render
        rendered = self.renderer.render(scene)
        handle = SceneHandle(
            generation=generation,
            scene=scene,
            rendered=rendered,
            html=rendered.to_html(),
        )

        # Step 5: Replace installed scene
        if not self._install(handle):
            logger.info(
                "Discarding render #%d for '%s': superseded by a newer request",
                generation,
                time_frame,
            )
            return RenderResult(
                time_frame=time_frame,
                success=False,
                superseded=True,
            )

        result = RenderResult(time_frame=time_frame, success=True, handle=handle)
        logger.info("Completed: %s", result.summary)
        return result

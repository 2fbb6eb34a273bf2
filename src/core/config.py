"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field


# USGS summary feed, keyed by time frame (hour, day, week, month)
DEFAULT_FEED_URL_TEMPLATE = (
    "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_{time_frame}.geojson"
)

# PB2002 plate boundaries (Bird, 2003) as GeoJSON
DEFAULT_BOUNDARIES_URL = (
    "https://raw.githubusercontent.com/fraxen/tectonicplates/"
    "refs/heads/master/GeoJSON/PB2002_boundaries.json"
)

DEFAULT_TIME_FRAMES = ["hour", "day", "week", "month"]

OSM_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

OPENTOPOMAP_ATTRIBUTION = (
    'Map data: &copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
    'contributors, <a href="http://viewfinderpanoramas.org">SRTM</a> | Map style: &copy; '
    '<a href="https://opentopomap.org">OpenTopoMap</a> '
    '(<a href="https://creativecommons.org/licenses/by-sa/3.0/">CC-BY-SA</a>)'
)


@dataclass(frozen=True)
class TileLayerConfig:
    """A base map tile source.

    Attributes:
        name: Label shown in the layer switcher
        url: Tile URL template ({s}, {z}, {x}, {y})
        attribution: HTML attribution text required by the tile provider
    """
    name: str
    url: str
    attribution: str


def _default_base_layers() -> list[TileLayerConfig]:
    return [
        TileLayerConfig(
            name="Street",
            url="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
            attribution=OSM_ATTRIBUTION,
        ),
        TileLayerConfig(
            name="Topography",
            url="https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
            attribution=OPENTOPOMAP_ATTRIBUTION,
        ),
    ]


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url_template: Earthquake feed URL with a {time_frame} placeholder
        boundaries_url: Tectonic plate boundary GeoJSON URL
        default_time_frame: Time frame used when the caller gives none
        time_frames: Time frames offered by the selector
        center_latitude: Initial map center latitude
        center_longitude: Initial map center longitude
        zoom: Initial map zoom level
        heat_radius: Heatmap point radius
        heat_blur: Heatmap blur amount
        request_timeout: HTTP timeout in seconds for each fetch
        base_layers: Base map tile layers; the first one is active
    """
    feed_url_template: str = DEFAULT_FEED_URL_TEMPLATE
    boundaries_url: str = DEFAULT_BOUNDARIES_URL
    default_time_frame: str = "week"
    time_frames: list[str] = field(default_factory=lambda: list(DEFAULT_TIME_FRAMES))
    center_latitude: float = 40.7
    center_longitude: float = -94.5
    zoom: int = 3
    heat_radius: int = 50
    heat_blur: int = 15
    request_timeout: int = 30
    base_layers: list[TileLayerConfig] = field(default_factory=_default_base_layers)

    @property
    def center(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.center_latitude, self.center_longitude)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_coordinates(
        config.center_latitude, config.center_longitude,
        "center",
    ))

    if not 0 <= config.zoom <= 18:
        errors.append(ValidationError(
            field="zoom",
            message=f"Zoom {config.zoom} out of range [0, 18]",
        ))

    if config.heat_radius <= 0:
        errors.append(ValidationError(
            field="heat_radius",
            message=f"Heatmap radius must be positive, got {config.heat_radius}",
        ))

    if config.heat_blur <= 0:
        errors.append(ValidationError(
            field="heat_blur",
            message=f"Heatmap blur must be positive, got {config.heat_blur}",
        ))

    if config.request_timeout <= 0:
        errors.append(ValidationError(
            field="request_timeout",
            message=f"Request timeout must be positive, got {config.request_timeout}",
        ))

    if "{time_frame}" not in config.feed_url_template:
        errors.append(ValidationError(
            field="feed_url_template",
            message="Feed URL template has no {time_frame} placeholder",
        ))

    if not config.base_layers:
        errors.append(ValidationError(
            field="base_layers",
            message="At least one base layer is required",
        ))

    # The feed itself decides which tokens are valid; only warn here
    if config.default_time_frame not in config.time_frames:
        errors.append(ValidationError(
            field="default_time_frame",
            message=(
                f"Default time frame '{config.default_time_frame}' "
                f"is not one of {config.time_frames}"
            ),
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )

"""Depth color scale and magnitude sizing - Pure functions.

This module owns the depth bucket table. Both the marker fill color and the
map legend are derived from it, so the two can never disagree.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DepthBucket:
    """One step of the depth color scale.

    Attributes:
        lower_bound: Depth the value must strictly exceed (None = catch-all)
        color: Hex fill color for markers in this bucket
    """
    lower_bound: float | None
    color: str


@dataclass(frozen=True)
class LegendEntry:
    """A single legend row: color swatch and depth range label."""
    color: str
    label: str


# Ordered deepest first; choose_color() takes the first bucket that matches.
DEPTH_BUCKETS: tuple[DepthBucket, ...] = (
    DepthBucket(lower_bound=90, color="#ea2c2c"),
    DepthBucket(lower_bound=70, color="#ea822c"),
    DepthBucket(lower_bound=50, color="#ee9c00"),
    DepthBucket(lower_bound=30, color="#eecc00"),
    DepthBucket(lower_bound=10, color="#d4ee00"),
    DepthBucket(lower_bound=None, color="#98ee00"),
)

# Lower edge shown for the catch-all bucket in the legend
SHALLOWEST_LABEL_DEPTH = -10

# Marker radius per unit of magnitude
RADIUS_PER_MAGNITUDE = 4


def choose_color(depth: float) -> str:
    """Get marker fill color for an earthquake depth.

    Pure function. Buckets are checked deepest first and the first one whose
    bound is strictly exceeded wins. Anything at or below the shallowest
    bound, negative depths included, gets the catch-all color.

    Args:
        depth: Depth below the surface

    Returns:
        Hex color string (e.g., "#ea2c2c")
    """
    for bucket in DEPTH_BUCKETS:
        if bucket.lower_bound is None or depth > bucket.lower_bound:
            return bucket.color
    return DEPTH_BUCKETS[-1].color


def get_radius(magnitude: float) -> float:
    """Get marker radius for an earthquake magnitude.

    Pure function. Linear, with no clamping: a negative magnitude yields a
    negative radius and is passed through as-is.
    """
    return magnitude * RADIUS_PER_MAGNITUDE


def _format_bound(value: float) -> str:
    """Format a bucket bound for display (drops a trailing .0)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def legend_entries() -> list[LegendEntry]:
    """Build the legend rows from the bucket table.

    Pure function.

    Returns:
        Legend entries ordered shallowest first, e.g. "-10-10", "10-30", ..., "90+"
    """
    entries: list[LegendEntry] = []
    upper: float | None = None

    for bucket in DEPTH_BUCKETS:
        lower = bucket.lower_bound
        if lower is None:
            lower = SHALLOWEST_LABEL_DEPTH

        if upper is None:
            label = f"{_format_bound(lower)}+"
        else:
            label = f"{_format_bound(lower)}-{_format_bound(upper)}"

        entries.append(LegendEntry(color=bucket.color, label=label))
        upper = lower

    entries.reverse()
    return entries

"""Map marker styling derived from a Disaster. Pure functions, no renderer state."""

import math
from typing import Optional

from pydantic import BaseModel

from ..alerts.alert_models import Disaster

SEVERITY_COLORS = {
    "critical": "#dc2626",  # red-600
    "warning": "#ea580c",  # orange-600
    "moderate": "#d97706",  # amber-600
    "low": "#16a34a",  # green-600
}

TYPE_COLORS = {
    "wildfire": "#dc2626",
    "earthquake": "#ca8a04",  # yellow-600
    "flood": "#2563eb",  # blue-600
    "storm": "#7c3aed",  # violet-600
    "volcano": "#ea580c",
}

DEFAULT_COLOR = "#3b82f6"  # blue-500

BASE_RADII = {
    "critical": 14,
    "warning": 12,
    "moderate": 10,
    "low": 8,
}

DEFAULT_RADIUS = 10
MIN_RADIUS = 6
MAX_SCALE = 2.5


class MarkerStyle(BaseModel):
    color: str
    radius: float


def marker_color(severity: Optional[str], disaster_type: Optional[str]) -> str:
    """Severity wins; type is only consulted for an absent/unrecognized severity."""
    if severity in SEVERITY_COLORS:
        return SEVERITY_COLORS[severity]
    return TYPE_COLORS.get(disaster_type or "", DEFAULT_COLOR)


def magnitude_scale(
    disaster_type: Optional[str],
    magnitude_value: Optional[float],
    magnitude_unit: Optional[str],
) -> float:
    """
    Multiplier applied to the base radius.

    Returns 1.0 when there is no (non-zero, finite) magnitude. Wildfire acreage at or
    below 100 acres yields a non-positive or undefined log; that collapses to
    0 and leaves the minimum radius to the final clamp.
    """
    if not magnitude_value or not math.isfinite(magnitude_value):
        return 1.0
    if disaster_type == "earthquake":
        return min(magnitude_value / 4, MAX_SCALE)
    if disaster_type == "storm" and magnitude_unit == "kts":
        return min(magnitude_value / 40, MAX_SCALE)
    if disaster_type == "wildfire" and magnitude_unit == "acres":
        if magnitude_value <= 0:
            return 0.0
        return min(math.log10(magnitude_value / 100), MAX_SCALE)
    return min(magnitude_value / 100, MAX_SCALE)


def marker_radius(disaster: Disaster) -> float:
    base = BASE_RADII.get(disaster.severity, DEFAULT_RADIUS)
    size = base * magnitude_scale(disaster.type, disaster.magnitude_value, disaster.magnitude_unit)
    return max(size, MIN_RADIUS)


def marker_style(disaster: Disaster) -> MarkerStyle:
    return MarkerStyle(
        color=marker_color(disaster.severity, disaster.type),
        radius=marker_radius(disaster),
    )


def has_location(disaster: Disaster) -> bool:
    """False for the (0, 0) placeholder given to events without geometry."""
    return not (disaster.lat == 0 and disaster.lng == 0)

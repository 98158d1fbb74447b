"""Disaster normalization: raw EONET events -> Disaster records."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..alerts.alert_models import DISASTER_TYPES, Disaster, SourceRef
from ..utils.time import to_utc_z, utc_now
from .models import RawEvent

CATEGORY_TO_TYPE: Dict[str, str] = {
    "wildfires": "wildfire",
    "severeStorms": "storm",
    "volcanoes": "volcano",
    "earthquakes": "earthquake",
    "floods": "flood",
}

TYPE_TO_CATEGORY: Dict[str, str] = {v: k for k, v in CATEGORY_TO_TYPE.items()}

TIME_RANGE_LIMITS: Dict[str, int] = {
    "12h": 5,
    "24h": 10,
    "7d": 20,
    "30d": 30,
}
DEFAULT_LIMIT = 10


def time_range_limit(time_range: Optional[str]) -> int:
    """
    Map a time-range token to the number of events to request.

    The token only sizes the request; events are not filtered by age.
    Unrecognized tokens fall back to 10.
    """
    return TIME_RANGE_LIMITS.get(time_range or "", DEFAULT_LIMIT)


def category_for_type(disaster_type: Optional[str]) -> Optional[str]:
    """EONET category id for a disaster type, or None for 'all'/unrecognized."""
    if not disaster_type:
        return None
    return TYPE_TO_CATEGORY.get(disaster_type)


def classify_type(event: RawEvent) -> str:
    """Only the first category is consulted."""
    return CATEGORY_TO_TYPE.get(event.first_category_id or "", "unknown")


def infer_severity(disaster_type: str, magnitude_value: Optional[float]) -> str:
    """
    Type-specific, magnitude-gated severity.

    A missing magnitude fails every threshold.
    """
    magnitude = magnitude_value if magnitude_value is not None else float("-inf")
    if disaster_type == "wildfire":
        return "critical" if magnitude > 1000 else "warning"
    if disaster_type == "storm":
        return "critical" if magnitude > 50 else "warning"
    if disaster_type == "volcano":
        return "warning"
    if disaster_type == "earthquake":
        return "critical" if magnitude > 6 else "moderate"
    if disaster_type == "flood":
        return "warning"
    return "moderate"


def normalize_event(event: RawEvent, now: Optional[datetime] = None) -> Disaster:
    """
    Turn one raw EONET event into a Disaster.

    Location and magnitude come from the last geometry entry. The feed's
    [lng, lat] order is swapped into lat/lng.
    """
    disaster_type = classify_type(event)
    geometry = event.latest_geometry

    lat, lng = 0.0, 0.0
    magnitude_value = None
    magnitude_unit = None
    updated_at = None
    if geometry is not None:
        point = geometry.point()
        if point is not None:
            lng, lat = point
        magnitude_value = geometry.magnitude_value
        magnitude_unit = geometry.magnitude_unit
        updated_at = geometry.date

    if updated_at is None:
        updated_at = to_utc_z(now or utc_now())

    return Disaster(
        id=event.id,
        name=event.title,
        type=disaster_type,
        lat=lat,
        lng=lng,
        severity=infer_severity(disaster_type, magnitude_value),
        updated_at=updated_at,
        magnitude_value=magnitude_value,
        magnitude_unit=magnitude_unit,
        sources=[SourceRef(id=s.id, url=s.url) for s in event.sources],
        closed=event.closed,
    )


def normalize_events(
    events: Iterable[RawEvent],
    disaster_type: Optional[str] = "all",
    now: Optional[datetime] = None,
) -> List[Disaster]:
    """
    Normalize events in input order.

    When disaster_type names one of the five known types, only disasters of
    that type are kept. 'all' and unrecognized values keep everything.
    """
    now = now or utc_now()
    disasters = [normalize_event(event, now) for event in events]
    if disaster_type in DISASTER_TYPES:
        disasters = [d for d in disasters if d.type == disaster_type]
    return disasters

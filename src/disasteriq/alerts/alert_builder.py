"""Alert synthesis: raw EONET events + static system alerts -> sorted Alert feed."""

import random
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from ..parsing.models import RawEvent
from ..utils.id_generator import new_webhook_alert_id
from ..utils.logging import get_logger
from ..utils.time import hours_ago_label, utc_now
from .alert_models import Alert

logger = get_logger(__name__)

# Categories that are critical when reported within the last six hours
URGENT_CATEGORIES = frozenset({"wildfires", "severeStorms", "volcanoes"})

ALERT_FEED_LIMIT = 10
ALERT_FEED_DAYS = 7
DEFAULT_ALERT_SOURCE = "NASA EONET"

SYSTEM_ALERT_TEMPLATES = (
    {
        "id": "sys-1",
        "title": "Earthquake monitoring systems back online",
        "severity": "info",
        "hours_ago": 2,
        "details": "The USGS earthquake monitoring integration is now functioning normally after scheduled maintenance.",
    },
    {
        "id": "sys-2",
        "title": "API rate limit warning",
        "severity": "warning",
        "hours_ago": 4,
        "details": "The NASA Earth Observatory API rate limit is at 85%. Consider reducing request frequency.",
    },
    {
        "id": "sys-3",
        "title": "Database backup completed",
        "severity": "info",
        "hours_ago": 8,
        "details": "Automated daily backup of disaster tracking database completed successfully.",
    },
)


def _format_number(value: Any) -> str:
    """Render feed numbers without a spurious trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def draw_age_hours(rng: random.Random) -> int:
    """Synthetic alert age, uniform over 1..24 hours."""
    return rng.randint(1, 24)


def classify_alert_severity(category_id: Optional[str], hours_ago: int) -> str:
    """
    Recency-driven severity.

    Independent of the magnitude-driven disaster severity in the normalizer.
    Events without any category keep the default 'warning'.
    """
    if category_id is None:
        return "warning"
    if hours_ago <= 6:
        return "critical" if category_id in URGENT_CATEGORIES else "warning"
    if hours_ago <= 12:
        return "warning"
    return "info"


def build_details(event: RawEvent) -> str:
    """Narrative text; each clause only appears when its data exists."""
    details = f"{event.title or event.id or ''} has been detected."

    geometry = event.latest_geometry
    if geometry is not None:
        point = geometry.point()
        if point is not None:
            lng, lat = point
            details += f" Located at coordinates {_format_number(lat)}°N {_format_number(lng)}°E."
        if geometry.magnitude_value and geometry.magnitude_unit:
            details += f" Measured at {_format_number(geometry.magnitude_value)} {geometry.magnitude_unit}."

    if event.first_source_id:
        details += f" Data reported by {event.first_source_id}."

    return details


def build_disaster_alert(event: RawEvent, hours_ago: int, now: datetime) -> Alert:
    category_id = (event.first_category_id or "") if event.categories else None

    coordinates = None
    geometry = event.latest_geometry
    if geometry is not None:
        point = geometry.point()
        if point is not None:
            lng, lat = point
            coordinates = [lat, lng]

    return Alert(
        id=f"disaster-{event.id}",
        title=event.title,
        type="disaster",
        severity=classify_alert_severity(category_id, hours_ago),
        time=hours_ago_label(hours_ago),
        timestamp=now - timedelta(hours=hours_ago),
        details=build_details(event),
        source=event.first_source_id or DEFAULT_ALERT_SOURCE,
        coordinates=coordinates,
        category=event.first_category_id or "unknown",
    )


def build_system_alerts(now: datetime) -> List[Alert]:
    return [
        Alert(
            id=template["id"],
            title=template["title"],
            type="system",
            severity=template["severity"],
            time=hours_ago_label(template["hours_ago"]),
            timestamp=now - timedelta(hours=template["hours_ago"]),
            details=template["details"],
            source="System",
        )
        for template in SYSTEM_ALERT_TEMPLATES
    ]


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """Most recent first. Stable for equal timestamps."""
    return sorted(alerts, key=lambda a: a.timestamp, reverse=True)


def filter_alerts(alerts: Iterable[Alert], alert_type: Optional[str]) -> List[Alert]:
    if not alert_type:
        return list(alerts)
    return [a for a in alerts if a.type == alert_type]


def synthesize_alerts(
    events: Iterable[RawEvent],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    alert_type: Optional[str] = None,
) -> List[Alert]:
    """
    Build the merged alert feed.

    Args:
        events: Raw events, one disaster alert each
        rng: Source of synthetic ages (default: a fresh unseeded Random)
        now: Reference time for ages and system alerts (default: current UTC)
        alert_type: Optional exact filter ('disaster' or 'system'), applied after sorting

    Returns:
        Alerts sorted by timestamp descending
    """
    rng = rng or random.Random()
    now = now or utc_now()

    disaster_alerts = [build_disaster_alert(event, draw_age_hours(rng), now) for event in events]
    all_alerts = sort_alerts(disaster_alerts + build_system_alerts(now))
    return filter_alerts(all_alerts, alert_type)


def ingest_webhook_alert(payload: Any, now: Optional[datetime] = None) -> str:
    """
    Acknowledge an externally pushed alert.

    The payload is logged and discarded: no validation, storage or fan-out.
    """
    alert_id = new_webhook_alert_id(now)
    logger.info(f"Received alert {alert_id}: {payload!r}")
    return alert_id

"""Alerts API: canonical query surface for the merged alert feed."""

import random
from datetime import datetime
from typing import Optional

from ..alerts.alert_builder import ALERT_FEED_DAYS, ALERT_FEED_LIMIT, synthesize_alerts
from .disasters_api import EventSource
from .models import AlertsMeta, AlertsResponse


def list_alerts(
    client: EventSource,
    alert_type: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> AlertsResponse:
    """
    Build the alert feed from the last week of open events plus system alerts.

    Args:
        client: EONET client (or anything with fetch_events)
        alert_type: Optional exact filter ('disaster' or 'system')
        rng: Source of synthetic alert ages
        now: Reference time

    Raises:
        EonetFetchError: If the upstream fetch fails
    """
    events = client.fetch_events(limit=ALERT_FEED_LIMIT, days=ALERT_FEED_DAYS)
    alerts = synthesize_alerts(events, rng=rng, now=now, alert_type=alert_type)
    return AlertsResponse(
        data=alerts,
        meta=AlertsMeta(count=len(alerts), type=alert_type or "all"),
    )

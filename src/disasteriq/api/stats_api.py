"""Dashboard summary built from already-normalized disasters and alerts."""

from typing import Iterable

from ..alerts.alert_models import Alert, Disaster
from .models import DashboardSummary

DEFAULT_RECENT_ALERTS = 5


def summarize(
    disasters: Iterable[Disaster],
    alerts: Iterable[Alert],
    recent: int = DEFAULT_RECENT_ALERTS,
) -> DashboardSummary:
    """
    Stat-card counts per disaster type plus the first `recent` disaster alerts.

    Alerts are expected in feed order (most recent first).
    """
    disasters = list(disasters)
    by_type = {t: 0 for t in ("wildfire", "earthquake", "flood", "storm", "volcano")}
    for disaster in disasters:
        if disaster.type in by_type:
            by_type[disaster.type] += 1

    recent_alerts = [a for a in alerts if a.type == "disaster"][:recent]

    return DashboardSummary(
        wildfires=by_type["wildfire"],
        earthquakes=by_type["earthquake"],
        floods=by_type["flood"],
        storms=by_type["storm"],
        volcanoes=by_type["volcano"],
        total=len(disasters),
        critical=sum(1 for d in disasters if d.severity == "critical"),
        recent_alerts=recent_alerts,
    )

"""Response envelopes for the HTTP API.

Thin wrappers around Disaster / Alert; field names follow the JSON wire
format (camelCase) via aliases.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..alerts.alert_models import Alert, Disaster


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DisastersMeta(_Envelope):
    count: int
    type: str
    time_range: str = Field(alias="timeRange")
    source: str = "NASA EONET API"
    api_version: str = Field(default="v3", alias="apiVersion")


class DisastersResponse(_Envelope):
    success: bool = True
    data: List[Disaster]
    meta: DisastersMeta


class AlertsMeta(_Envelope):
    count: int
    type: str
    source: str = "NASA EONET + System Alerts"


class AlertsResponse(_Envelope):
    success: bool = True
    data: List[Alert]
    meta: AlertsMeta


class ErrorResponse(_Envelope):
    success: bool = False
    error: str
    details: Optional[str] = None


class WebhookAck(_Envelope):
    success: bool = True
    message: str = "Alert received"
    alert_id: str = Field(alias="alertId")


class SubscriberInfo(_Envelope):
    email: str
    subscription_date: str = Field(alias="subscriptionDate")


class SubscribeResponse(_Envelope):
    success: bool = True
    message: str = "Subscription successful"
    subscriber: SubscriberInfo


class SendTestAlertResponse(_Envelope):
    success: bool = True
    message: str = "Test alert sent successfully"
    alert_id: str = Field(alias="alertId")


class DashboardSummary(BaseModel):
    """Counts for the dashboard stat cards plus the most recent disaster alerts."""
    wildfires: int = 0
    earthquakes: int = 0
    floods: int = 0
    storms: int = 0
    volcanoes: int = 0
    total: int = 0
    critical: int = 0
    recent_alerts: List[Alert] = Field(default_factory=list)

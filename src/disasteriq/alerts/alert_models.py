from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..utils.time import to_utc_z

DisasterType = Literal["wildfire", "earthquake", "flood", "storm", "volcano", "unknown"]
DisasterSeverity = Literal["critical", "warning", "moderate", "low"]
AlertType = Literal["disaster", "system"]
AlertSeverity = Literal["critical", "warning", "info"]

DISASTER_TYPES: tuple[str, ...] = ("wildfire", "earthquake", "flood", "storm", "volcano")


class SourceRef(BaseModel):
    id: Optional[str] = None
    url: Optional[str] = None


class Disaster(BaseModel):
    """
    Normalized geographic disaster record.

    lat/lng are (0, 0) when the feed carried no geometry; use has_location()
    from the styling module rather than treating that as a real point.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    type: DisasterType = "unknown"
    lat: float = 0
    lng: float = 0
    severity: DisasterSeverity = "moderate"
    updated_at: str = Field(alias="updatedAt")
    magnitude_value: Optional[float] = Field(default=None, alias="magnitudeValue")
    magnitude_unit: Optional[str] = Field(default=None, alias="magnitudeUnit")
    sources: List[SourceRef] = Field(default_factory=list)
    closed: Optional[str] = None


class Alert(BaseModel):
    """Notification-feed record, either disaster-origin or static system-origin."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: Optional[str] = None
    type: AlertType
    severity: AlertSeverity
    time: str  # human relative age, e.g. "3 hours ago"
    timestamp: datetime
    details: str
    source: str
    coordinates: Optional[List[float]] = None  # [lat, lng]
    category: Optional[str] = None

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return to_utc_z(value)

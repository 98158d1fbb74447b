"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from disasteriq.parsing.models import RawEvent

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_event(
    event_id: str = "EONET_1",
    title: str = "Sample Event",
    category: Optional[str] = "wildfires",
    coordinates: Optional[list] = None,
    magnitude_value: Optional[float] = None,
    magnitude_unit: Optional[str] = None,
    date: str = "2025-06-01T06:00:00Z",
    sources: Optional[List[Dict]] = None,
    with_geometry: bool = True,
    closed: Optional[str] = None,
) -> Dict:
    """Build a raw EONET event dict in feed shape."""
    event: Dict = {
        "id": event_id,
        "title": title,
        "categories": [{"id": category, "title": category}] if category else [],
        "sources": sources if sources is not None else [{"id": "InciWeb", "url": "https://inciweb.example/1"}],
        "geometry": [],
        "closed": closed,
    }
    if with_geometry:
        geometry = {"date": date, "type": "Point", "coordinates": coordinates or [-122.4, 37.8]}
        if magnitude_value is not None:
            geometry["magnitudeValue"] = magnitude_value
        if magnitude_unit is not None:
            geometry["magnitudeUnit"] = magnitude_unit
        event["geometry"].append(geometry)
    return event


class FakeEventSource:
    """Stands in for EonetClient; records every query."""

    def __init__(self, events: Optional[List[Dict]] = None, error: Optional[Exception] = None):
        self.events = [RawEvent.model_validate(e) for e in (events or [])]
        self.error = error
        self.calls: List[Dict] = []

    def fetch_events(self, limit: int, days: Optional[int] = None, category: Optional[str] = None):
        self.calls.append({"limit": limit, "days": days, "category": category})
        if self.error is not None:
            raise self.error
        return list(self.events[:limit])


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def sample_events() -> List[Dict]:
    return [
        make_event("EONET_1", "Big Fire", "wildfires", [-120.5, 38.2], 1500, "acres"),
        make_event("EONET_2", "Quake Near Coast", "earthquakes", [142.3, 38.1], 7, "M"),
        make_event("EONET_3", "Hurricane Test", "severeStorms", [-75.0, 25.0], 45, "kts"),
        make_event("EONET_4", "Etna", "volcanoes", [15.0, 37.7]),
        make_event("EONET_5", "Unlocated Flood", "floods", with_geometry=False, sources=[]),
    ]

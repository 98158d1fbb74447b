"""Disasters API: canonical query surface for normalized disaster data."""

from datetime import datetime
from typing import List, Optional, Protocol

from ..parsing.models import RawEvent
from ..parsing.normalizer import category_for_type, normalize_events, time_range_limit
from .models import DisastersMeta, DisastersResponse

DEFAULT_TIME_RANGE = "24h"


class EventSource(Protocol):
    def fetch_events(
        self,
        limit: int,
        days: Optional[int] = None,
        category: Optional[str] = None,
    ) -> List[RawEvent]:
        ...


def list_disasters(
    client: EventSource,
    disaster_type: Optional[str] = None,
    time_range: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DisastersResponse:
    """
    Fetch and normalize open disasters.

    Args:
        client: EONET client (or anything with fetch_events)
        disaster_type: 'all' or one of the five types. None means 'all'.
        time_range: 12h, 24h, 7d or 30d. Only sizes the request (5/10/20/30).
        now: Reference time for events without geometry

    Returns:
        DisastersResponse with disasters in feed order

    Raises:
        EonetFetchError: If the upstream fetch fails
    """
    time_range = time_range or DEFAULT_TIME_RANGE
    disaster_type = disaster_type or "all"

    events = client.fetch_events(
        limit=time_range_limit(time_range),
        category=category_for_type(disaster_type),
    )
    disasters = normalize_events(events, disaster_type=disaster_type, now=now)

    return DisastersResponse(
        data=disasters,
        meta=DisastersMeta(count=len(disasters), type=disaster_type, time_range=time_range),
    )

"""NASA EONET v3 client with error wrapping and a short-TTL cache."""

from typing import Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config.loader import EonetSettings
from ..parsing.models import RawEvent
from ..utils.logging import get_logger
from .cache import TTLCache

logger = get_logger(__name__)


class EonetFetchError(RuntimeError):
    """Upstream fetch failed: network error, non-2xx status or unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EventQuery(BaseModel):
    """Parameters of one /events request. Also the cache key."""
    model_config = ConfigDict(frozen=True)

    limit: int
    days: Optional[int] = None
    category: Optional[str] = None
    status: str = "open"

    def cache_key(self) -> tuple:
        return (self.status, self.limit, self.days, self.category)


class EonetClient:
    """Fetches open events from EONET."""

    def __init__(self, settings: Optional[EonetSettings] = None, cache: Optional[TTLCache] = None):
        self.settings = settings or EonetSettings()
        self.events_url = self.settings.base_url.rstrip("/") + "/events"
        self.cache = cache if cache is not None else TTLCache(self.settings.cache_ttl_seconds)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def _build_params(self, query: EventQuery) -> Dict[str, str]:
        params: Dict[str, str] = {"status": query.status, "limit": str(query.limit)}
        if query.days is not None:
            params["days"] = str(query.days)
        if query.category:
            params["category"] = query.category
        if self.settings.api_key:
            params["api_key"] = self.settings.api_key
        return params

    def fetch_events(
        self,
        limit: int,
        days: Optional[int] = None,
        category: Optional[str] = None,
    ) -> List[RawEvent]:
        """
        Fetch open events.

        Args:
            limit: Maximum number of events requested upstream
            days: Only events active within this many days (optional)
            category: EONET category id filter (optional)

        Returns:
            List of RawEvent in feed order

        Raises:
            EonetFetchError: On network errors, non-2xx responses, non-JSON
                bodies, or payloads without an 'events' list
        """
        query = EventQuery(limit=limit, days=days, category=category)
        cached = self.cache.get(query.cache_key())
        if cached is not None:
            logger.debug(f"EONET cache hit for {query.cache_key()}")
            return list(cached)

        logger.info(f"Fetching EONET events (limit={limit}, days={days}, category={category})")
        try:
            response = requests.get(
                self.events_url,
                params=self._build_params(query),
                headers=self._get_headers(),
                timeout=self.settings.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            status_code = None
            if getattr(e, "response", None) is not None:
                status_code = e.response.status_code
            raise EonetFetchError(f"Failed to fetch EONET events: {e}", status_code=status_code) from e

        try:
            data = response.json()
        except ValueError as e:
            raise EonetFetchError(
                f"EONET returned a non-JSON body: {e}", status_code=response.status_code
            ) from e

        raw_events = data.get("events") if isinstance(data, dict) else None
        if not isinstance(raw_events, list):
            raise EonetFetchError("EONET response has no 'events' list", status_code=response.status_code)

        try:
            events = [RawEvent.model_validate(item) for item in raw_events]
        except ValidationError as e:
            raise EonetFetchError(f"Failed to parse EONET events: {e}", status_code=response.status_code) from e

        logger.info(f"Fetched {len(events)} events from EONET")
        self.cache.set(query.cache_key(), tuple(events))
        return events

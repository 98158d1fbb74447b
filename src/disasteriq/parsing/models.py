"""Lenient models for raw NASA EONET v3 events.

Every field is optional: the feed is external and untrusted. Unknown fields
are ignored rather than rejected.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FeedModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class RawCategory(_FeedModel):
    id: Optional[str] = None
    title: Optional[str] = None


class RawSource(_FeedModel):
    id: Optional[str] = None
    url: Optional[str] = None


class RawGeometry(_FeedModel):
    date: Optional[str] = None
    type: Optional[str] = None
    coordinates: Optional[List[Any]] = None  # [lng, lat] for points, nested rings for polygons
    magnitude_value: Optional[float] = Field(default=None, alias="magnitudeValue")
    magnitude_unit: Optional[str] = Field(default=None, alias="magnitudeUnit")

    @field_validator("magnitude_value")
    @classmethod
    def _finite_magnitude(cls, value: Optional[float]) -> Optional[float]:
        # the feed JSON may carry NaN/Infinity literals
        if value is not None and not math.isfinite(value):
            return None
        return value

    def point(self) -> Optional[tuple[float, float]]:
        """
        Return the (lng, lat) pair for this geometry in feed order.

        Polygons resolve to the first vertex of the outer ring. Returns None
        when no numeric pair can be found.
        """
        coords: Any = self.coordinates
        while isinstance(coords, list) and coords and isinstance(coords[0], list):
            coords = coords[0]
        if not isinstance(coords, list) or len(coords) < 2:
            return None
        lng, lat = coords[0], coords[1]
        if not isinstance(lng, (int, float)) or not isinstance(lat, (int, float)):
            return None
        return lng, lat


class RawEvent(_FeedModel):
    id: Optional[str] = None
    title: Optional[str] = None
    categories: List[RawCategory] = Field(default_factory=list)
    geometry: List[RawGeometry] = Field(default_factory=list)
    sources: List[RawSource] = Field(default_factory=list)
    closed: Optional[str] = None

    @field_validator("categories", "geometry", "sources", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def first_category_id(self) -> Optional[str]:
        if not self.categories:
            return None
        return self.categories[0].id

    @property
    def latest_geometry(self) -> Optional[RawGeometry]:
        if not self.geometry:
            return None
        return self.geometry[-1]

    @property
    def first_source_id(self) -> Optional[str]:
        if not self.sources:
            return None
        return self.sources[0].id

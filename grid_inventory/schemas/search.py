# grid_inventory/schemas/search.py
from __future__ import annotations

from enum import Enum
from typing import Annotated

from fastapi import HTTPException, Query
from pydantic import BaseModel, Field, ValidationError, field_validator

__all__ = ["SearchType", "EquipmentSearchQuery"]


class SearchType(str, Enum):
    all = "all"
    id = "id"
    address = "address"
    coordinates = "coordinates"

    @classmethod
    def parse(cls, value: str | None) -> SearchType:
        """Unknown or missing selectors fall back to ``all``."""
        if not value:
            return cls.all
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.all


class EquipmentSearchQuery(BaseModel):
    """Query DTO for /equipment/search.

    - latitude and longitude together switch to the radius search
    - otherwise the text search runs; an empty query lists everything
    """

    query: str = Field(default="", description="Substring to look for")
    search_type: SearchType = Field(default=SearchType.all, description="Field set to search")
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    radius_km: float | None = Field(default=None, ge=0.0, description="Radius in km")
    type: str | None = Field(default=None, description="Exact equipment type name")
    status: str | None = Field(default=None, description="Status, case-insensitive")

    @field_validator("search_type", mode="before")
    @classmethod
    def _lenient_search_type(cls, v: object) -> SearchType:
        if isinstance(v, SearchType):
            return v
        return SearchType.parse(v if isinstance(v, str) else None)

    @field_validator("type", "status")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        s = v.strip()
        return s or None

    @property
    def is_geographic(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def as_query(
        cls,
        query: Annotated[str | None, Query(description="Search text")] = None,
        search_type: Annotated[
            str | None,
            Query(alias="searchType", description="all | id | address | coordinates"),
        ] = None,
        latitude: Annotated[
            float | None, Query(description="Query point latitude (degrees)", ge=-90.0, le=90.0)
        ] = None,
        longitude: Annotated[
            float | None,
            Query(description="Query point longitude (degrees)", ge=-180.0, le=180.0),
        ] = None,
        radius: Annotated[
            float | None, Query(description="Radius in km (default 10)", ge=0.0)
        ] = None,
        type: Annotated[str | None, Query(description="Filter by equipment type")] = None,
        status: Annotated[str | None, Query(description="Filter by status")] = None,
    ) -> EquipmentSearchQuery:
        try:
            return cls.model_validate(
                {
                    "query": query or "",
                    "search_type": search_type,
                    "latitude": latitude,
                    "longitude": longitude,
                    "radius_km": radius,
                    "type": type,
                    "status": status,
                }
            )
        except ValidationError:
            raise HTTPException(status_code=400, detail="Invalid search parameters")

"""Text and radius search over equipment records."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from grid_inventory.core.config import settings
from grid_inventory.infra.unit_of_work import UnitOfWork
from grid_inventory.repositories.interfaces import EquipmentRow
from grid_inventory.schemas.equipment import EquipmentRead
from grid_inventory.schemas.search import EquipmentSearchQuery, SearchType

UnitOfWorkFactory = Callable[[], UnitOfWork]

logger = structlog.get_logger(__name__)


def _apply_filters(
    rows: list[EquipmentRow], *, type_name: str | None, status: str | None
) -> list[EquipmentRow]:
    out = rows
    if type_name:
        out = [r for r in out if r.type == type_name]
    if status:
        wanted = status.lower()
        out = [r for r in out if (r.status or "").lower() == wanted]
    return out


async def search_by_coordinates(
    uow: UnitOfWork,
    *,
    latitude: float,
    longitude: float,
    radius_km: float | None = None,
) -> list[EquipmentRow]:
    """Every record whose haversine distance is ``<= radius_km`` (unordered)."""

    radius = settings.default_search_radius_km if radius_km is None else float(radius_km)
    return await uow.equipment.search_within_radius(
        latitude=float(latitude), longitude=float(longitude), radius_km=radius
    )


async def search_text(
    uow: UnitOfWork, query: str | None, search_type: SearchType = SearchType.all
) -> list[EquipmentRow]:
    """Substring search; an empty or blank query returns every record."""
    return await uow.equipment.search_text(query or "", search_type)


async def search_equipment(uow: UnitOfWork, params: EquipmentSearchQuery) -> list[EquipmentRow]:
    if params.is_geographic:
        rows = await search_by_coordinates(
            uow,
            latitude=params.latitude,
            longitude=params.longitude,
            radius_km=params.radius_km,
        )
    else:
        rows = await search_text(uow, params.query, params.search_type)
    return _apply_filters(rows, type_name=params.type, status=params.status)


class EquipmentSearchService:
    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def search(self, params: EquipmentSearchQuery) -> list[EquipmentRead]:
        async with self._uow_factory() as uow:
            rows = await search_equipment(uow, params)
        logger.info(
            "equipment_search",
            mode="radius" if params.is_geographic else "text",
            search_type=params.search_type.value,
            radius_km=params.radius_km,
            returned=len(rows),
        )
        return [EquipmentRead.model_validate(row) for row in rows]

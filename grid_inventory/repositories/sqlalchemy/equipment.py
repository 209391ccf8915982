"""SQLAlchemy implementation of the equipment repository."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grid_inventory.core.exceptions import ConflictError
from grid_inventory.models import Equipment
from grid_inventory.repositories.interfaces import EquipmentRepository, EquipmentRow
from grid_inventory.schemas.search import SearchType
from grid_inventory.services import text_search
from grid_inventory.utils.geo import format_coordinate, haversine_distance_sql

_COORDINATE_COLUMNS = ("latitude", "longitude")


def _to_row(entity: Equipment) -> EquipmentRow:
    return EquipmentRow(
        id=entity.id,
        equipment_id=entity.equipment_id,
        name=entity.name,
        type=entity.type,
        status=entity.status,
        location=entity.location,
        address=entity.address,
        latitude=format_coordinate(entity.latitude),
        longitude=format_coordinate(entity.longitude),
        manufacturer=entity.manufacturer,
        model=entity.model,
        capacity=entity.capacity,
        voltage=entity.voltage,
        installation_date=entity.installation_date,
        last_maintenance=entity.last_maintenance,
        type_specific_data=dict(entity.type_specific_data or {}),
        created_at=entity.created_at,
    )


def _to_columns(values: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(values)
    for key in _COORDINATE_COLUMNS:
        if out.get(key) is not None:
            out[key] = Decimal(str(out[key]))
    return out


def _ci_contains(column, needle: str):
    # lower(col) LIKE '%needle%' with % and _ escaped, same as text_search.matches
    return func.lower(column).contains(needle, autoescape=True)


class SqlAlchemyEquipmentRepository(EquipmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _ordered(self, stmt):
        return stmt.order_by(Equipment.created_at, Equipment.id)

    async def _flush(self, equipment_id: str | None) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Equipment '{equipment_id}' already exists") from exc

    async def _fetch(self, stmt) -> list[EquipmentRow]:
        return [_to_row(e) for e in (await self._session.scalars(self._ordered(stmt))).all()]

    async def list_all(self) -> list[EquipmentRow]:
        return await self._fetch(select(Equipment))

    async def get_by_id(self, equipment_pk: str) -> EquipmentRow | None:
        entity = await self._session.get(Equipment, equipment_pk)
        return _to_row(entity) if entity else None

    async def get_by_equipment_id(self, equipment_id: str) -> EquipmentRow | None:
        entity = await self._session.scalar(
            select(Equipment).where(Equipment.equipment_id == equipment_id)
        )
        return _to_row(entity) if entity else None

    async def create(self, values: Mapping[str, Any]) -> EquipmentRow:
        entity = Equipment(**_to_columns(values))
        self._session.add(entity)
        await self._flush(values.get("equipment_id"))
        await self._session.refresh(entity)
        return _to_row(entity)

    async def update(self, equipment_pk: str, values: Mapping[str, Any]) -> EquipmentRow | None:
        entity = await self._session.get(Equipment, equipment_pk)
        if entity is None:
            return None
        for key, value in _to_columns(values).items():
            setattr(entity, key, value)
        await self._flush(values.get("equipment_id", entity.equipment_id))
        await self._session.refresh(entity)
        return _to_row(entity)

    async def delete(self, equipment_pk: str) -> bool:
        entity = await self._session.get(Equipment, equipment_pk)
        if entity is None:
            return False
        await self._session.delete(entity)
        await self._session.flush()
        return True

    async def search_text(self, query: str, search_type: SearchType) -> list[EquipmentRow]:
        needle = text_search.normalize_query(query)
        stmt = select(Equipment)
        if not needle:
            return await self._fetch(stmt)

        if search_type is SearchType.coordinates:
            lat_term, lng_term = text_search.coordinate_terms(needle)
            stmt = stmt.where(
                or_(
                    _ci_contains(cast(Equipment.latitude, String), lat_term),
                    _ci_contains(cast(Equipment.longitude, String), lng_term),
                )
            )
        else:
            columns = [getattr(Equipment, a) for a in text_search.searched_attributes(search_type)]
            stmt = stmt.where(or_(*(_ci_contains(c, needle) for c in columns)))
        return await self._fetch(stmt)

    async def search_within_radius(
        self, *, latitude: float, longitude: float, radius_km: float
    ) -> list[EquipmentRow]:
        distance_km = haversine_distance_sql(
            Equipment.latitude, Equipment.longitude, (latitude, longitude)
        )
        return await self._fetch(select(Equipment).where(distance_km <= float(radius_km)))

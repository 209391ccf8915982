"""In-memory implementation of the equipment repository."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from grid_inventory.core.exceptions import ConflictError
from grid_inventory.models.base import new_id, utcnow
from grid_inventory.repositories.interfaces import EquipmentRepository, EquipmentRow
from grid_inventory.repositories.memory.store import InMemoryStore
from grid_inventory.schemas.search import SearchType
from grid_inventory.services import text_search
from grid_inventory.utils.geo import parse_coordinate, within_radius


class InMemoryEquipmentRepository(EquipmentRepository):
    def __init__(self, store: InMemoryStore, on_write: Callable[[], None] | None = None) -> None:
        self._store = store
        self._on_write = on_write

    def _before_write(self) -> None:
        if self._on_write is not None:
            self._on_write()

    @property
    def _rows(self) -> dict[str, EquipmentRow]:
        return self._store.equipment

    def _ensure_unique_code(self, equipment_id: str, *, exclude_pk: str | None = None) -> None:
        for row in self._rows.values():
            if row.equipment_id == equipment_id and row.id != exclude_pk:
                raise ConflictError(f"Equipment '{equipment_id}' already exists")

    async def list_all(self) -> list[EquipmentRow]:
        return [copy.deepcopy(row) for row in self._rows.values()]

    async def get_by_id(self, equipment_pk: str) -> EquipmentRow | None:
        row = self._rows.get(equipment_pk)
        return copy.deepcopy(row) if row else None

    async def get_by_equipment_id(self, equipment_id: str) -> EquipmentRow | None:
        for row in self._rows.values():
            if row.equipment_id == equipment_id:
                return copy.deepcopy(row)
        return None

    async def create(self, values: Mapping[str, Any]) -> EquipmentRow:
        self._ensure_unique_code(values["equipment_id"])
        row = EquipmentRow(id=new_id(), created_at=utcnow(), **copy.deepcopy(dict(values)))
        self._before_write()
        self._rows[row.id] = row
        return copy.deepcopy(row)

    async def update(self, equipment_pk: str, values: Mapping[str, Any]) -> EquipmentRow | None:
        row = self._rows.get(equipment_pk)
        if row is None:
            return None
        if "equipment_id" in values:
            self._ensure_unique_code(values["equipment_id"], exclude_pk=equipment_pk)
        updated = replace(row, **copy.deepcopy(dict(values)))
        self._before_write()
        self._rows[equipment_pk] = updated
        return copy.deepcopy(updated)

    async def delete(self, equipment_pk: str) -> bool:
        self._before_write()
        return self._rows.pop(equipment_pk, None) is not None

    async def search_text(self, query: str, search_type: SearchType) -> list[EquipmentRow]:
        needle = text_search.normalize_query(query)
        return [
            copy.deepcopy(row)
            for row in self._rows.values()
            if text_search.matches(row, needle, search_type)
        ]

    async def search_within_radius(
        self, *, latitude: float, longitude: float, radius_km: float
    ) -> list[EquipmentRow]:
        origin = (latitude, longitude)
        return [
            copy.deepcopy(row)
            for row in self._rows.values()
            if within_radius(
                origin,
                (parse_coordinate(row.latitude), parse_coordinate(row.longitude)),
                radius_km,
            )
        ]

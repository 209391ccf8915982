"""In-memory implementation of the equipment type repository."""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from grid_inventory.core.exceptions import ConflictError
from grid_inventory.models.base import new_id, utcnow
from grid_inventory.repositories.interfaces import EquipmentTypeRepository, EquipmentTypeRow
from grid_inventory.repositories.memory.store import InMemoryStore
from grid_inventory.schemas.field_config import FieldConfig


class InMemoryEquipmentTypeRepository(EquipmentTypeRepository):
    def __init__(self, store: InMemoryStore, on_write: Callable[[], None] | None = None) -> None:
        self._store = store
        self._on_write = on_write

    def _before_write(self) -> None:
        if self._on_write is not None:
            self._on_write()

    @property
    def _rows(self) -> dict[str, EquipmentTypeRow]:
        return self._store.equipment_types

    def _ensure_unique_name(self, name: str, *, exclude_id: str | None = None) -> None:
        for row in self._rows.values():
            if row.name == name and row.id != exclude_id:
                raise ConflictError(f"Equipment type '{name}' already exists")

    async def list_all(self) -> list[EquipmentTypeRow]:
        return [copy.deepcopy(row) for row in self._rows.values()]

    async def get_by_id(self, type_id: str) -> EquipmentTypeRow | None:
        row = self._rows.get(type_id)
        return copy.deepcopy(row) if row else None

    async def get_by_name(self, name: str) -> EquipmentTypeRow | None:
        for row in self._rows.values():
            if row.name == name:
                return copy.deepcopy(row)
        return None

    async def create(self, *, name: str, description: str | None) -> EquipmentTypeRow:
        self._ensure_unique_name(name)
        now = utcnow()
        row = EquipmentTypeRow(
            id=new_id(),
            name=name,
            description=description,
            fields_config=[],
            created_at=now,
            updated_at=now,
        )
        self._before_write()
        self._rows[row.id] = row
        return copy.deepcopy(row)

    async def update(self, type_id: str, values: Mapping[str, Any]) -> EquipmentTypeRow | None:
        row = self._rows.get(type_id)
        if row is None:
            return None
        if "name" in values:
            self._ensure_unique_name(values["name"], exclude_id=type_id)
        updated = replace(row, **dict(values), updated_at=utcnow())
        self._before_write()
        self._rows[type_id] = updated
        return copy.deepcopy(updated)

    async def replace_fields(
        self, type_id: str, fields: list[FieldConfig]
    ) -> EquipmentTypeRow | None:
        return await self.update(type_id, {"fields_config": [f.model_copy() for f in fields]})

    async def delete(self, type_id: str) -> bool:
        self._before_write()
        return self._rows.pop(type_id, None) is not None

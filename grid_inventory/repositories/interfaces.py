"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from grid_inventory.schemas.field_config import FieldConfig
from grid_inventory.schemas.search import SearchType


@dataclass
class EquipmentTypeRow:
    id: str
    name: str
    description: str | None
    fields_config: list[FieldConfig] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class EquipmentRow:
    id: str
    equipment_id: str
    name: str
    type: str
    status: str
    location: str
    address: str
    # fixed 7-digit decimal strings
    latitude: str
    longitude: str
    manufacturer: str | None = None
    model: str | None = None
    capacity: str | None = None
    voltage: str | None = None
    installation_date: datetime | None = None
    last_maintenance: datetime | None = None
    type_specific_data: dict[str, str | None] = field(default_factory=dict)
    created_at: datetime | None = None


class EquipmentTypeRepository(Protocol):
    """Storage boundary for equipment types and their field lists."""

    async def list_all(self) -> list[EquipmentTypeRow]: ...

    async def get_by_id(self, type_id: str) -> EquipmentTypeRow | None: ...

    async def get_by_name(self, name: str) -> EquipmentTypeRow | None: ...

    async def create(self, *, name: str, description: str | None) -> EquipmentTypeRow: ...

    async def update(self, type_id: str, values: Mapping[str, Any]) -> EquipmentTypeRow | None: ...

    async def replace_fields(
        self, type_id: str, fields: list[FieldConfig]
    ) -> EquipmentTypeRow | None: ...

    async def delete(self, type_id: str) -> bool: ...


class EquipmentRepository(Protocol):
    """Storage boundary for equipment records and their searches."""

    async def list_all(self) -> list[EquipmentRow]: ...

    async def get_by_id(self, equipment_pk: str) -> EquipmentRow | None: ...

    async def get_by_equipment_id(self, equipment_id: str) -> EquipmentRow | None: ...

    async def create(self, values: Mapping[str, Any]) -> EquipmentRow: ...

    async def update(self, equipment_pk: str, values: Mapping[str, Any]) -> EquipmentRow | None: ...

    async def delete(self, equipment_pk: str) -> bool: ...

    async def search_text(self, query: str, search_type: SearchType) -> list[EquipmentRow]: ...

    async def search_within_radius(
        self, *, latitude: float, longitude: float, radius_km: float
    ) -> list[EquipmentRow]: ...

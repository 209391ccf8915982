"""Equipment use cases: CRUD with validate-before-write on dynamic fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from grid_inventory.core.exceptions import NotFoundError, ValidationError
from grid_inventory.infra.unit_of_work import UnitOfWork
from grid_inventory.repositories.interfaces import EquipmentRow
from grid_inventory.schemas.equipment import (
    EQUIPMENT_STATUSES,
    EquipmentCreate,
    EquipmentRead,
    EquipmentStats,
    EquipmentUpdate,
)
from grid_inventory.services.field_validation import validate_type_specific_data

UnitOfWorkFactory = Callable[[], UnitOfWork]

DYNAMIC_FIELDS_INVALID = "Dynamic field validation failed"

logger = structlog.get_logger(__name__)


def _to_read(row: EquipmentRow) -> EquipmentRead:
    return EquipmentRead.model_validate(row)


def merge_type_specific_data(
    current: Mapping[str, Any] | None, incoming: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Shallow merge where incoming keys win and absent keys are preserved."""
    return {**(current or {}), **(incoming or {})}


async def _validate_or_raise(uow: UnitOfWork, type_name: str, data: Mapping[str, Any]) -> None:
    result = await validate_type_specific_data(uow.equipment_types, type_name, data)
    if not result.valid:
        raise ValidationError(DYNAMIC_FIELDS_INVALID, result.errors)


async def create_equipment(uow: UnitOfWork, values: dict[str, Any]) -> EquipmentRow:
    """Validate dynamic fields, then insert. Nothing is written on failure."""

    await _validate_or_raise(uow, values["type"], values.get("type_specific_data") or {})
    return await uow.equipment.create(values)


async def update_equipment(
    uow: UnitOfWork, equipment_pk: str, patch: dict[str, Any]
) -> EquipmentRow:
    """Apply a partial update.

    When the patch touches ``type`` or ``type_specific_data`` the stored record
    is read first, its dynamic data merged with the patch, and the merged map
    validated against the *resulting* type before anything is written. The
    merged map, not the patch alone, is what gets persisted.
    """

    values = dict(patch)
    if "type" in values or "type_specific_data" in values:
        current = await uow.equipment.get_by_id(equipment_pk)
        if current is None:
            raise NotFoundError("Equipment not found")
        effective_type = values.get("type") or current.type
        merged = merge_type_specific_data(
            current.type_specific_data, values.get("type_specific_data")
        )
        await _validate_or_raise(uow, effective_type, merged)
        if "type_specific_data" in values:
            values["type_specific_data"] = merged

    row = await uow.equipment.update(equipment_pk, values)
    if row is None:
        raise NotFoundError("Equipment not found")
    return row


def count_by_status(rows: list[EquipmentRow]) -> EquipmentStats:
    counts = dict.fromkeys(EQUIPMENT_STATUSES, 0)
    for row in rows:
        status = (row.status or "").lower()
        if status in counts:
            counts[status] += 1
    return EquipmentStats(total=len(rows), **counts)


class EquipmentService:
    """Use cases for equipment records."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def list(self) -> list[EquipmentRead]:
        async with self._uow_factory() as uow:
            return [_to_read(row) for row in await uow.equipment.list_all()]

    async def get(self, equipment_pk: str) -> EquipmentRead:
        async with self._uow_factory() as uow:
            row = await uow.equipment.get_by_id(equipment_pk)
        if row is None:
            raise NotFoundError("Equipment not found")
        return _to_read(row)

    async def get_by_equipment_id(self, equipment_id: str) -> EquipmentRead:
        async with self._uow_factory() as uow:
            row = await uow.equipment.get_by_equipment_id(equipment_id)
        if row is None:
            raise NotFoundError("Equipment not found")
        return _to_read(row)

    async def create(self, payload: EquipmentCreate) -> EquipmentRead:
        async with self._uow_factory() as uow:
            row = await create_equipment(uow, payload.model_dump())
        logger.info("equipment_created", id=row.id, equipment_id=row.equipment_id, type=row.type)
        return _to_read(row)

    async def update(self, equipment_pk: str, payload: EquipmentUpdate) -> EquipmentRead:
        patch = payload.model_dump(exclude_unset=True)
        async with self._uow_factory() as uow:
            row = await update_equipment(uow, equipment_pk, patch)
        logger.info("equipment_updated", id=equipment_pk, fields=sorted(patch))
        return _to_read(row)

    async def delete(self, equipment_pk: str) -> bool:
        async with self._uow_factory() as uow:
            deleted = await uow.equipment.delete(equipment_pk)
        if deleted:
            logger.info("equipment_deleted", id=equipment_pk)
        return deleted

    async def stats(self) -> EquipmentStats:
        async with self._uow_factory() as uow:
            rows = await uow.equipment.list_all()
        return count_by_status(rows)

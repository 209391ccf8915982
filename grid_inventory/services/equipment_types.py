"""Equipment type registry use cases backed by repository interfaces."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence

import structlog

from grid_inventory.core.exceptions import NotFoundError, ValidationError
from grid_inventory.infra.unit_of_work import UnitOfWork
from grid_inventory.repositories.interfaces import EquipmentTypeRow
from grid_inventory.schemas.equipment_type import (
    EquipmentTypeCreate,
    EquipmentTypeRead,
    EquipmentTypeUpdate,
)
from grid_inventory.schemas.field_config import FieldConfig

UnitOfWorkFactory = Callable[[], UnitOfWork]

logger = structlog.get_logger(__name__)


def _to_read(row: EquipmentTypeRow) -> EquipmentTypeRead:
    return EquipmentTypeRead.model_validate(row)


def _require_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Invalid equipment type data", ["name is required"])
    return cleaned


def renumber_fields(fields: Sequence[FieldConfig]) -> list[FieldConfig]:
    """Copy ``fields`` with ``order`` set to their position (0..n-1)."""
    return [f.model_copy(update={"order": idx}) for idx, f in enumerate(fields)]


def duplicate_data_keys(fields: Sequence[FieldConfig]) -> list[str]:
    counts = Counter(f.data_key for f in fields)
    seen: list[str] = []
    for f in fields:
        if counts[f.data_key] > 1 and f.data_key not in seen:
            seen.append(f.data_key)
    return seen


class EquipmentTypeService:
    """Registry of equipment types and their custom field lists."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def list(self) -> list[EquipmentTypeRead]:
        async with self._uow_factory() as uow:
            return [_to_read(row) for row in await uow.equipment_types.list_all()]

    async def get(self, type_id: str) -> EquipmentTypeRead:
        async with self._uow_factory() as uow:
            row = await uow.equipment_types.get_by_id(type_id)
        if row is None:
            raise NotFoundError("Equipment type not found")
        return _to_read(row)

    async def create(self, payload: EquipmentTypeCreate) -> EquipmentTypeRead:
        name = _require_name(payload.name)
        async with self._uow_factory() as uow:
            row = await uow.equipment_types.create(name=name, description=payload.description)
        logger.info("equipment_type_created", type_id=row.id, name=row.name)
        return _to_read(row)

    async def update(self, type_id: str, payload: EquipmentTypeUpdate) -> EquipmentTypeRead:
        values = payload.model_dump(exclude_unset=True)
        if "name" in values:
            values["name"] = _require_name(values["name"])
        async with self._uow_factory() as uow:
            if values:
                row = await uow.equipment_types.update(type_id, values)
            else:
                row = await uow.equipment_types.get_by_id(type_id)
        if row is None:
            raise NotFoundError("Equipment type not found")
        logger.info("equipment_type_updated", type_id=type_id, fields=sorted(values))
        return _to_read(row)

    async def delete(self, type_id: str) -> None:
        # Equipment keeps referring to the name; validation reports it as missing later
        async with self._uow_factory() as uow:
            deleted = await uow.equipment_types.delete(type_id)
        if not deleted:
            raise NotFoundError("Equipment type not found")
        logger.info("equipment_type_deleted", type_id=type_id)

    async def set_fields(self, type_id: str, fields: Sequence[FieldConfig]) -> EquipmentTypeRead:
        """Replace the whole field list of a type in one write.

        ``order`` is renumbered from the sequence position, so add, delete and
        reorder are all expressed as "send the new list".
        """

        duplicates = duplicate_data_keys(fields)
        if duplicates:
            raise ValidationError(
                "Invalid field configuration data",
                [f"Duplicate dataKey '{key}'" for key in duplicates],
            )
        ordered = renumber_fields(fields)
        async with self._uow_factory() as uow:
            row = await uow.equipment_types.replace_fields(type_id, ordered)
        if row is None:
            raise NotFoundError("Equipment type not found")
        logger.info("equipment_type_fields_replaced", type_id=type_id, count=len(ordered))
        return _to_read(row)

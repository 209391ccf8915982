"""SQLAlchemy implementation of the equipment type repository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grid_inventory.core.exceptions import ConflictError
from grid_inventory.models import EquipmentType
from grid_inventory.repositories.interfaces import EquipmentTypeRepository, EquipmentTypeRow
from grid_inventory.schemas.field_config import FieldConfig


def _to_row(entity: EquipmentType) -> EquipmentTypeRow:
    return EquipmentTypeRow(
        id=entity.id,
        name=entity.name,
        description=entity.description,
        fields_config=[FieldConfig.model_validate(item) for item in entity.fields_config or []],
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def _fields_to_json(fields: list[FieldConfig]) -> list[dict[str, Any]]:
    return [f.model_dump(mode="json", by_alias=True) for f in fields]


class SqlAlchemyEquipmentTypeRepository(EquipmentTypeRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _flush(self, name: str | None) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Equipment type '{name}' already exists") from exc

    async def list_all(self) -> list[EquipmentTypeRow]:
        stmt = select(EquipmentType).order_by(EquipmentType.created_at, EquipmentType.id)
        return [_to_row(e) for e in (await self._session.scalars(stmt)).all()]

    async def get_by_id(self, type_id: str) -> EquipmentTypeRow | None:
        entity = await self._session.get(EquipmentType, type_id)
        return _to_row(entity) if entity else None

    async def get_by_name(self, name: str) -> EquipmentTypeRow | None:
        entity = await self._session.scalar(select(EquipmentType).where(EquipmentType.name == name))
        return _to_row(entity) if entity else None

    async def create(self, *, name: str, description: str | None) -> EquipmentTypeRow:
        entity = EquipmentType(name=name, description=description, fields_config=[])
        self._session.add(entity)
        await self._flush(name)
        await self._session.refresh(entity)
        return _to_row(entity)

    async def update(self, type_id: str, values: Mapping[str, Any]) -> EquipmentTypeRow | None:
        entity = await self._session.get(EquipmentType, type_id)
        if entity is None:
            return None
        for key, value in values.items():
            if key == "fields_config":
                value = _fields_to_json(value)
            setattr(entity, key, value)
        await self._flush(values.get("name", entity.name))
        await self._session.refresh(entity)
        return _to_row(entity)

    async def replace_fields(
        self, type_id: str, fields: list[FieldConfig]
    ) -> EquipmentTypeRow | None:
        # one UPDATE of the JSONB column; the list is never patched in place
        return await self.update(type_id, {"fields_config": fields})

    async def delete(self, type_id: str) -> bool:
        entity = await self._session.get(EquipmentType, type_id)
        if entity is None:
            return False
        await self._session.delete(entity)
        await self._session.flush()
        return True

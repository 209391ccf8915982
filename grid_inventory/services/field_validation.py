"""Presence validation of ``typeSpecificData`` against a type's field list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from grid_inventory.repositories.interfaces import EquipmentTypeRepository
from grid_inventory.schemas.field_config import FieldConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def is_missing(value: Any) -> bool:
    # 0, False and "false" all count as present
    return value is None or (isinstance(value, str) and value == "")


def missing_required_fields(
    fields: Iterable[FieldConfig], data: Mapping[str, Any] | None
) -> list[str]:
    """Return ``"<label> is required"`` for each required field without a value.

    Keys in ``data`` that no field declares are ignored.
    """

    values = data or {}
    return [
        f"{fc.label} is required"
        for fc in sorted(fields, key=lambda f: f.order)
        if fc.is_required and is_missing(values.get(fc.data_key))
    ]


async def validate_type_specific_data(
    types: EquipmentTypeRepository,
    type_name: str,
    data: Mapping[str, Any] | None,
) -> FieldValidationResult:
    """Validate ``data`` against the current configuration of ``type_name``.

    The type is looked up by exact name on every call, so edits made through
    the registry take effect immediately.
    """

    equipment_type = await types.get_by_name(type_name)
    if equipment_type is None:
        return FieldValidationResult(False, [f"Equipment type '{type_name}' not found"])

    errors = missing_required_fields(equipment_type.fields_config, data)
    if errors:
        logger.info("dynamic_fields_invalid", equipment_type=type_name, errors=errors)
    return FieldValidationResult(not errors, errors)


__all__ = [
    "FieldValidationResult",
    "is_missing",
    "missing_required_fields",
    "validate_type_specific_data",
]

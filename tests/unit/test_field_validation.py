"""Unit tests for dynamic field presence validation."""

from __future__ import annotations

import pytest

from grid_inventory.repositories.interfaces import EquipmentTypeRow
from grid_inventory.schemas.field_config import FieldConfig, FieldInputType
from grid_inventory.services.field_validation import (
    is_missing,
    missing_required_fields,
    validate_type_specific_data,
)

pytestmark = pytest.mark.unit


def _fields() -> list[FieldConfig]:
    return [
        FieldConfig(
            label="Secondary Voltage", data_key="secondaryVoltage", is_required=True, order=1
        ),
        FieldConfig(label="Primary Voltage", data_key="primaryVoltage", is_required=True, order=0),
        FieldConfig(label="Notes", data_key="notes", input_type=FieldInputType.textarea, order=2),
    ]


class _FakeTypeRepository:
    def __init__(self, rows: list[EquipmentTypeRow]) -> None:
        self._rows = {row.name: row for row in rows}
        self.lookups: list[str] = []

    async def get_by_name(self, name: str) -> EquipmentTypeRow | None:
        self.lookups.append(name)
        return self._rows.get(name)


@pytest.mark.parametrize(
    ("value", "missing"),
    [(None, True), ("", True), ("0", False), (0, False), (False, False), ("false", False)],
)
def test_is_missing_only_for_none_and_empty_string(value, missing) -> None:
    assert is_missing(value) is missing


def test_every_missing_required_field_is_reported_in_order() -> None:
    errors = missing_required_fields(_fields(), {"notes": "n/a"})

    assert errors == ["Primary Voltage is required", "Secondary Voltage is required"]


def test_absent_null_and_empty_are_equivalent() -> None:
    fields = _fields()
    absent = missing_required_fields(fields, {"secondaryVoltage": "13kV"})
    null = missing_required_fields(fields, {"primaryVoltage": None, "secondaryVoltage": "13kV"})
    empty = missing_required_fields(fields, {"primaryVoltage": "", "secondaryVoltage": "13kV"})

    assert absent == null == empty == ["Primary Voltage is required"]


def test_undeclared_keys_are_ignored() -> None:
    data = {"primaryVoltage": "138kV", "secondaryVoltage": "13kV", "legacyCode": "X-1"}

    assert missing_required_fields(_fields(), data) == []


@pytest.mark.asyncio
async def test_unknown_type_is_a_single_error() -> None:
    repo = _FakeTypeRepository([])

    result = await validate_type_specific_data(repo, "Flux Capacitor", {})

    assert not result.valid
    assert result.errors == ["Equipment type 'Flux Capacitor' not found"]


@pytest.mark.asyncio
async def test_type_without_fields_accepts_anything() -> None:
    repo = _FakeTypeRepository([EquipmentTypeRow(id="t1", name="Generator", description=None)])

    result = await validate_type_specific_data(repo, "Generator", {"anything": "goes"})

    assert result.valid
    assert result.errors == []


@pytest.mark.asyncio
async def test_lookup_is_by_exact_name_on_every_call() -> None:
    row = EquipmentTypeRow(id="t1", name="Transformer", description=None, fields_config=_fields())
    repo = _FakeTypeRepository([row])

    first = await validate_type_specific_data(repo, "Transformer", {})
    row.fields_config = []
    second = await validate_type_specific_data(repo, "Transformer", {})
    wrong_case = await validate_type_specific_data(repo, "transformer", {})

    assert not first.valid
    assert second.valid
    assert not wrong_case.valid
    assert repo.lookups == ["Transformer", "Transformer", "transformer"]

"""Equipment type registry use cases against the in-memory unit of work."""

from __future__ import annotations

import pytest

from grid_inventory.core.exceptions import ConflictError, NotFoundError, ValidationError
from grid_inventory.schemas.equipment_type import EquipmentTypeCreate, EquipmentTypeUpdate
from grid_inventory.schemas.field_config import FieldConfig, FieldInputType
from grid_inventory.services.equipment_types import EquipmentTypeService, renumber_fields

pytestmark = pytest.mark.unit


@pytest.fixture
def service(memory_uow_factory) -> EquipmentTypeService:
    return EquipmentTypeService(memory_uow_factory)


def test_renumber_uses_list_position() -> None:
    fields = [
        FieldConfig(label="B", data_key="b", order=7),
        FieldConfig(label="A", data_key="a", order=3),
    ]

    assert [(f.data_key, f.order) for f in renumber_fields(fields)] == [("b", 0), ("a", 1)]


def test_options_are_dropped_for_non_choice_fields() -> None:
    text = FieldConfig(label="Notes", data_key="notes", options=["x"])
    choice = FieldConfig(
        label="Cooling", data_key="cooling", input_type=FieldInputType.select, options=["ONAN"]
    )

    assert text.options is None
    assert choice.options == ["ONAN"]


@pytest.mark.asyncio
async def test_create_starts_with_empty_field_list(service):
    created = await service.create(EquipmentTypeCreate(name="  Reactor  ", description="Shunt"))

    assert created.name == "Reactor"
    assert created.fields_config == []
    assert [t.id for t in await service.list()] == [created.id]


@pytest.mark.asyncio
async def test_blank_name_is_rejected(service):
    with pytest.raises(ValidationError) as excinfo:
        await service.create(EquipmentTypeCreate(name="   "))

    assert excinfo.value.errors == ["name is required"]


@pytest.mark.asyncio
async def test_duplicate_name_conflicts_on_create_and_rename(service):
    await service.create(EquipmentTypeCreate(name="Transformer"))
    other = await service.create(EquipmentTypeCreate(name="Generator"))

    with pytest.raises(ConflictError):
        await service.create(EquipmentTypeCreate(name="Transformer"))
    with pytest.raises(ConflictError):
        await service.update(other.id, EquipmentTypeUpdate(name="Transformer"))


@pytest.mark.asyncio
async def test_set_fields_replaces_list_and_renumbers(service):
    created = await service.create(EquipmentTypeCreate(name="Transformer"))
    first = [
        FieldConfig(label="Primary Voltage", data_key="primaryVoltage", is_required=True),
        FieldConfig(label="Cooling", data_key="cooling"),
    ]
    await service.set_fields(created.id, first)

    # Reorder and drop one in a single write
    updated = await service.set_fields(
        created.id,
        [
            FieldConfig(label="Oil Volume", data_key="oilVolume", order=9),
            FieldConfig(label="Primary Voltage", data_key="primaryVoltage", is_required=True),
        ],
    )

    assert [(f.data_key, f.order) for f in updated.fields_config] == [
        ("oilVolume", 0),
        ("primaryVoltage", 1),
    ]
    stored = await service.get(created.id)
    assert [f.data_key for f in stored.fields_config] == ["oilVolume", "primaryVoltage"]


@pytest.mark.asyncio
async def test_set_fields_rejects_duplicate_data_keys(service):
    created = await service.create(EquipmentTypeCreate(name="Transformer"))

    with pytest.raises(ValidationError) as excinfo:
        await service.set_fields(
            created.id,
            [
                FieldConfig(label="Voltage", data_key="voltage"),
                FieldConfig(label="Voltage (again)", data_key="voltage"),
            ],
        )

    assert excinfo.value.errors == ["Duplicate dataKey 'voltage'"]
    assert (await service.get(created.id)).fields_config == []


@pytest.mark.asyncio
async def test_missing_type_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get("missing")
    with pytest.raises(NotFoundError):
        await service.set_fields("missing", [])
    with pytest.raises(NotFoundError):
        await service.delete("missing")

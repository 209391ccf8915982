"""Sample NYC grid assets and the default equipment types.

Loading is get-or-create by type name and ``equipment_id``, so running it
against an already seeded store changes nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import structlog

from grid_inventory.infra.unit_of_work import UnitOfWork
from grid_inventory.schemas.field_config import FieldConfig, FieldInputType

logger = structlog.get_logger(__name__)


def _field(label: str, data_key: str, input_type: FieldInputType, **extra: Any) -> FieldConfig:
    return FieldConfig(label=label, data_key=data_key, input_type=input_type, **extra)


DEFAULT_EQUIPMENT_TYPES: dict[str, tuple[str, list[FieldConfig]]] = {
    "Transformer": (
        "Step-up and step-down power transformers",
        [
            _field(
                "Cooling Type",
                "coolingType",
                FieldInputType.select,
                options=["ONAN", "ONAF", "OFAF"],
            ),
            _field("Oil Volume (L)", "oilVolume", FieldInputType.number),
        ],
    ),
    "Substation": (
        "Switching and transformation substations",
        [
            _field(
                "Switchgear Type",
                "switchgearType",
                FieldInputType.select,
                options=["AIS", "GIS", "Hybrid"],
            ),
            _field("Bay Count", "bayCount", FieldInputType.number),
        ],
    ),
    "Generator": (
        "Generating units",
        [_field("Fuel Type", "fuelType", FieldInputType.text, placeholder="e.g. Natural gas")],
    ),
    "Circuit Breaker": (
        "High-voltage breakers",
        [_field("Interrupting Rating (kA)", "interruptingRating", FieldInputType.decimal)],
    ),
    "Capacitor Bank": ("Reactive power compensation", []),
    "Voltage Regulator": ("Feeder voltage regulation", []),
}


@dataclass(frozen=True)
class SampleAsset:
    equipment_id: str
    name: str
    type: str
    status: str
    location: str
    address: str
    latitude: str
    longitude: str
    manufacturer: str
    model: str
    capacity: str
    voltage: str
    installed: str
    serviced: str

    def as_values(self) -> dict[str, Any]:
        return {
            "equipment_id": self.equipment_id,
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "location": self.location,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "capacity": self.capacity,
            "voltage": self.voltage,
            "installation_date": _date(self.installed),
            "last_maintenance": _date(self.serviced),
            "type_specific_data": {},
        }


def _date(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


SAMPLE_ASSETS: tuple[SampleAsset, ...] = (
    SampleAsset("TRF-001-NYC", "Central Park Transformer", "Transformer", "operational",
                "Manhattan", "Central Park West, New York, NY 10024", "40.7829000",
                "-73.9654000", "ABB", "TXP-500", "500 MVA", "345 kV",
                "2018-03-15", "2024-09-01"),
    SampleAsset("SUB-002-NYC", "Times Square Substation", "Substation", "operational",
                "Manhattan", "Broadway & 42nd St, New York, NY 10036", "40.7580000",
                "-73.9855000", "Siemens", "SS-750", "750 MVA", "138 kV",
                "2015-06-20", "2024-08-15"),
    SampleAsset("GEN-003-BRK", "Brooklyn Generator Station", "Generator", "maintenance",
                "Brooklyn", "Brooklyn Navy Yard, Brooklyn, NY 11205", "40.7034000",
                "-73.9708000", "General Electric", "GEN-1000", "1000 MW", "230 kV",
                "2016-11-10", "2024-10-01"),
    SampleAsset("CB-004-QNS", "Queens Circuit Breaker", "Circuit Breaker", "operational",
                "Queens", "Long Island City, Queens, NY 11101", "40.7447000",
                "-73.9485000", "Schneider Electric", "CB-500", "500 MVA", "138 kV",
                "2019-02-28", "2024-09-20"),
    SampleAsset("CAP-005-BRX", "Bronx Capacitor Bank", "Capacitor Bank", "operational",
                "Bronx", "Yankee Stadium Area, Bronx, NY 10451", "40.8296000",
                "-73.9262000", "Eaton", "CAP-300", "300 MVAR", "138 kV",
                "2017-08-05", "2024-07-10"),
    SampleAsset("VR-006-SI", "Staten Island Voltage Regulator", "Voltage Regulator",
                "offline", "Staten Island", "Richmond Terrace, Staten Island, NY 10301",
                "40.6437000", "-74.0776000", "Cooper Power Systems", "VR-250", "250 MVA",
                "69 kV", "2014-05-12", "2024-06-01"),
    SampleAsset("TRF-007-NYC", "Wall Street Transformer", "Transformer", "operational",
                "Manhattan", "Wall Street, New York, NY 10005", "40.7074000",
                "-74.0113000", "ABB", "TXP-600", "600 MVA", "345 kV",
                "2019-09-15", "2024-09-25"),
    SampleAsset("SUB-008-BRK", "Williamsburg Substation", "Substation", "maintenance",
                "Brooklyn", "Bedford Ave, Brooklyn, NY 11249", "40.7081000",
                "-73.9571000", "Siemens", "SS-850", "850 MVA", "138 kV",
                "2016-04-18", "2024-10-10"),
    SampleAsset("GEN-009-QNS", "Astoria Power Plant", "Generator", "operational",
                "Queens", "Astoria Blvd, Queens, NY 11105", "40.7769000",
                "-73.9301000", "General Electric", "GEN-1200", "1200 MW", "345 kV",
                "2015-12-01", "2024-08-30"),
    SampleAsset("CB-010-MAN", "Upper West Side Circuit Breaker", "Circuit Breaker",
                "operational", "Manhattan", "Amsterdam Ave, New York, NY 10023",
                "40.7767000", "-73.9815000", "Schneider Electric", "CB-450", "450 MVA",
                "138 kV", "2018-07-22", "2024-09-05"),
)


@dataclass
class SeedSummary:
    types_created: int = 0
    equipment_created: int = 0


async def seed_equipment_types(uow: UnitOfWork) -> int:
    created = 0
    for name, (description, fields) in DEFAULT_EQUIPMENT_TYPES.items():
        if await uow.equipment_types.get_by_name(name) is not None:
            continue
        row = await uow.equipment_types.create(name=name, description=description)
        ordered = [f.model_copy(update={"order": idx}) for idx, f in enumerate(fields)]
        await uow.equipment_types.replace_fields(row.id, ordered)
        created += 1
    return created


async def seed_equipment(uow: UnitOfWork) -> int:
    created = 0
    for asset in SAMPLE_ASSETS:
        if await uow.equipment.get_by_equipment_id(asset.equipment_id) is not None:
            continue
        await uow.equipment.create(asset.as_values())
        created += 1
    return created


async def seed_all(uow_factory: Callable[[], UnitOfWork], *, with_equipment: bool = True) -> SeedSummary:
    summary = SeedSummary()
    async with uow_factory() as uow:
        summary.types_created = await seed_equipment_types(uow)
        if with_equipment:
            summary.equipment_created = await seed_equipment(uow)
    logger.info(
        "seed_completed",
        types_created=summary.types_created,
        equipment_created=summary.equipment_created,
    )
    return summary


__all__ = [
    "DEFAULT_EQUIPMENT_TYPES",
    "SAMPLE_ASSETS",
    "SeedSummary",
    "seed_all",
    "seed_equipment",
    "seed_equipment_types",
]

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, field_validator, model_validator

from grid_inventory.schemas.common import CamelModel
from grid_inventory.utils.geo import format_coordinate

EQUIPMENT_STATUSES = ("operational", "maintenance", "offline")

# Columns that may be omitted from a PATCH but never set to null
_NON_NULLABLE = (
    "equipment_id",
    "name",
    "type",
    "status",
    "location",
    "address",
    "latitude",
    "longitude",
)


def coerce_type_specific_value(value: Any) -> str | None:
    """Store every dynamic value as text.

    Booleans become ``"true"``/``"false"``, lists are comma-joined (the
    multiselect encoding), numbers use ``str()``. ``None`` is kept so the
    validator can report it as missing.
    """

    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    raise ValueError(f"unsupported value type: {type(value).__name__}")


class _EquipmentFieldChecks(CamelModel):
    @field_validator(
        "equipment_id", "name", "type", "location", "address", mode="before", check_fields=False
    )
    @classmethod
    def _strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            s = v.strip()
            if not s:
                raise ValueError("must not be empty")
            return s
        return v

    @field_validator("status", check_fields=False)
    @classmethod
    def _check_status(cls, v: str | None) -> str | None:
        if v is None:
            return None
        s = v.strip()
        if s.lower() not in EQUIPMENT_STATUSES:
            raise ValueError(f"status must be one of {', '.join(EQUIPMENT_STATUSES)}")
        # stored as given; callers compare case-insensitively
        return s

    @field_validator("latitude", "longitude", mode="before", check_fields=False)
    @classmethod
    def _format_coordinate(cls, v: Any) -> Any:
        if v is None:
            return None
        return format_coordinate(v)

    @field_validator("latitude", check_fields=False)
    @classmethod
    def _check_latitude(cls, v: str | None) -> str | None:
        if v is not None and not -90.0 <= float(v) <= 90.0:
            raise ValueError("latitude must be between -90 and 90")
        return v

    @field_validator("longitude", check_fields=False)
    @classmethod
    def _check_longitude(cls, v: str | None) -> str | None:
        if v is not None and not -180.0 <= float(v) <= 180.0:
            raise ValueError("longitude must be between -180 and 180")
        return v

    @field_validator("installation_date", "last_maintenance", check_fields=False)
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("type_specific_data", mode="before", check_fields=False)
    @classmethod
    def _coerce_type_specific_data(cls, v: Any) -> Any:
        if v is None:
            return None
        if not isinstance(v, dict):
            raise ValueError("typeSpecificData must be an object")
        return {str(k): coerce_type_specific_value(val) for k, val in v.items()}


class EquipmentCreate(_EquipmentFieldChecks):
    equipment_id: str = Field(description="Unique external code, e.g. TRF-001-NYC")
    name: str
    type: str = Field(description="EquipmentType name")
    status: str = Field(description="operational | maintenance | offline")
    location: str
    address: str
    latitude: str = Field(description="Decimal degrees, stored with 7 fractional digits")
    longitude: str = Field(description="Decimal degrees, stored with 7 fractional digits")
    manufacturer: str | None = None
    model: str | None = None
    capacity: str | None = None
    voltage: str | None = None
    installation_date: datetime | None = None
    last_maintenance: datetime | None = None
    type_specific_data: dict[str, str | None] | None = Field(default_factory=dict)

    @field_validator("type_specific_data", mode="after")
    @classmethod
    def _default_empty(cls, v: dict[str, str | None] | None) -> dict[str, str | None]:
        return v or {}


class EquipmentUpdate(_EquipmentFieldChecks):
    """Partial update; only the keys present in the request are applied."""

    equipment_id: str | None = None
    name: str | None = None
    type: str | None = None
    status: str | None = None
    location: str | None = None
    address: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    capacity: str | None = None
    voltage: str | None = None
    installation_date: datetime | None = None
    last_maintenance: datetime | None = None
    type_specific_data: dict[str, str | None] | None = None

    @model_validator(mode="after")
    def _reject_null_required(self) -> EquipmentUpdate:
        nulled = [
            name
            for name in _NON_NULLABLE
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"cannot be null: {', '.join(nulled)}")
        return self


class EquipmentRead(CamelModel):
    id: str
    equipment_id: str
    name: str
    type: str
    status: str
    location: str
    address: str
    latitude: str
    longitude: str
    manufacturer: str | None = None
    model: str | None = None
    capacity: str | None = None
    voltage: str | None = None
    installation_date: datetime | None = None
    last_maintenance: datetime | None = None
    type_specific_data: dict[str, str | None] = Field(default_factory=dict)

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "0d7a4a57-3f40-4a3e-bb0b-63d7c8f0a6e1",
                    "equipmentId": "TRF-001-NYC",
                    "name": "Central Park Transformer",
                    "type": "Transformer",
                    "status": "operational",
                    "location": "Manhattan",
                    "address": "Central Park West, New York, NY 10024",
                    "latitude": "40.7829000",
                    "longitude": "-73.9654000",
                    "manufacturer": "ABB",
                    "model": "TXP-500",
                    "capacity": "500 MVA",
                    "voltage": "345 kV",
                    "installationDate": "2018-03-15T00:00:00Z",
                    "lastMaintenance": "2024-09-01T00:00:00Z",
                    "typeSpecificData": {"primaryVoltage": "345kV"},
                }
            ]
        },
    }


class EquipmentStats(CamelModel):
    total: int = 0
    operational: int = 0
    maintenance: int = 0
    offline: int = 0

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from grid_inventory.schemas.common import CamelModel
from grid_inventory.schemas.field_config import FieldConfig


class EquipmentTypeCreate(CamelModel):
    name: str = Field(description="Unique type name, e.g. Transformer")
    description: str | None = None


class EquipmentTypeUpdate(CamelModel):
    name: str | None = None
    description: str | None = None


class EquipmentTypeFieldsUpdate(CamelModel):
    fields_config: list[FieldConfig] = Field(
        description="Complete, ordered replacement for the type's field list"
    )


class EquipmentTypeRead(CamelModel):
    id: str
    name: str
    description: str | None = None
    fields_config: list[FieldConfig] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "5f0c6f0e-7c1d-4a55-9f44-2a6d0f4c1b11",
                    "name": "Transformer",
                    "description": "Step-up and step-down power transformers",
                    "fieldsConfig": [
                        {
                            "id": "f3d8c2a0-1b55-4c43-9a0e-6b8e7d9f1c22",
                            "label": "Primary Voltage",
                            "dataKey": "primaryVoltage",
                            "inputType": "text",
                            "isRequired": True,
                            "options": None,
                            "placeholder": "e.g. 138kV",
                            "helpText": None,
                            "order": 0,
                        }
                    ],
                }
            ]
        },
    }

# grid_inventory/schemas/common.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for payloads exchanged as camelCase JSON (``equipmentId`` etc.)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")
    errors: list[str] | None = Field(
        default=None, description="Every validation failure, in check order"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": "Dynamic field validation failed",
                    "errors": ["Primary Voltage is required"],
                }
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}

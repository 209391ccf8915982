from __future__ import annotations

import uuid
from enum import Enum

from pydantic import Field, field_validator, model_validator

from grid_inventory.schemas.common import CamelModel


class FieldInputType(str, Enum):
    text = "text"
    number = "number"
    decimal = "decimal"
    date = "date"
    textarea = "textarea"
    boolean = "boolean"
    select = "select"
    multiselect = "multiselect"


OPTION_INPUT_TYPES = frozenset({FieldInputType.select, FieldInputType.multiselect})


class FieldConfig(CamelModel):
    """One custom attribute declared by an equipment type.

    The declared ``input_type`` only drives presence checks and display; values
    in ``typeSpecificData`` are stored as strings whatever the input type.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Opaque field id")
    label: str = Field(min_length=1, description="Display label, used in error messages")
    data_key: str = Field(min_length=1, description="Key into typeSpecificData")
    input_type: FieldInputType = Field(default=FieldInputType.text)
    is_required: bool = Field(default=False)
    options: list[str] | None = Field(
        default=None, description="Choices for select / multiselect fields"
    )
    placeholder: str | None = None
    help_text: str | None = None
    order: int = Field(default=0)

    @field_validator("label", "data_key")
    @classmethod
    def _strip_non_blank(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("must not be blank")
        return s

    @model_validator(mode="after")
    def _options_only_for_choice_fields(self) -> FieldConfig:
        if self.input_type not in OPTION_INPUT_TYPES:
            self.options = None
        return self

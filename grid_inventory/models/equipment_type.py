from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from grid_inventory.models.base import Base, new_id, utcnow


class EquipmentType(Base):
    __tablename__ = "equipment_types"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, unique=True, nullable=False)  # e.g. Transformer
    description = Column(Text, nullable=True)
    # Ordered list of FieldConfig objects in their camelCase JSON form
    fields_config: Mapped[list] = mapped_column(
        JSONB, nullable=False, default=list, server_default=text("'[]'::jsonb")
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

from __future__ import annotations

from sqlalchemy import Column, DateTime, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from grid_inventory.models.base import Base, new_id, utcnow


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(String(36), primary_key=True, default=new_id)
    equipment_id = Column(String, unique=True, nullable=False)  # e.g. TRF-001-NYC
    name = Column(String, nullable=False)
    # Soft reference to EquipmentType.name (no foreign key)
    type = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, index=True)  # operational | maintenance | offline
    location = Column(String, nullable=False)
    address = Column(Text, nullable=False)
    latitude = Column(Numeric(10, 7), nullable=False)
    longitude = Column(Numeric(10, 7), nullable=False)
    manufacturer = Column(String, nullable=True)
    model = Column(String, nullable=True)
    capacity = Column(String, nullable=True)
    voltage = Column(String, nullable=True)
    installation_date = Column(DateTime(timezone=True), nullable=True)
    last_maintenance = Column(DateTime(timezone=True), nullable=True)
    type_specific_data: Mapped[dict] = mapped_column(
        JSONB, nullable=False, default=dict, server_default=text("'{}'::jsonb")
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# Imported here so Alembic autogenerate sees every table
# grid_inventory/models/__init__.py
from .base import Base
from .equipment import Equipment
from .equipment_type import EquipmentType

__all__ = [
    "Base",
    "Equipment",
    "EquipmentType",
]

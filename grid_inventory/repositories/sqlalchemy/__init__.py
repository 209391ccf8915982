"""SQLAlchemy implementations of repository interfaces."""

from .equipment import SqlAlchemyEquipmentRepository
from .equipment_type import SqlAlchemyEquipmentTypeRepository

__all__ = [
    "SqlAlchemyEquipmentRepository",
    "SqlAlchemyEquipmentTypeRepository",
]

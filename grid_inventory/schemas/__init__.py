from .common import ErrorResponse, OkResponse
from .equipment import EquipmentCreate, EquipmentRead, EquipmentStats, EquipmentUpdate
from .equipment_type import (
    EquipmentTypeCreate,
    EquipmentTypeFieldsUpdate,
    EquipmentTypeRead,
    EquipmentTypeUpdate,
)
from .field_config import FieldConfig, FieldInputType
from .search import EquipmentSearchQuery, SearchType

__all__ = [
    "ErrorResponse",
    "OkResponse",
    "EquipmentCreate",
    "EquipmentRead",
    "EquipmentStats",
    "EquipmentUpdate",
    "EquipmentTypeCreate",
    "EquipmentTypeFieldsUpdate",
    "EquipmentTypeRead",
    "EquipmentTypeUpdate",
    "FieldConfig",
    "FieldInputType",
    "EquipmentSearchQuery",
    "SearchType",
]

"""In-memory implementations of repository interfaces."""

from .equipment import InMemoryEquipmentRepository
from .equipment_type import InMemoryEquipmentTypeRepository
from .store import InMemoryStore, get_memory_store, reset_memory_store

__all__ = [
    "InMemoryEquipmentRepository",
    "InMemoryEquipmentTypeRepository",
    "InMemoryStore",
    "get_memory_store",
    "reset_memory_store",
]

"""API dependency helpers and service providers."""

from grid_inventory import db
from grid_inventory.core.config import settings
from grid_inventory.infra.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork, UnitOfWork
from grid_inventory.repositories.memory import get_memory_store
from grid_inventory.services.equipment_search import EquipmentSearchService
from grid_inventory.services.equipment_types import EquipmentTypeService
from grid_inventory.services.equipments import EquipmentService
from grid_inventory.services.health import HealthService

__all__ = [
    "get_equipment_service",
    "get_equipment_search_service",
    "get_equipment_type_service",
    "get_health_service",
    "uow_factory",
]


def uow_factory() -> UnitOfWork:
    if settings.storage_backend == "memory":
        return InMemoryUnitOfWork(get_memory_store())
    return SqlAlchemyUnitOfWork(db.SessionLocal)


# --- Service providers for DI ---


def get_equipment_service() -> EquipmentService:
    return EquipmentService(uow_factory)


def get_equipment_search_service() -> EquipmentSearchService:
    return EquipmentSearchService(uow_factory)


def get_equipment_type_service() -> EquipmentTypeService:
    return EquipmentTypeService(uow_factory)


def get_health_service() -> HealthService:
    return HealthService(uow_factory)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from grid_inventory.api.deps import get_equipment_search_service, get_equipment_service
from grid_inventory.core.exceptions import NotFoundError
from grid_inventory.schemas.common import ErrorResponse
from grid_inventory.schemas.equipment import (
    EquipmentCreate,
    EquipmentRead,
    EquipmentStats,
    EquipmentUpdate,
)
from grid_inventory.schemas.search import EquipmentSearchQuery
from grid_inventory.services.equipment_search import EquipmentSearchService
from grid_inventory.services.equipments import EquipmentService

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("", response_model=list[EquipmentRead], summary="List all equipment")
async def list_equipment(svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.list()


# Static paths are registered before /{equipment_pk} so they are not captured by it.
@router.get(
    "/search",
    response_model=list[EquipmentRead],
    responses={400: {"model": ErrorResponse}},
    summary="Search equipment by text or radius",
    description=(
        "With both latitude and longitude, returns every record within `radius` km "
        "(default 10, haversine). Otherwise runs a case-insensitive substring search "
        "over the fields selected by `searchType`; an empty query returns everything."
    ),
)
async def search_equipment(
    q: EquipmentSearchQuery = Depends(EquipmentSearchQuery.as_query),
    svc: EquipmentSearchService = Depends(get_equipment_search_service),
):
    return await svc.search(q)


@router.get("/stats", response_model=EquipmentStats, summary="Counts by status")
async def equipment_stats(svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.stats()


@router.get(
    "/by-equipment-id/{equipment_id}",
    response_model=EquipmentRead,
    responses={404: {"model": ErrorResponse}},
    summary="Look up equipment by its external code",
)
async def get_by_equipment_id(
    equipment_id: str, svc: EquipmentService = Depends(get_equipment_service)
):
    return await svc.get_by_equipment_id(equipment_id)


@router.get(
    "/{equipment_pk}",
    response_model=EquipmentRead,
    responses={404: {"model": ErrorResponse}},
    summary="Get one equipment record",
)
async def get_equipment(equipment_pk: str, svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.get(equipment_pk)


@router.post(
    "",
    response_model=EquipmentRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create equipment (dynamic fields validated first)",
)
async def create_equipment(
    payload: EquipmentCreate, svc: EquipmentService = Depends(get_equipment_service)
):
    return await svc.create(payload)


@router.patch(
    "/{equipment_pk}",
    response_model=EquipmentRead,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Partially update equipment",
    description="typeSpecificData is merged into the stored map and revalidated.",
)
async def update_equipment(
    equipment_pk: str,
    payload: EquipmentUpdate,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.update(equipment_pk, payload)


@router.delete(
    "/{equipment_pk}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete equipment",
)
async def delete_equipment(
    equipment_pk: str, svc: EquipmentService = Depends(get_equipment_service)
):
    if not await svc.delete(equipment_pk):
        raise NotFoundError("Equipment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

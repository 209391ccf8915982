from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from grid_inventory.api.deps import get_equipment_type_service
from grid_inventory.schemas.common import ErrorResponse
from grid_inventory.schemas.equipment_type import (
    EquipmentTypeCreate,
    EquipmentTypeFieldsUpdate,
    EquipmentTypeRead,
    EquipmentTypeUpdate,
)
from grid_inventory.services.equipment_types import EquipmentTypeService

router = APIRouter(prefix="/equipment-types", tags=["equipment-types"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=list[EquipmentTypeRead], summary="List equipment types")
async def list_equipment_types(svc: EquipmentTypeService = Depends(get_equipment_type_service)):
    return await svc.list()


@router.get(
    "/{type_id}", response_model=EquipmentTypeRead, responses=_NOT_FOUND, summary="Get a type"
)
async def get_equipment_type(
    type_id: str, svc: EquipmentTypeService = Depends(get_equipment_type_service)
):
    return await svc.get(type_id)


@router.post(
    "",
    response_model=EquipmentTypeRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create a type with an empty field list",
)
async def create_equipment_type(
    payload: EquipmentTypeCreate,
    svc: EquipmentTypeService = Depends(get_equipment_type_service),
):
    return await svc.create(payload)


@router.patch(
    "/{type_id}",
    response_model=EquipmentTypeRead,
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Rename or re-describe a type",
)
async def update_equipment_type(
    type_id: str,
    payload: EquipmentTypeUpdate,
    svc: EquipmentTypeService = Depends(get_equipment_type_service),
):
    return await svc.update(type_id, payload)


@router.delete(
    "/{type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
    summary="Delete a type (equipment referencing it is left untouched)",
)
async def delete_equipment_type(
    type_id: str, svc: EquipmentTypeService = Depends(get_equipment_type_service)
):
    await svc.delete(type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{type_id}/fields",
    response_model=EquipmentTypeRead,
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse}},
    summary="Replace the whole field list",
    description="Fields are stored in the given order and renumbered 0..n-1.",
)
async def replace_equipment_type_fields(
    type_id: str,
    payload: EquipmentTypeFieldsUpdate,
    svc: EquipmentTypeService = Depends(get_equipment_type_service),
):
    return await svc.set_fields(type_id, payload.fields_config)

# grid_inventory/api/routers/healthz.py
from fastapi import APIRouter

from grid_inventory.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="Returns 200 without touching storage.",
)
async def healthz():
    return {"ok": True}

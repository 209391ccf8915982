from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from grid_inventory.api.deps import get_health_service
from grid_inventory.core.startup import is_migration_completed, last_migration_error
from grid_inventory.schemas.common import OkResponse
from grid_inventory.services.health import HealthService

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="Round trip to storage (SELECT 1 on Postgres); 503 while migrations run.",
)
async def readyz(svc: HealthService = Depends(get_health_service)):
    if not is_migration_completed():
        payload = {
            "error": {
                "code": "migrations_pending",
                "message": "Database migrations are still running",
            }
        }
        detail = last_migration_error()
        if detail:
            payload["error"]["detail"] = detail
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=payload,
        )
    return await svc.ok()

import os
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from grid_inventory.api import errors
from grid_inventory.api.deps import uow_factory
from grid_inventory.api.routers.equipment import router as equipment_router
from grid_inventory.api.routers.equipment_types import router as equipment_types_router
from grid_inventory.api.routers.healthz import router as healthz_router
from grid_inventory.api.routers.readyz import router as readyz_router
from grid_inventory.core.config import settings
from grid_inventory.core.startup import is_migration_completed, run_database_migrations
from grid_inventory.logging import setup_logging
from grid_inventory.middleware.rate_limit import limiter, rate_limit_middleware
from grid_inventory.middleware.request_id import request_id_middleware
from grid_inventory.middleware.security_headers import security_headers_middleware
from grid_inventory.seed import seed_all


def _init_sentry() -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=settings.app_env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = structlog.get_logger(__name__)
    run_database_migrations()
    if settings.seed_on_startup:
        if is_migration_completed():
            await seed_all(uow_factory)
        else:
            logger.warning("seed_skipped", reason="migrations_pending")
    logger.info("app_startup", env=settings.app_env, storage=settings.storage_backend)
    yield
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    setup_logging()
    _init_sentry()

    app = FastAPI(title="Grid Equipment Inventory", lifespan=lifespan)
    app.state.limiter = limiter
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(equipment_router)
    app.include_router(equipment_types_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)
    return app


app = create_app()

# tests/conftest.py
"""Shared fixtures.

Everything runs against the in-memory backend unless a test opts into
Postgres through the ``pg_uow_factory`` fixture (needs TEST_DATABASE_URL).
"""

import os
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Load .env.test if available, then pin the app to the in-memory store
load_dotenv(".env.test", override=False)
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["TESTING"] = "1"
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("LOG_FORMAT", "json")

from grid_inventory.api.deps import uow_factory  # noqa: E402
from grid_inventory.core.startup import run_database_migrations  # noqa: E402
from grid_inventory.infra.unit_of_work import InMemoryUnitOfWork  # noqa: E402
from grid_inventory.main import create_app  # noqa: E402
from grid_inventory.middleware.rate_limit import reset_rate_limits  # noqa: E402
from grid_inventory.repositories.memory import get_memory_store, reset_memory_store  # noqa: E402
from grid_inventory.schemas.field_config import FieldConfig  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    reset_memory_store()
    reset_rate_limits()
    yield
    reset_memory_store()


@pytest.fixture
def memory_uow_factory():
    return lambda: InMemoryUnitOfWork(get_memory_store())


@pytest.fixture
def app() -> FastAPI:
    run_database_migrations()
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def app_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_field():
    def _make(label: str, data_key: str, *, required: bool = False, **extra) -> FieldConfig:
        return FieldConfig(label=label, data_key=data_key, is_required=required, **extra)

    return _make


@pytest.fixture
def add_type():
    """Create an equipment type straight through the repositories."""

    async def _add(name: str, fields: list[FieldConfig] | None = None, description: str | None = None):
        async with uow_factory() as uow:
            row = await uow.equipment_types.create(name=name, description=description)
            if fields:
                ordered = [f.model_copy(update={"order": i}) for i, f in enumerate(fields)]
                row = await uow.equipment_types.replace_fields(row.id, ordered)
        return row

    return _add


@pytest.fixture
def equipment_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "equipmentId": "TRF-100-NYC",
            "name": "Test Transformer",
            "type": "Transformer",
            "status": "operational",
            "location": "Manhattan",
            "address": "1 Test Plaza, New York, NY 10001",
            "latitude": "40.7580",
            "longitude": "-73.9855",
            "typeSpecificData": {},
        }
        payload.update(overrides)
        return payload

    return _payload

"""Search use cases over the seeded in-memory store."""

from __future__ import annotations

import pytest
import pytest_asyncio

from grid_inventory.schemas.search import EquipmentSearchQuery, SearchType
from grid_inventory.seed import SAMPLE_ASSETS, seed_all
from grid_inventory.services.equipment_search import EquipmentSearchService

pytestmark = pytest.mark.unit


@pytest_asyncio.fixture
async def service(memory_uow_factory) -> EquipmentSearchService:
    await seed_all(memory_uow_factory)
    return EquipmentSearchService(memory_uow_factory)


def _codes(rows) -> set[str]:
    return {r.equipment_id for r in rows}


@pytest.mark.asyncio
async def test_empty_query_returns_every_record(service):
    rows = await service.search(EquipmentSearchQuery(query="  "))

    assert _codes(rows) == {a.equipment_id for a in SAMPLE_ASSETS}


@pytest.mark.asyncio
async def test_id_search_is_scoped_to_equipment_id(service):
    by_id = await service.search(EquipmentSearchQuery(query="brk", search_type=SearchType.id))
    by_all = await service.search(EquipmentSearchQuery(query="brooklyn"))
    by_id_brooklyn = await service.search(
        EquipmentSearchQuery(query="brooklyn", search_type=SearchType.id)
    )

    assert _codes(by_id) == {"GEN-003-BRK", "SUB-008-BRK"}
    assert _codes(by_all) == {"GEN-003-BRK", "SUB-008-BRK"}
    assert by_id_brooklyn == []


@pytest.mark.asyncio
async def test_radius_search_uses_default_radius(service):
    rows = await service.search(EquipmentSearchQuery(latitude=40.6437, longitude=-74.0776))

    # Wall Street is about 9 km across the harbour; Brooklyn is further
    assert _codes(rows) == {"VR-006-SI", "TRF-007-NYC"}


@pytest.mark.asyncio
async def test_radius_search_ignores_query_text(service):
    near = await service.search(
        EquipmentSearchQuery(
            query="nothing matches this", latitude=40.7128, longitude=-74.0060, radius_km=5
        )
    )
    wide = await service.search(
        EquipmentSearchQuery(latitude=40.7128, longitude=-74.0060, radius_km=10)
    )

    assert "SUB-002-NYC" not in _codes(near)
    assert "TRF-007-NYC" in _codes(near)
    assert "SUB-002-NYC" in _codes(wide)


@pytest.mark.asyncio
async def test_type_and_status_filters(service):
    rows = await service.search(EquipmentSearchQuery(type="Substation", status="MAINTENANCE"))

    assert _codes(rows) == {"SUB-008-BRK"}

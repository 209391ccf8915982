from __future__ import annotations

from collections.abc import Callable

from grid_inventory.infra.unit_of_work import UnitOfWork


class HealthService:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    async def ok(self) -> dict:
        async with self._uow_factory() as uow:
            await uow.ping()
        return {"ok": True}

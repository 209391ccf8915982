"""Unit of Work abstraction used by the service layer."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from grid_inventory.core.exceptions import StorageError
from grid_inventory.repositories.interfaces import EquipmentRepository, EquipmentTypeRepository
from grid_inventory.repositories.memory import (
    InMemoryEquipmentRepository,
    InMemoryEquipmentTypeRepository,
    InMemoryStore,
)
from grid_inventory.repositories.sqlalchemy import (
    SqlAlchemyEquipmentRepository,
    SqlAlchemyEquipmentTypeRepository,
)

logger = structlog.get_logger(__name__)


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """Defines the repository boundary exposed to services."""

    equipment: EquipmentRepository
    equipment_types: EquipmentTypeRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def ping(self) -> None: ...


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of Work backed by SQLAlchemy async sessions.

    Commits when the block exits cleanly and rolls back otherwise. Driver
    errors escaping the block are re-raised as :class:`StorageError`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self.equipment: EquipmentRepository
        self.equipment_types: EquipmentTypeRepository

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        session = self._session_factory()
        self._session = session
        self.equipment = SqlAlchemyEquipmentRepository(session)
        self.equipment_types = SqlAlchemyEquipmentTypeRepository(session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is None:
            return
        try:
            if exc_type:
                await self._session.rollback()
            else:
                await self._session.commit()
        except SQLAlchemyError as commit_exc:
            logger.error("storage_commit_failed", exc_info=True)
            raise StorageError("storage failure") from commit_exc
        finally:
            await self._session.close()
            self._session = None
        if exc is not None and isinstance(exc, SQLAlchemyError):
            logger.error("storage_error", error=exc.__class__.__name__, exc_info=exc)
            raise StorageError("storage failure") from exc

    async def commit(self) -> None:
        if self._session is not None:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session is not None:
            await self._session.rollback()

    async def ping(self) -> None:
        await self.session.execute(text("SELECT 1"))

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork session is not initialized. Use within context manager.")
        return self._session


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of Work over :class:`InMemoryStore`.

    Writes apply immediately. The store is snapshotted before the first write
    of the block and restored if the block raises, mirroring a rolled-back
    transaction. Read-only blocks never copy the store.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._snapshot = None
        self.equipment = InMemoryEquipmentRepository(store, on_write=self._ensure_snapshot)
        self.equipment_types = InMemoryEquipmentTypeRepository(
            store, on_write=self._ensure_snapshot
        )

    def _ensure_snapshot(self) -> None:
        if self._snapshot is None:
            self._snapshot = self._store.snapshot()

    async def __aenter__(self) -> InMemoryUnitOfWork:
        self._snapshot = None
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type:
            await self.rollback()
        self._snapshot = None

    async def commit(self) -> None:
        self._snapshot = None

    async def rollback(self) -> None:
        if self._snapshot is not None:
            self._store.restore(self._snapshot)
            self._snapshot = None

    async def ping(self) -> None:
        return None

"""Startup helpers: Alembic migrations, optional seeding and readiness state."""

from __future__ import annotations

import os
import subprocess
import threading
import time
from typing import Final

import structlog
from structlog.stdlib import BoundLogger

from grid_inventory.core.config import settings

_MAX_ATTEMPTS: Final[int] = int(os.getenv("ALEMBIC_STARTUP_MAX_ATTEMPTS", "10"))
_RETRY_DELAY_SECONDS: Final[float] = float(os.getenv("ALEMBIC_STARTUP_RETRY_SECONDS", "2"))
_UPGRADE_COMMAND: Final[tuple[str, ...]] = ("alembic", "upgrade", "head")

_state_lock = threading.Lock()
_migrations_completed = False
_migration_error: str | None = None
_worker: threading.Thread | None = None


def _truthy(value: str | None) -> bool:
    return (value or "").lower() in {"1", "true", "yes", "on"}


def exit_on_failure() -> bool:
    """Fail fast in prod, migrate in the background elsewhere."""
    override = os.getenv("ALEMBIC_EXIT_ON_FAILURE")
    if override is not None:
        return _truthy(override)
    return settings.app_env.lower() == "prod"


def is_migration_completed() -> bool:
    return _migrations_completed


def last_migration_error() -> str | None:
    return _migration_error


def _set_state(completed: bool, error: str | None) -> None:
    global _migrations_completed, _migration_error
    with _state_lock:
        _migrations_completed = completed
        _migration_error = error


def run_database_migrations() -> None:
    """Bring the schema to ``head`` before the app reports ready.

    The in-memory backend and test runs have no schema, so readiness is set
    straight away. Outside prod the upgrade runs in a background thread and
    /readyz answers 503 until it finishes.
    """

    global _worker
    logger = structlog.get_logger(__name__)

    if _migrations_completed:
        logger.info("alembic_upgrade_skipped", reason="already_completed")
        return

    if settings.storage_backend == "memory" or os.getenv("TESTING"):
        reason = "memory_backend" if settings.storage_backend == "memory" else "testing"
        _set_state(True, None)
        logger.info("alembic_upgrade_skipped", reason=reason)
        return

    if exit_on_failure():
        ok, error = _run_migrations_sequence(logger)
        _set_state(ok, error)
        if not ok:
            raise SystemExit(1)
        return

    if _worker and _worker.is_alive():
        logger.info("alembic_upgrade_skipped", reason="already_running")
        return

    _set_state(False, None)
    _worker = threading.Thread(
        target=_run_in_background,
        name="alembic-startup",
        daemon=True,
    )
    _worker.start()
    logger.info("alembic_upgrade_background_started")


def _run_in_background() -> None:
    logger = structlog.get_logger(__name__).bind(mode="background")
    ok, error = _run_migrations_sequence(logger)
    _set_state(ok, error)


def _run_migrations_sequence(logger: BoundLogger) -> tuple[bool, str | None]:
    last_error: str | None = None

    for attempt in range(1, _MAX_ATTEMPTS + 1):
        try:
            logger.info("alembic_upgrade_start", attempt=attempt)
            subprocess.run(_UPGRADE_COMMAND, check=True)
        except FileNotFoundError:
            logger.error("alembic_command_missing", command=" ".join(_UPGRADE_COMMAND))
            return False, "alembic command not found"
        except subprocess.CalledProcessError as exc:  # pragma: no cover - needs a broken database
            last_error = f"alembic exited with return code {exc.returncode}"
            logger.error("alembic_upgrade_failed", attempt=attempt, returncode=exc.returncode)
        else:
            logger.info("alembic_upgrade_succeeded", attempt=attempt)
            return True, None

        if attempt < _MAX_ATTEMPTS:
            delay = _RETRY_DELAY_SECONDS * attempt
            logger.info("alembic_upgrade_retry", next_attempt=attempt + 1, delay_seconds=delay)
            time.sleep(delay)

    logger.error("alembic_upgrade_exhausted", attempts=_MAX_ATTEMPTS)
    return False, last_error or "alembic upgrade failed"


__all__ = [
    "exit_on_failure",
    "is_migration_completed",
    "last_migration_error",
    "run_database_migrations",
]

# scripts/seed.py
"""Load the sample NYC grid assets and the default equipment types.

Safe to run repeatedly: types are matched by name and equipment by
equipment_id, and existing rows are left alone.

    DATABASE_URL=postgresql+asyncpg://... python scripts/seed.py
    python scripts/seed.py --types-only
"""

import argparse
import asyncio
import logging
import os
import sys

# Run from the repository root
sys.path.append(os.path.abspath("."))

from grid_inventory.api.deps import uow_factory  # noqa: E402
from grid_inventory.core.config import settings  # noqa: E402
from grid_inventory.logging import setup_logging  # noqa: E402
from grid_inventory.seed import seed_all  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sample equipment and equipment types.")
    parser.add_argument(
        "--types-only",
        action="store_true",
        help="Create the default equipment types and skip the sample assets.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()

    if settings.storage_backend == "memory":
        logger.error("STORAGE_BACKEND=memory keeps nothing after exit; use Postgres.")
        return 1

    try:
        summary = asyncio.run(seed_all(uow_factory, with_equipment=not args.types_only))
    except Exception:  # noqa: BLE001
        logger.exception("Seed failed due to an unexpected error.")
        return 1

    logger.info(
        "seeded %d equipment types and %d equipment records",
        summary.types_created,
        summary.equipment_created,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

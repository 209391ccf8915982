from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Python-side so rows inserted in one transaction still sort by creation
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass

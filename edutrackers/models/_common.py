"""Column helpers shared across model modules."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Enum


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_type(enum_cls) -> Enum:
    """Persist enum *values* (``"student"``) rather than member names."""

    return Enum(enum_cls, values_callable=lambda members: [m.value for m in members])

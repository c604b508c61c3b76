"""Shared column helpers for table models."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Current UTC time without tzinfo.

    Columns are TIMESTAMP WITHOUT TIME ZONE and always hold UTC.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def timestamp_field() -> Any:
    """A naive UTC timestamp column defaulting to now.

    The column type is pinned to match the migrations instead of whatever
    SQLModel infers for `datetime`.
    """
    return Field(default_factory=utc_now, sa_type=DateTime(timezone=False))


class Timestamped(SQLModel):
    """`created_at`/`updated_at` pair for mutable records."""

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()

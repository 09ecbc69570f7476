"""Key-value preference storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Preference(SQLModel, table=True):
    """One value stored under a unique key.

    ``value`` is unbounded text so a whole serialized collection fits in a
    single row.
    """

    __tablename__: ClassVar[str] = "preference"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)

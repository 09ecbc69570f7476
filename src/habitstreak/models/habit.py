"""Habit data model."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from ..clock import is_same_day, local_now


class Priority(str, Enum):
    """Closed set of habit priorities, persisted by value."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Habit(SQLModel):
    """A trackable daily habit.

    Not a table: the whole collection is stored as one serialized blob in the
    preference store (see ``services.habit_codec``).
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    priority: Priority = Field(default=Priority.MEDIUM)
    due_date: Optional[datetime] = None
    is_completed: bool = False
    is_recurring: bool = True
    streak: int = 0
    last_completed_date: Optional[datetime] = None

    @property
    def is_completed_today(self) -> bool:
        """True when the last completion happened on the current local day."""

        return self.completed_on_day_of(local_now())

    def completed_on_day_of(self, moment: datetime) -> bool:
        """True when the last completion falls on the same calendar day as ``moment``."""

        if self.last_completed_date is None:
            return False
        return is_same_day(self.last_completed_date, moment)

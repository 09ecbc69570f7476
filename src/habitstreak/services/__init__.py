"""Service module exports."""

from . import habit_codec, habit_store, habits
from .habit_store import HabitStore

__all__ = [
    "HabitStore",
    "habit_codec",
    "habit_store",
    "habits",
]

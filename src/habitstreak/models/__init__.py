"""SQLModel exports."""

from .habit import Habit, Priority
from .preference import Preference

__all__ = [
    "Habit",
    "Preference",
    "Priority",
]

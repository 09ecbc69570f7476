"""Dialog components for the HabitStreak app."""

from .habit_dialog import show_add_habit_dialog

__all__ = ["show_add_habit_dialog"]

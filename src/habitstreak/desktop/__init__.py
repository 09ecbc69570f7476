"""Flet user interface for HabitStreak."""

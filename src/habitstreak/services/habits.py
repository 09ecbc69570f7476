"""Completion and day-rollover rules for habits.

These functions mutate the habit they are given and return it, so they can be
used both in place and in expressions. ``now`` defaults to the local clock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, MutableSequence, Optional

from ..clock import is_same_day, local_now
from ..models.habit import Habit, Priority


def new_habit(
    name: str,
    priority: Priority = Priority.MEDIUM,
    *,
    is_recurring: bool = True,
    due_date: Optional[datetime] = None,
) -> Habit:
    """Return a fresh, never-completed habit."""

    return Habit(
        name=name,
        priority=Priority(priority),
        due_date=due_date,
        is_completed=False,
        is_recurring=is_recurring,
        streak=0,
        last_completed_date=None,
    )


def is_completed_today(habit: Habit, now: Optional[datetime] = None) -> bool:
    """Return True when ``habit`` was last completed on the same day as ``now``."""

    return habit.completed_on_day_of(now or local_now())


def _mark_completed(habit: Habit, now: datetime) -> Habit:
    # Unguarded: calling twice on one day counts the day twice.
    # toggle_completion is the only caller.
    habit.is_completed = True
    habit.last_completed_date = now
    habit.streak += 1
    return habit


def reset_for_new_day(habit: Habit, now: Optional[datetime] = None) -> Habit:
    """Clear the completion flag when the last completion was on an earlier day.

    ``streak`` and ``last_completed_date`` are left untouched; habits that were
    never completed are not modified at all.
    """

    if habit.last_completed_date is not None and not is_same_day(
        habit.last_completed_date, now or local_now()
    ):
        habit.is_completed = False
    return habit


def reset_habits_for_new_day(
    habits: Iterable[Habit], now: Optional[datetime] = None
) -> list[Habit]:
    """Apply :func:`reset_for_new_day` to every habit with a single ``now``."""

    moment = now or local_now()
    return [reset_for_new_day(habit, moment) for habit in habits]


def toggle_completion(habit: Habit, now: Optional[datetime] = None) -> Habit:
    """Flip today's completion state of ``habit``.

    Completing increments the streak; un-completing the same day clears the
    completion timestamp and gives the day back (never below zero).
    """

    moment = now or local_now()
    if is_completed_today(habit, moment):
        habit.is_completed = False
        habit.last_completed_date = None
        if habit.streak > 0:
            habit.streak -= 1
        return habit
    return _mark_completed(habit, moment)


def remove_at(habits: MutableSequence[Habit], offsets: Iterable[int]) -> list[Habit]:
    """Delete the habits at ``offsets`` and return the removed records.

    Offsets refer to positions before any removal; out-of-range offsets are
    ignored.
    """

    removed: list[Habit] = []
    for index in sorted(set(offsets), reverse=True):
        if 0 <= index < len(habits):
            removed.append(habits.pop(index))
    removed.reverse()
    return removed


__all__ = [
    "is_completed_today",
    "new_habit",
    "remove_at",
    "reset_for_new_day",
    "reset_habits_for_new_day",
    "toggle_completion",
]

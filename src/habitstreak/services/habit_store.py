"""In-memory habit collection with write-through persistence.

The store owns the habit list for the running process. Every mutating call
saves the full collection under one preference key and then notifies
subscribers; persistence faults are logged and never raised to callers.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Iterable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..clock import Clock, local_now
from ..config import BaseConfig
from ..domain.repositories import PreferenceRepository
from ..logging_config import get_logger
from ..models.habit import Habit, Priority
from . import habits as habit_rules
from .habit_codec import HabitDecodeError, decode_habits, encode_habits

logger = get_logger(__name__)

Listener = Callable[[tuple[Habit, ...]], None]

_PERSISTENCE_ERRORS = (SQLAlchemyError, HabitDecodeError, ValueError, TypeError, OSError)


class HabitStore:
    """Authoritative list of habits backed by a key-value preference store."""

    def __init__(
        self,
        preferences: PreferenceRepository,
        *,
        key: str = BaseConfig.HABITS_KEY,
        clock: Clock = local_now,
    ):
        self.preferences = preferences
        self.key = key
        self.clock = clock
        self._habits: list[Habit] = []
        self._listeners: list[Listener] = []
        # Set when the last load fell back to an empty list; the stored blob
        # is then left as-is until the user changes something.
        self.load_failed = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def habits(self) -> tuple[Habit, ...]:
        return tuple(self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    def __iter__(self) -> Iterator[Habit]:
        return iter(tuple(self._habits))

    def get(self, habit_id: uuid.UUID | str) -> Optional[Habit]:
        """Return the habit with ``habit_id`` or None."""

        wanted = _as_uuid(habit_id)
        if wanted is None:
            return None
        return next((habit for habit in self._habits if habit.id == wanted), None)

    def is_completed_today(self, habit: Habit) -> bool:
        return habit_rules.is_completed_today(habit, self.clock())

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_habits(self) -> list[Habit]:
        """Replace the in-memory list with the stored collection.

        A missing key or an unreadable blob yields an empty list.
        """

        try:
            blob = self.preferences.get_value(self.key)
            loaded = decode_habits(blob) if blob is not None else []
        except _PERSISTENCE_ERRORS as exc:
            logger.warning(
                "Stored habits could not be loaded; starting empty",
                extra={"event": "habits_load_failed", "key": self.key, "error": str(exc)},
            )
            loaded = []
            self.load_failed = True
        else:
            self.load_failed = False
        self._habits = loaded
        logger.info("Loaded habits", extra={"event": "habits_loaded", "count": len(loaded)})
        return list(loaded)

    def save_habits(self, habits: Optional[Iterable[Habit]] = None) -> None:
        """Overwrite the stored collection with ``habits`` (default: in-memory list)."""

        to_save = list(self._habits if habits is None else habits)
        try:
            self.preferences.set(self.key, encode_habits(to_save))
        except _PERSISTENCE_ERRORS as exc:
            logger.warning(
                "Saving habits failed",
                extra={"event": "habits_save_failed", "key": self.key, "error": str(exc)},
            )
            return
        logger.debug("Saved habits", extra={"event": "habits_saved", "count": len(to_save)})

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def reset_for_new_day(self) -> list[Habit]:
        """Clear stale completion flags across the collection.

        After a failed load the in-memory list is a stand-in, so the rollover
        is not written back over the stored blob.
        """

        habit_rules.reset_habits_for_new_day(self._habits, self.clock())
        self._commit("reset", persist=not self.load_failed)
        return list(self._habits)

    def load_and_reset(self) -> list[Habit]:
        """Foreground hook: load the stored collection, then roll it over to today."""

        self.load_habits()
        return self.reset_for_new_day()

    def add_habit(
        self,
        name: str,
        priority: Priority | str = Priority.MEDIUM,
        *,
        is_recurring: bool = True,
        due_date: Optional[datetime] = None,
    ) -> Habit:
        habit = habit_rules.new_habit(
            name, Priority(priority), is_recurring=is_recurring, due_date=due_date
        )
        self._habits.append(habit)
        logger.info("Habit added", extra={"event": "habit_added", "habit_id": str(habit.id)})
        self._commit("add")
        return habit

    def toggle(self, habit_id: uuid.UUID | str) -> Optional[Habit]:
        """Toggle today's completion of one habit; unknown ids return None."""

        habit = self.get(habit_id)
        if habit is None:
            logger.warning(
                "Toggle requested for unknown habit",
                extra={"event": "habit_missing", "habit_id": str(habit_id)},
            )
            return None
        habit_rules.toggle_completion(habit, self.clock())
        logger.info(
            "Habit toggled",
            extra={
                "event": "habit_toggled",
                "habit_id": str(habit.id),
                "completed": habit.is_completed,
                "streak": habit.streak,
            },
        )
        self._commit("toggle")
        return habit

    def delete_habit(self, habit_id: uuid.UUID | str) -> bool:
        """Remove one habit; returns False when it was not present."""

        habit = self.get(habit_id)
        if habit is None:
            return False
        self._habits.remove(habit)
        logger.info("Habit deleted", extra={"event": "habit_deleted", "habit_id": str(habit.id)})
        self._commit("delete")
        return True

    def delete_at(self, offsets: Iterable[int]) -> list[Habit]:
        """Remove habits by list position (swipe-to-delete)."""

        removed = habit_rules.remove_at(self._habits, offsets)
        if removed:
            self._commit("delete")
        return removed

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every committed change; returns an unsubscribe."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, reason: str, *, persist: bool = True) -> None:
        if persist:
            self.save_habits()
            # The stored blob now reflects the in-memory list.
            self.load_failed = False
        snapshot = self.habits
        for listener in list(self._listeners):
            listener(snapshot)
        logger.debug("Store committed", extra={"event": "store_commit", "reason": reason})


def _as_uuid(value: uuid.UUID | str) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


__all__ = ["HabitStore"]

"""JSON layout of the persisted habit collection.

The blob is a JSON array; each element carries the keys below. Dates are
ISO-8601 strings or null.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..models.habit import Habit

# attribute name -> persisted key
FIELD_KEYS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "priority": "priority",
    "due_date": "dueDate",
    "is_completed": "isCompleted",
    "is_recurring": "isRecurring",
    "streak": "streak",
    "last_completed_date": "lastCompletedDate",
}
_ATTRIBUTES = {key: attr for attr, key in FIELD_KEYS.items()}


class HabitDecodeError(ValueError):
    """Raised when a stored blob cannot be turned back into habits."""


def habit_to_record(habit: Habit) -> dict[str, Any]:
    """Return the JSON-ready mapping for one habit."""

    data = habit.model_dump(mode="json")
    return {key: data[attr] for attr, key in FIELD_KEYS.items()}


def habit_from_record(record: Any) -> Habit:
    """Build a habit from one persisted mapping.

    Only types are checked; values such as a negative streak are accepted as
    stored.
    """

    if not isinstance(record, dict):
        raise HabitDecodeError(f"Expected an object, got {type(record).__name__}")
    missing = [key for key in ("id", "name", "priority") if key not in record]
    if missing:
        raise HabitDecodeError(f"Habit record missing keys: {', '.join(missing)}")
    data = {_ATTRIBUTES[key]: value for key, value in record.items() if key in _ATTRIBUTES}
    try:
        return Habit.model_validate(data)
    except ValueError as exc:
        raise HabitDecodeError(str(exc)) from exc


def encode_habits(habits: Iterable[Habit]) -> str:
    """Serialize the whole collection to one JSON string."""

    return json.dumps([habit_to_record(habit) for habit in habits])


def decode_habits(blob: str | bytes) -> list[Habit]:
    """Parse a blob produced by :func:`encode_habits`."""

    try:
        records = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as exc:
        raise HabitDecodeError(f"Stored habits are not valid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise HabitDecodeError("Stored habits must be a JSON array")
    return [habit_from_record(record) for record in records]


__all__ = [
    "FIELD_KEYS",
    "HabitDecodeError",
    "decode_habits",
    "encode_habits",
    "habit_from_record",
    "habit_to_record",
]

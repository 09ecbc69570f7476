"""Calendar-day helpers shared by the habit model and services.

Every "is this today?" decision in the app goes through :func:`is_same_day`
so that day boundaries are always computed in one timezone, after converting
both moments into it.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current moment as an aware datetime in the local zone."""

    return datetime.now().astimezone()


def to_local(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert ``moment`` into ``tz`` (the local zone when omitted).

    Naive datetimes are interpreted as local wall-clock time.
    """

    if tz is None:
        return moment.astimezone()
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(tz)


def is_same_day(a: datetime, b: datetime, tz: tzinfo | None = None) -> bool:
    """Return True when both moments fall on the same calendar day in ``tz``."""

    return to_local(a, tz).date() == to_local(b, tz).date()

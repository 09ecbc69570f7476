"""Presentation lookups kept out of the habit model."""

from __future__ import annotations

from typing import NamedTuple

import flet as ft

from ..models.habit import Priority


class PriorityStyle(NamedTuple):
    label: str
    icon: str
    color: str


# Every Priority member must have an entry here.
PRIORITY_STYLES: dict[Priority, PriorityStyle] = {
    Priority.HIGH: PriorityStyle("High", ft.Icons.LOCAL_FIRE_DEPARTMENT, ft.Colors.RED),
    Priority.MEDIUM: PriorityStyle("Medium", ft.Icons.ERROR, ft.Colors.ORANGE),
    Priority.LOW: PriorityStyle("Low", ft.Icons.REMOVE_CIRCLE, ft.Colors.GREY),
}

PRIORITY_OPTIONS: list[tuple[str, str]] = [
    (priority.value, PRIORITY_STYLES[priority].label) for priority in Priority
]

THEME_PREFERENCE_KEY = "ThemeMode"


def priority_style(priority: Priority | str) -> PriorityStyle:
    """Return the label/icon/colour triple for ``priority``."""

    return PRIORITY_STYLES[Priority(priority)]

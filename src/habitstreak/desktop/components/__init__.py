"""Reusable UI components for the desktop app."""

from .feedback import close_dialog, open_dialog, show_snack
from .widgets import empty_state, priority_badge

__all__ = [
    "close_dialog",
    "empty_state",
    "open_dialog",
    "priority_badge",
    "show_snack",
]

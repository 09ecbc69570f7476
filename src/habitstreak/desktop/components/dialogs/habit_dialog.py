"""New-habit dialog.

Collects a name (required), a priority and whether the habit is daily. The
Add button stays disabled until the name has non-blank text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ....logging_config import get_logger
from ....models.habit import Priority
from ...constants import PRIORITY_OPTIONS
from ..feedback import close_dialog, open_dialog, show_snack

if TYPE_CHECKING:
    from ...context import AppContext

logger = get_logger(__name__)


def show_add_habit_dialog(
    ctx: AppContext,
    page: ft.Page,
) -> ft.AlertDialog:
    """Open the add-habit dialog and return it.

    Args:
        ctx: Application context
        page: Flet page
    """

    name_field = ft.TextField(
        label="Habit Name",
        hint_text="e.g., Drink water, Read, Stretch",
        autofocus=True,
        max_length=100,
    )

    priority_field = ft.Dropdown(
        label="Priority",
        options=[ft.dropdown.Option(value, label) for value, label in PRIORITY_OPTIONS],
        value=Priority.MEDIUM.value,
    )

    recurring_switch = ft.Switch(label="Daily Habit", value=True)

    def _on_name_change(_):
        add_button.disabled = not (name_field.value or "").strip()
        page.update()

    def _add(_):
        name = (name_field.value or "").strip()
        if not name:
            name_field.error_text = "Name is required"
            page.update()
            return

        try:
            habit = ctx.habit_store.add_habit(
                name,
                Priority(priority_field.value or Priority.MEDIUM.value),
                is_recurring=bool(recurring_switch.value),
            )
        except Exception as exc:
            logger.error(f"Failed to add habit: {exc}", exc_info=True)
            show_snack(page, f"Failed to add habit: {exc}", error=True)
            return

        close_dialog(page, dialog)
        show_snack(page, f"Habit '{habit.name}' added")

    def _cancel(_):
        close_dialog(page, dialog)

    name_field.on_change = _on_name_change
    name_field.on_submit = _add

    add_button = ft.FilledButton("Add", on_click=_add, disabled=True)

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("New Habit"),
        content=ft.Column(
            controls=[name_field, priority_field, recurring_switch],
            tight=True,
            spacing=12,
            width=400,
        ),
        actions=[
            ft.TextButton("Cancel", on_click=_cancel),
            add_button,
        ],
    )

    open_dialog(page, dialog)
    return dialog

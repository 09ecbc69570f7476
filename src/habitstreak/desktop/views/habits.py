"""Habits view: the app's single screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...logging_config import get_logger
from ...models.habit import Habit
from ..components import empty_state, priority_badge, show_snack
from ..components.dialogs import show_add_habit_dialog

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def build_habit_tile(ctx: AppContext, habit: Habit, page: ft.Page) -> ft.ListTile:
    """Render one habit row with its completion toggle and delete action."""

    store = ctx.habit_store
    done = store.is_completed_today(habit)

    def _toggle(_e, habit_id=habit.id):
        store.toggle(habit_id)

    def _delete(_e, habit_id=habit.id):
        store.delete_habit(habit_id)

    details: list[ft.Control] = [priority_badge(habit.priority)]
    if habit.is_recurring:
        details.append(ft.Icon(ft.Icons.REPEAT, color=ft.Colors.BLUE, size=14, tooltip="Daily"))

    return ft.ListTile(
        data=str(habit.id),
        leading=ft.IconButton(
            icon=ft.Icons.CHECK_CIRCLE if done else ft.Icons.RADIO_BUTTON_UNCHECKED,
            icon_color=ft.Colors.GREEN if done else ft.Colors.GREY,
            tooltip="Mark not done" if done else "Mark done",
            on_click=_toggle,
        ),
        title=ft.Row(
            controls=[
                ft.Text(
                    habit.name,
                    weight=ft.FontWeight.BOLD,
                    color=ft.Colors.GREY if done else None,
                    style=ft.TextStyle(decoration=ft.TextDecoration.LINE_THROUGH) if done else None,
                    expand=True,
                ),
                ft.Text(f"🔥 {habit.streak}", color=ft.Colors.ORANGE),
            ],
        ),
        subtitle=ft.Row(controls=details, spacing=8),
        trailing=ft.IconButton(
            icon=ft.Icons.DELETE_OUTLINE,
            tooltip="Delete habit",
            on_click=_delete,
        ),
    )


def build_habits_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the habits view and keep it in sync with the store."""

    store = ctx.habit_store
    habit_list = ft.Column(spacing=4, scroll=ft.ScrollMode.AUTO, expand=True)

    def refresh(_snapshot=None) -> None:
        if len(store):
            habit_list.controls = [build_habit_tile(ctx, habit, page) for habit in store]
        else:
            habit_list.controls = [
                empty_state("No habits yet", "Tap + to add your first habit"),
            ]
        page.update()

    def _open_add(_e):
        show_add_habit_dialog(ctx, page)

    def _toggle_theme(_e):
        mode = ft.ThemeMode.LIGHT if page.theme_mode == ft.ThemeMode.DARK else ft.ThemeMode.DARK
        page.theme_mode = mode
        try:
            ctx.save_theme_mode(mode)
        except Exception as exc:
            logger.error(f"Failed to save theme: {exc}", exc_info=True)
            show_snack(page, "Theme changed but could not be saved", error=True)
        page.update()

    store.subscribe(refresh)
    refresh()
    logger.debug("Habits view built", extra={"event": "view_built", "count": len(store)})

    return ft.View(
        route="/",
        appbar=ft.AppBar(
            title=ft.Text("Habits"),
            actions=[
                ft.IconButton(icon=ft.Icons.ADD, tooltip="New habit", on_click=_open_add),
                ft.IconButton(
                    icon=ft.Icons.BRIGHTNESS_6, tooltip="Toggle theme", on_click=_toggle_theme
                ),
            ],
        ),
        controls=[habit_list],
        padding=12,
    )

"""Main Flet application entry point."""

from __future__ import annotations

import flet as ft

from ..logging_config import session_log_path, setup_logging
from .context import AppContext, create_app_context
from .views.habits import build_habits_view


def attach_lifecycle(ctx: AppContext, page: ft.Page) -> None:
    """Roll habits over to the current day whenever the app returns to the foreground."""

    def _on_lifecycle(e) -> None:
        if getattr(e, "state", None) == ft.AppLifecycleState.RESUME:
            ctx.habit_store.load_and_reset()

    page.on_app_lifecycle_state_change = _on_lifecycle


def main(page: ft.Page) -> None:
    """Build the single habits screen on ``page``."""

    ctx = create_app_context()
    logger = setup_logging(ctx.config)
    logger.info("HabitStreak starting")

    ctx.page = page
    page.title = "Habits (DEV)" if ctx.dev_mode else "Habits"
    page.theme_mode = ctx.theme_mode

    def on_page_close(_):
        logger.info("Application closing")
        slp = session_log_path()
        if slp:
            logger.info(f"Debug session log saved to: {slp}")

    page.on_close = on_page_close

    ctx.habit_store.load_and_reset()
    attach_lifecycle(ctx, page)

    page.views.clear()
    page.views.append(build_habits_view(ctx, page))
    page.update()


def run() -> None:
    """Console-script entry point."""
    ft.app(target=main)

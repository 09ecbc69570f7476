"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft

from ..clock import Clock, local_now
from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..infra.repositories import SQLModelPreferenceRepository
from ..services.habit_store import HabitStore
from .constants import THEME_PREFERENCE_KEY


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: SessionFactory
    preference_repo: SQLModelPreferenceRepository
    habit_store: HabitStore

    theme_mode: ft.ThemeMode = ft.ThemeMode.SYSTEM

    # Set once the page exists
    page: Optional[ft.Page] = None
    dev_mode: bool = False

    def save_theme_mode(self, mode: ft.ThemeMode) -> None:
        self.theme_mode = mode
        self.preference_repo.set(THEME_PREFERENCE_KEY, mode.value)


def _stored_theme_mode(repo: SQLModelPreferenceRepository) -> ft.ThemeMode:
    raw = (repo.get_value(THEME_PREFERENCE_KEY) or "").strip().lower()
    try:
        return ft.ThemeMode(raw)
    except ValueError:
        return ft.ThemeMode.SYSTEM


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Clock = local_now,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    preference_repo = SQLModelPreferenceRepository(session_factory)
    habit_store = HabitStore(preference_repo, key=config.HABITS_KEY, clock=clock)

    return AppContext(
        config=config,
        session_factory=session_factory,
        preference_repo=preference_repo,
        habit_store=habit_store,
        theme_mode=_stored_theme_mode(preference_repo),
        dev_mode=config.DEV_MODE,
    )

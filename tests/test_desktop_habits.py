"""Headless tests for the habits screen, add dialog and app startup."""

from __future__ import annotations

from types import SimpleNamespace

import flet as ft
import pytest
from sqlalchemy.exc import OperationalError

from habitstreak.config import TestConfig
from habitstreak.desktop import app as desktop_app
from habitstreak.desktop.constants import PRIORITY_STYLES, priority_style
from habitstreak.desktop.context import create_app_context
from habitstreak.desktop.views.habits import build_habits_view
from habitstreak.models.habit import Priority


class DummyPage:
    """Minimal stand-in for flet.Page used by view builders."""

    def __init__(self):
        self.views: list[ft.View] = []
        self.opened: list[ft.Control] = []
        self.closed: list[ft.Control] = []
        self.updates = 0
        self.title = ""
        self.theme_mode = ft.ThemeMode.DARK

    def open(self, control: ft.Control) -> None:
        self.opened.append(control)

    def close(self, control: ft.Control) -> None:
        self.closed.append(control)

    def update(self) -> None:
        self.updates += 1

    @property
    def dialogs(self) -> list[ft.AlertDialog]:
        return [c for c in self.opened if isinstance(c, ft.AlertDialog)]

    @property
    def snacks(self) -> list[str]:
        return [c.content.value for c in self.opened if isinstance(c, ft.SnackBar)]


@pytest.fixture
def ctx(tmp_path, clock):
    return create_app_context(TestConfig(tmp_path), clock=clock)


@pytest.fixture
def page():
    return DummyPage()


def _habit_list(view: ft.View) -> ft.Column:
    return view.controls[0]


def _tiles(view: ft.View) -> list[ft.ListTile]:
    return [c for c in _habit_list(view).controls if isinstance(c, ft.ListTile)]


def _add_via_dialog(view, page, name, priority="medium", recurring=True):
    view.appbar.actions[0].on_click(None)
    dialog = page.dialogs[-1]
    name_field, priority_field, recurring_switch = dialog.content.controls
    name_field.value = name
    name_field.on_change(None)
    priority_field.value = priority
    recurring_switch.value = recurring
    dialog.actions[1].on_click(None)
    return dialog


class TestPriorityTable:
    def test_every_priority_has_a_style(self):
        """Every priority value has a display style."""
        assert set(PRIORITY_STYLES) == set(Priority)

    def test_styles(self):
        """Priorities map to the expected label, icon and colour."""
        assert priority_style("high").color == ft.Colors.RED
        assert priority_style(Priority.MEDIUM).color == ft.Colors.ORANGE
        assert priority_style(Priority.LOW).color == ft.Colors.GREY
        assert priority_style(Priority.HIGH).icon == ft.Icons.LOCAL_FIRE_DEPARTMENT
        assert priority_style(Priority.LOW).label == "Low"


class TestHabitsView:
    def test_empty_state(self, ctx, page):
        """With no habits the list shows only the empty-state placeholder."""
        view = build_habits_view(ctx, page)

        assert _tiles(view) == []
        assert len(_habit_list(view).controls) == 1

    def test_add_dialog_requires_name(self, ctx, page):
        """Add stays disabled and refuses to save without a name."""
        view = build_habits_view(ctx, page)
        view.appbar.actions[0].on_click(None)
        dialog = page.dialogs[-1]
        name_field = dialog.content.controls[0]
        add_button = dialog.actions[1]

        assert add_button.disabled is True
        name_field.value = "   "
        name_field.on_change(None)
        assert add_button.disabled is True

        add_button.on_click(None)
        assert len(ctx.habit_store) == 0
        assert name_field.error_text

    def test_add_dialog_defaults(self, ctx, page):
        """The dialog starts at medium priority with Daily Habit on."""
        view = build_habits_view(ctx, page)
        view.appbar.actions[0].on_click(None)
        _name, priority_field, recurring_switch = page.dialogs[-1].content.controls

        assert priority_field.value == "medium"
        assert recurring_switch.value is True

    def test_add_habit_through_dialog(self, ctx, page):
        """Submitting the dialog stores the habit and renders its row."""
        view = build_habits_view(ctx, page)

        dialog = _add_via_dialog(view, page, "Drink water", "high", recurring=False)

        (habit,) = ctx.habit_store.habits
        assert habit.name == "Drink water"
        assert habit.priority is Priority.HIGH
        assert habit.is_recurring is False
        assert dialog in page.closed
        assert "Habit 'Drink water' added" in page.snacks
        (tile,) = _tiles(view)
        assert tile.data == str(habit.id)

    def test_cancel_closes_without_adding(self, ctx, page):
        """Cancel closes the dialog and adds nothing."""
        view = build_habits_view(ctx, page)
        view.appbar.actions[0].on_click(None)
        dialog = page.dialogs[-1]

        dialog.actions[0].on_click(None)

        assert dialog in page.closed
        assert len(ctx.habit_store) == 0

    def test_toggle_and_untoggle_from_row(self, ctx, page):
        """The row toggle completes and un-completes the habit."""
        view = build_habits_view(ctx, page)
        _add_via_dialog(view, page, "Drink water")

        (tile,) = _tiles(view)
        assert tile.leading.icon == ft.Icons.RADIO_BUTTON_UNCHECKED
        tile.leading.on_click(None)

        (habit,) = ctx.habit_store.habits
        assert habit.streak == 1
        (tile,) = _tiles(view)
        assert tile.leading.icon == ft.Icons.CHECK_CIRCLE

        tile.leading.on_click(None)
        assert habit.streak == 0
        (tile,) = _tiles(view)
        assert tile.leading.icon == ft.Icons.RADIO_BUTTON_UNCHECKED

    def test_delete_from_row(self, ctx, page):
        """The row delete button removes the habit."""
        view = build_habits_view(ctx, page)
        _add_via_dialog(view, page, "Drink water")

        _tiles(view)[0].trailing.on_click(None)

        assert len(ctx.habit_store) == 0
        assert _tiles(view) == []

    def test_theme_toggle_is_persisted(self, ctx, page, tmp_path, clock):
        """The chosen theme survives a new app context."""
        view = build_habits_view(ctx, page)

        view.appbar.actions[1].on_click(None)

        assert page.theme_mode == ft.ThemeMode.LIGHT
        assert ctx.preference_repo.get_value("ThemeMode") == "light"
        assert create_app_context(TestConfig(tmp_path), clock=clock).theme_mode == ft.ThemeMode.LIGHT

    def test_theme_save_failure_shows_snack(self, ctx, page, monkeypatch, caplog):
        """A database error while saving the theme is logged and reported, not raised."""

        def _locked(key, value):
            raise OperationalError("UPDATE", {}, Exception("database is locked"))

        monkeypatch.setattr(ctx.preference_repo, "set", _locked)
        view = build_habits_view(ctx, page)

        with caplog.at_level("ERROR", logger="habitstreak"):
            view.appbar.actions[1].on_click(None)

        assert page.theme_mode == ft.ThemeMode.LIGHT
        assert "Theme changed but could not be saved" in page.snacks
        (record,) = [r for r in caplog.records if r.levelname == "ERROR"]
        assert record.exc_info is not None


class TestAppStartup:
    def test_main_rolls_over_and_resumes(self, tmp_path, monkeypatch, clock):
        """Startup rolls habits over and a resume event reloads them."""
        monkeypatch.setenv("HABITSTREAK_DATA_DIR", str(tmp_path))
        monkeypatch.delenv("HABITSTREAK_DATABASE_URL", raising=False)

        seed = create_app_context(TestConfig(tmp_path), clock=clock)
        habit = seed.habit_store.add_habit("Drink water")
        seed.habit_store.toggle(habit.id)

        page = DummyPage()
        desktop_app.main(page)

        assert len(page.views) == 1
        assert page.title.startswith("Habits")
        assert callable(page.on_app_lifecycle_state_change)
        (tile,) = _tiles(page.views[0])
        assert tile.data == str(habit.id)

        # Completed on the fake clock's day; the app runs on the real clock,
        # which is later, so startup rolled the flag over and kept the streak.
        (stored,) = seed.habit_store.load_habits()
        assert stored.is_completed is False
        assert stored.streak == 1

        updates_before = page.updates
        page.on_app_lifecycle_state_change(SimpleNamespace(state=ft.AppLifecycleState.INACTIVE))
        assert page.updates == updates_before
        page.on_app_lifecycle_state_change(SimpleNamespace(state=ft.AppLifecycleState.RESUME))
        assert page.updates > updates_before

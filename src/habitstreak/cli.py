"""Command-line access to the habit store."""

from __future__ import annotations

import logging

import click

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelPreferenceRepository
from .logging_config import setup_logging
from .models.habit import Habit, Priority
from .services.habit_store import HabitStore


def _open_store(config: BaseConfig) -> HabitStore:
    _engine, session_factory = bootstrap_database(config)
    store = HabitStore(SQLModelPreferenceRepository(session_factory), key=config.HABITS_KEY)
    store.load_and_reset()
    return store


def _format_habit(habit: Habit, done: bool) -> str:
    mark = "x" if done else " "
    repeat = " (daily)" if habit.is_recurring else ""
    return f"[{mark}] {habit.id}  {habit.name}  streak={habit.streak}  {habit.priority.value}{repeat}"


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the habit database (overrides HABITSTREAK_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None) -> None:
    """Track daily habits and streaks."""

    config = BaseConfig(data_dir)
    # Command output owns stdout; only problems reach the console.
    setup_logging(config, console_level=logging.WARNING)
    ctx.obj = _open_store(config)


@cli.command("list")
@click.pass_obj
def list_habits(store: HabitStore) -> None:
    """Show all habits with today's status."""

    if not len(store):
        click.echo("No habits yet.")
        return
    for habit in store:
        click.echo(_format_habit(habit, store.is_completed_today(habit)))


@cli.command("add")
@click.argument("name")
@click.option(
    "--priority",
    type=click.Choice([p.value for p in Priority]),
    default=Priority.MEDIUM.value,
    show_default=True,
)
@click.option("--once", is_flag=True, default=False, help="Mark the habit as not recurring.")
@click.pass_obj
def add_habit(store: HabitStore, name: str, priority: str, once: bool) -> None:
    """Add a habit called NAME."""

    name = name.strip()
    if not name:
        raise click.BadParameter("Name must not be empty", param_hint="NAME")
    habit = store.add_habit(name, Priority(priority), is_recurring=not once)
    click.echo(f"Added {habit.id}  {habit.name}")


@cli.command("toggle")
@click.argument("habit_id")
@click.pass_obj
def toggle_habit(store: HabitStore, habit_id: str) -> None:
    """Mark HABIT_ID done for today, or undo today's completion."""

    habit = store.toggle(habit_id)
    if habit is None:
        raise click.ClickException(f"No habit with id {habit_id}")
    click.echo(_format_habit(habit, store.is_completed_today(habit)))


@cli.command("delete")
@click.argument("habit_id")
@click.pass_obj
def delete_habit(store: HabitStore, habit_id: str) -> None:
    """Delete HABIT_ID."""

    if not store.delete_habit(habit_id):
        raise click.ClickException(f"No habit with id {habit_id}")
    click.echo(f"Deleted {habit_id}")


@cli.command("reset")
@click.pass_obj
def reset_day(store: HabitStore) -> None:
    """Re-run the day rollover (also done on every start)."""

    store.reset_for_new_day()
    pending = sum(1 for habit in store if not store.is_completed_today(habit))
    click.echo(f"Rolled over to {store.clock().date().isoformat()}: {pending} habit(s) pending today.")


if __name__ == "__main__":  # pragma: no cover
    cli()

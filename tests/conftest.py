"""Pytest configuration and shared fixtures for HabitStreak tests.

Provides temporary SQLite databases, a preference repository, a controllable
clock and a habit store wired to both, so store behaviour can be tested
across day boundaries without touching the real app database.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Registers table models with SQLModel metadata
from habitstreak import models  # noqa: F401
from habitstreak.infra.database import create_session_factory
from habitstreak.infra.repositories import SQLModelPreferenceRepository
from habitstreak.services.habit_store import HabitStore


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def local_dt(*args) -> datetime:
    """Aware datetime for a local wall-clock time."""

    return datetime(*args).astimezone()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def preference_repo(session_factory) -> SQLModelPreferenceRepository:
    return SQLModelPreferenceRepository(session_factory)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at 09:00 local time on 2025-03-10."""

    return FakeClock(local_dt(2025, 3, 10, 9, 0))


@pytest.fixture
def store(preference_repo, clock) -> HabitStore:
    return HabitStore(preference_repo, clock=clock)


@pytest.fixture
def store_factory(preference_repo, clock):
    """Build additional stores sharing the same preference database."""

    def _create(**kwargs) -> HabitStore:
        kwargs.setdefault("clock", clock)
        return HabitStore(preference_repo, **kwargs)

    return _create


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """Detach handlers added by setup_logging so later tests never write to closed streams."""
    yield
    logger = logging.getLogger("habitstreak")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)

"""Pytest configuration and shared fixtures for habitlog tests.

Provides a fixed reference day, a throwaway SQLite database, and factories for
habits and completion indexes so service tests never depend on the real clock.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitlog.dates import ALL_DAYS
from habitlog.domain.habit import CompletionEvent, Habit, Recurrence
from habitlog.infra.repositories import SQLModelHabitStore
from habitlog import models  # noqa: F401  (register tables)
from habitlog.services.completion_index import CompletionIndex

# Wednesday; Sunday=0 convention gives index 3.
REFERENCE_DAY = date(2024, 6, 12)


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    """Keep config-driven directories out of the working tree."""
    monkeypatch.setenv("HABITLOG_DATA_DIR", str(tmp_path / "instance"))


@pytest.fixture
def today() -> date:
    return REFERENCE_DAY


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
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
    """Session factory matching what the store expects: Callable[[], Session]."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def store(session_factory) -> SQLModelHabitStore:
    return SQLModelHabitStore(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(today):
    """Factory for building habits with sensible defaults.

    Returns:
        Callable: Function that creates Habit instances (not persisted)
    """

    def _create_habit(
        name: str = "Test Habit",
        target_days: Iterable[int] = ALL_DAYS,
        recurrence: Recurrence = Recurrence.CUSTOM,
        created_at: date | None = None,
        **extra,
    ) -> Habit:
        return Habit(
            name=name,
            recurrence=recurrence,
            target_days=frozenset(target_days),
            created_at=created_at or today - timedelta(days=30),
            **extra,
        )

    return _create_habit


@pytest.fixture
def index_for():
    """Build a CompletionIndex from ``{habit: [days...]}``."""

    def _build(completions: dict[Habit, Iterable[date]]) -> CompletionIndex:
        events = [
            CompletionEvent(habit_id=habit.id, date=day)
            for habit, days in completions.items()
            for day in days
        ]
        return CompletionIndex(events)

    return _build

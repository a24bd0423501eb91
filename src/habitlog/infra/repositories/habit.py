"""SQLModel implementation of the habit store."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...dates import start_of_day
from ...domain.habit import CompletionEvent, Habit
from ...models.habit import CompletionRecord, HabitRecord

logger = logging.getLogger(__name__)


class SQLModelHabitStore:
    """SQLModel-based habit store implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def fetch_habits(self) -> list[Habit]:
        with self.session_factory() as session:
            statement = select(HabitRecord).order_by(HabitRecord.created_at, HabitRecord.id)  # type: ignore
            return [row.to_domain() for row in session.exec(statement).all()]

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        with self.session_factory() as session:
            row = session.get(HabitRecord, habit_id)
            return row.to_domain() if row else None

    def fetch_logs(self, habit_id: Optional[str] = None) -> list[CompletionEvent]:
        with self.session_factory() as session:
            statement = select(CompletionRecord)
            if habit_id is not None:
                statement = statement.where(CompletionRecord.habit_id == habit_id)
            statement = statement.order_by(CompletionRecord.occurred_on.desc())  # type: ignore
            return [row.to_domain() for row in session.exec(statement).all()]

    def create_habit(self, habit: Habit) -> Habit:
        with self.session_factory() as session:
            record = HabitRecord.from_domain(habit)
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info("Created habit %s (%s)", record.id, record.name)
            return record.to_domain()

    def update_habit(self, habit: Habit) -> Habit:
        """Update an existing habit, inserting it when the id is unknown."""
        with self.session_factory() as session:
            record = session.get(HabitRecord, habit.id)
            if record is None:
                record = HabitRecord.from_domain(habit)
            else:
                record.apply(habit)
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info("Updated habit %s", record.id)
            return record.to_domain()

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit; its completions go with it."""
        with self.session_factory() as session:
            completions = session.exec(
                select(CompletionRecord).where(CompletionRecord.habit_id == habit_id)
            ).all()
            for completion in completions:
                session.delete(completion)
            session.flush()
            record = session.get(HabitRecord, habit_id)
            if record:
                session.delete(record)
            session.commit()
            logger.info("Deleted habit %s", habit_id)

    def create_completion(
        self, habit_id: str, day: date, note: Optional[str] = None
    ) -> Optional[CompletionEvent]:
        occurred_on = start_of_day(day)
        with self.session_factory() as session:
            existing = session.get(CompletionRecord, (habit_id, occurred_on))
            if existing:
                logger.debug("Completion already recorded for %s on %s", habit_id, occurred_on)
                return existing.to_domain()

            if session.get(HabitRecord, habit_id) is None:
                logger.warning("Skipping completion for unknown habit %s", habit_id)
                return None

            record = CompletionRecord.from_domain(
                CompletionEvent(habit_id=habit_id, date=occurred_on, note=note)
            )
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info("Recorded completion for %s on %s", habit_id, occurred_on)
            return record.to_domain()

    def delete_completion(self, habit_id: str, day: date) -> bool:
        occurred_on = start_of_day(day)
        with self.session_factory() as session:
            record = session.get(CompletionRecord, (habit_id, occurred_on))
            if record is None:
                return False
            session.delete(record)
            session.commit()
            logger.info("Removed completion for %s on %s", habit_id, occurred_on)
            return True

    def clear_all(self) -> None:
        with self.session_factory() as session:
            # Completions first to satisfy the foreign key.
            for completion in session.exec(select(CompletionRecord)).all():
                session.delete(completion)
            session.flush()
            for record in session.exec(select(HabitRecord)).all():
                session.delete(record)
            session.commit()
            logger.info("Cleared all habits and completions")

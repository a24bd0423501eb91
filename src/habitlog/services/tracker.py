"""Stateful shell around the analytics services.

``HabitTracker`` owns a snapshot of the store, turns toggles into store
mutations and refreshes the snapshot afterwards. All analytics are delegated
to the pure service functions.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Callable, Optional

from ..dates import DateLike, start_of_day
from ..domain.habit import CompletionEvent, Habit
from ..domain.repositories.habit import HabitStore
from . import analytics
from .completion_index import CompletionIndex, ToggleAction
from .schedule import habits_scheduled_on

logger = logging.getLogger(__name__)


class HabitTracker:
    """Single-writer facade over a :class:`HabitStore`."""

    def __init__(self, store: HabitStore, *, clock: Callable[[], date] = date.today) -> None:
        self.store = store
        self.clock = clock
        self._lock = threading.Lock()
        self.habits: list[Habit] = []
        self.logs: list[CompletionEvent] = []
        self.index = CompletionIndex()
        self.refresh()

    @property
    def today(self) -> date:
        return start_of_day(self.clock())

    def refresh(self) -> None:
        """Reload habits and logs from the store and rebuild the index."""
        habits = self.store.fetch_habits()
        logs = self.store.fetch_logs()
        self.habits = habits
        self.logs = logs
        self.index = CompletionIndex(logs, habit_ids=[habit.id for habit in habits])
        logger.debug("Snapshot refreshed: %d habits, %d logs", len(habits), len(logs))

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return next((habit for habit in self.habits if habit.id == habit_id), None)

    # Mutations

    def _mutate(self, description: str, operation: Callable[[], object]) -> None:
        with self._lock:
            try:
                operation()
            except Exception:
                logger.error("Store mutation failed: %s", description, exc_info=True)
                raise
            self.refresh()

    def add_habit(self, habit: Habit) -> None:
        self._mutate(f"create habit {habit.id}", lambda: self.store.create_habit(habit))

    def update_habit(self, habit: Habit) -> None:
        self._mutate(f"update habit {habit.id}", lambda: self.store.update_habit(habit))

    def delete_habit(self, habit_id: str) -> None:
        self._mutate(f"delete habit {habit_id}", lambda: self.store.delete_habit(habit_id))

    def clear_all_data(self) -> None:
        self._mutate("clear all data", self.store.clear_all)

    def toggle(self, habit_id: str, day: Optional[DateLike] = None) -> Optional[ToggleAction]:
        """Flip the completion state of ``habit_id`` on ``day`` (default today).

        Returns ``None`` without touching the store when the habit is unknown.
        """
        target = start_of_day(day) if day is not None else self.today
        with self._lock:
            if self.get_habit(habit_id) is None:
                logger.warning("Ignored toggle for unknown habit %s on %s", habit_id, target)
                return None
            action = self.index.toggle(habit_id, target)
            try:
                if action is ToggleAction.CREATE:
                    self.store.create_completion(habit_id, target)
                else:
                    self.store.delete_completion(habit_id, target)
            except Exception:
                logger.error(
                    "Toggle failed for %s on %s", habit_id, target, exc_info=True
                )
                raise
            self.refresh()
        logger.info("Toggled %s on %s: %s", habit_id, target, action.value)
        return action

    # Queries

    def is_completed(self, habit_id: str, day: Optional[DateLike] = None) -> bool:
        return self.index.is_completed(habit_id, day if day is not None else self.today)

    def habits_on(self, day: DateLike) -> list[Habit]:
        return habits_scheduled_on(self.habits, day)

    def today_progress(self) -> analytics.DayProgress:
        return analytics.progress_for(self.today, self.habits, self.index)

    def today_view(self) -> list[Habit]:
        return analytics.sorted_today_view(self.habits, self.index, self.today)

    def stats_for(self, habit: Habit) -> analytics.HabitStats:
        return analytics.habit_stats(habit, self.index, self.today)

    def overall(self) -> analytics.OverallStats:
        return analytics.overall_stats(self.habits, self.index, self.today)


__all__ = ["HabitTracker"]

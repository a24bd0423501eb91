"""Which habits are due on a given day."""

from __future__ import annotations

from typing import Iterable

from ..dates import DateLike, day_of_week_index
from ..domain.habit import Habit


def is_scheduled(habit: Habit, day: DateLike) -> bool:
    return day_of_week_index(day) in habit.scheduled_days


def habits_scheduled_on(habits: Iterable[Habit], day: DateLike) -> list[Habit]:
    """Habits due on ``day`` in their original order."""

    weekday = day_of_week_index(day)
    return [habit for habit in habits if weekday in habit.scheduled_days]


__all__ = ["habits_scheduled_on", "is_scheduled"]

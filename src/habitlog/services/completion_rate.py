"""Completion-rate calculations."""

from __future__ import annotations

from datetime import date

from ..dates import DateLike, date_range, day_of_week_index, days_between, start_of_day
from ..domain.habit import Habit
from .completion_index import CompletionIndex


def elapsed_days(habit: Habit, today: DateLike) -> int:
    """Days from creation through ``today``, counting both ends."""

    return days_between(habit.created_at, today) + 1


def completion_rate(habit: Habit, index: CompletionIndex, today: DateLike) -> float:
    """Total completions divided by days elapsed since the habit was created.

    Not weighted by schedule. A habit created after ``today`` has a rate of 0,
    and the ratio is capped at 1.0 so stray completions dated outside the
    habit's lifetime cannot push it higher.
    """

    elapsed = elapsed_days(habit, today)
    if elapsed <= 0:
        return 0.0
    completed = index.count_for(habit.id)
    return min(1.0, completed / max(elapsed, 1))


def expected_occurrences(habit: Habit, start: DateLike, end: DateLike) -> int:
    """Scheduled days for ``habit`` between ``start`` and ``end`` inclusive.

    Days before the habit existed are never expected.
    """

    first = max(start_of_day(start), habit.created_at)
    scheduled = habit.scheduled_days
    return sum(1 for day in date_range(first, end) if day_of_week_index(day) in scheduled)


def scheduled_completion_rate(habit: Habit, index: CompletionIndex, today: DateLike) -> float:
    """Share of expected occurrences (created_at..today) that were completed."""

    end: date = start_of_day(today)
    expected = expected_occurrences(habit, habit.created_at, end)
    if expected == 0:
        return 0.0
    scheduled = habit.scheduled_days
    hits = sum(
        1
        for day in index.dates_for(habit.id)
        if habit.created_at <= day <= end and day_of_week_index(day) in scheduled
    )
    return hits / expected


__all__ = [
    "completion_rate",
    "elapsed_days",
    "expected_occurrences",
    "scheduled_completion_rate",
]

"""Habit streak helpers."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from ..dates import DateLike, days_between, start_of_day
from .completion_index import CompletionIndex


def compute_streaks(days: Iterable[DateLike], *, today: DateLike | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from a collection of completed days.

    The current streak counts consecutive completed days ending on ``today``;
    a missing ``today`` means 0 regardless of earlier runs. Scheduling is not
    consulted, so an unscheduled empty day still breaks a streak.
    """

    anchor = start_of_day(today) if today is not None else date.today()
    completed = {start_of_day(day) for day in days}

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = anchor
    while cursor in completed:
        current += 1
        cursor -= timedelta(days=1)

    return current, _longest_run(sorted(completed))


def _longest_run(ordered: list[date]) -> int:
    """Longest run of consecutive days in an ascending, de-duplicated list."""
    if not ordered:
        return 0

    longest = 1
    run = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if days_between(prev, curr) == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def current_streak(habit_id: str, index: CompletionIndex, today: DateLike) -> int:
    """Consecutive completed days ending today, for one habit."""

    count = 0
    cursor = start_of_day(today)
    while index.is_completed(habit_id, cursor):
        count += 1
        cursor -= timedelta(days=1)
    return count


def longest_streak(habit_id: str, index: CompletionIndex) -> int:
    return _longest_run(index.dates_for(habit_id))


__all__ = ["compute_streaks", "current_streak", "longest_streak"]

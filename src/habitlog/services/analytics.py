"""Per-day and per-habit analytics composed from the engine services.

Everything here is a pure function of the habits, the completion index and a
reference day; callers re-run it against a fresh snapshot after mutations.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Sequence

from ..dates import (
    DateLike,
    days_ago,
    month_grid,
    start_of_day,
    week_dates,
)
from ..domain.habit import Habit, HabitCategory, TimeOfDay
from .completion_index import CompletionIndex
from .completion_rate import completion_rate
from .habits import current_streak, longest_streak
from .schedule import habits_scheduled_on, is_scheduled


@dataclass(frozen=True, slots=True)
class DayProgress:
    """Completed vs scheduled habits for one day."""

    completed: int
    total: int

    @property
    def percentage(self) -> float:
        return self.completed / self.total if self.total else 0.0


class CompletionTier(str, Enum):
    """Bucket for a day's completion ratio, used for calendar indicators."""

    NONE = "none"
    PARTIAL = "partial"
    HIGH = "high"
    FULL = "full"


@dataclass(frozen=True, slots=True)
class HabitStats:
    current_streak: int
    longest_streak: int
    completion_rate: float
    total_completions: int


@dataclass(frozen=True, slots=True)
class OverallStats:
    total_habits: int
    total_completions: int
    today: DayProgress
    best_current_streak: int


@dataclass(frozen=True, slots=True)
class WeekDay:
    date: date
    scheduled: bool
    completed: bool


@dataclass(frozen=True, slots=True)
class GridCell:
    date: date
    completed: bool


@dataclass(frozen=True, slots=True)
class DayOverview:
    date: date
    progress: DayProgress
    tier: CompletionTier


def progress_for(day: DateLike, habits: Iterable[Habit], index: CompletionIndex) -> DayProgress:
    scheduled = habits_scheduled_on(habits, day)
    completed = sum(1 for habit in scheduled if index.is_completed(habit.id, day))
    return DayProgress(completed=completed, total=len(scheduled))


def day_completion_rate(day: DateLike, habits: Iterable[Habit], index: CompletionIndex) -> float:
    return progress_for(day, habits, index).percentage


def completion_tier(rate: float) -> CompletionTier:
    if rate >= 1.0:
        return CompletionTier.FULL
    if rate >= 0.5:
        return CompletionTier.HIGH
    if rate > 0:
        return CompletionTier.PARTIAL
    return CompletionTier.NONE


def _by_name(habits: Iterable[Habit]) -> list[Habit]:
    return sorted(habits, key=lambda habit: habit.name)


def split_today(
    habits: Iterable[Habit],
    index: CompletionIndex,
    today: DateLike,
    *,
    time_of_day: Optional[TimeOfDay] = None,
) -> tuple[list[Habit], list[Habit]]:
    """Habits due today as ``(active, completed)``, each sorted by name.

    ``time_of_day`` narrows both lists to habits tagged with that slot.
    """

    active: list[Habit] = []
    completed: list[Habit] = []
    for habit in habits_scheduled_on(habits, today):
        if time_of_day is not None and habit.time_of_day is not time_of_day:
            continue
        bucket = completed if index.is_completed(habit.id, today) else active
        bucket.append(habit)
    return _by_name(active), _by_name(completed)


def sorted_today_view(
    habits: Iterable[Habit], index: CompletionIndex, today: DateLike
) -> list[Habit]:
    """Habits due today: incomplete ones first, then completed, each by name."""

    active, completed = split_today(habits, index, today)
    return active + completed


def habits_by_category(habits: Iterable[Habit], category: HabitCategory) -> list[Habit]:
    return [habit for habit in habits if habit.category is category]


def habit_stats(habit: Habit, index: CompletionIndex, today: DateLike) -> HabitStats:
    return HabitStats(
        current_streak=current_streak(habit.id, index, today),
        longest_streak=longest_streak(habit.id, index),
        completion_rate=completion_rate(habit, index, today),
        total_completions=index.count_for(habit.id),
    )


def overall_stats(habits: Sequence[Habit], index: CompletionIndex, today: DateLike) -> OverallStats:
    best = max((current_streak(habit.id, index, today) for habit in habits), default=0)
    return OverallStats(
        total_habits=len(habits),
        total_completions=sum(index.count_for(habit.id) for habit in habits),
        today=progress_for(today, habits, index),
        best_current_streak=best,
    )


def week_view(habit: Habit, index: CompletionIndex, today: DateLike) -> list[WeekDay]:
    """Monday..Sunday of the current week with schedule and completion flags."""

    return [
        WeekDay(
            date=day,
            scheduled=is_scheduled(habit, day),
            completed=index.is_completed(habit.id, day),
        )
        for day in week_dates(today)
    ]


def activity_grid(
    habit: Habit,
    index: CompletionIndex,
    today: DateLike,
    *,
    rows: int = 7,
    columns: int = 16,
) -> list[list[GridCell]]:
    """History dots ending today in the bottom-right cell.

    Moving left steps back one day; moving up a row steps back ``columns`` days.
    """

    anchor = start_of_day(today)
    grid: list[list[GridCell]] = []
    for row in range(rows):
        cells = []
        for col in range(columns):
            back = (rows - 1 - row) * columns + (columns - 1 - col)
            day = days_ago(anchor, back)
            cells.append(GridCell(date=day, completed=index.is_completed(habit.id, day)))
        grid.append(cells)
    return grid


def month_overview(
    year: int, month: int, habits: Sequence[Habit], index: CompletionIndex
) -> list[Optional[DayOverview]]:
    """Sunday-first month grid with each day's progress and tier."""

    overview: list[Optional[DayOverview]] = []
    for day in month_grid(year, month):
        if day is None:
            overview.append(None)
            continue
        progress = progress_for(day, habits, index)
        overview.append(
            DayOverview(date=day, progress=progress, tier=completion_tier(progress.percentage))
        )
    return overview


__all__ = [
    "CompletionTier",
    "DayOverview",
    "DayProgress",
    "GridCell",
    "HabitStats",
    "OverallStats",
    "WeekDay",
    "activity_grid",
    "completion_tier",
    "day_completion_rate",
    "habit_stats",
    "habits_by_category",
    "month_overview",
    "overall_stats",
    "progress_for",
    "sorted_today_view",
    "split_today",
]

"""Habit completion tracking and streak analytics."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .domain.habit import CompletionEvent, Habit, HabitCategory, Recurrence, TimeOfDay
from .services.analytics import DayProgress, progress_for, sorted_today_view
from .services.completion_index import CompletionIndex, ToggleAction
from .services.completion_rate import completion_rate
from .services.habits import compute_streaks, current_streak, longest_streak
from .services.schedule import habits_scheduled_on, is_scheduled
from .services.tracker import HabitTracker

__all__ = [
    "BaseConfig",
    "CompletionEvent",
    "CompletionIndex",
    "DayProgress",
    "DevConfig",
    "Habit",
    "HabitCategory",
    "HabitTracker",
    "Recurrence",
    "TestConfig",
    "TimeOfDay",
    "ToggleAction",
    "completion_rate",
    "compute_streaks",
    "current_streak",
    "habits_scheduled_on",
    "is_scheduled",
    "longest_streak",
    "progress_for",
    "sorted_today_view",
]

"""Domain value types and repository protocols."""

from .habit import CompletionEvent, Habit, HabitCategory, Recurrence, TimeOfDay

__all__ = ["CompletionEvent", "Habit", "HabitCategory", "Recurrence", "TimeOfDay"]

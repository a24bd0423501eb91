"""Habit store protocol.

The analytics services never talk to storage; callers read a snapshot through
this interface and push mutations back through it.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ..habit import CompletionEvent, Habit


class HabitStore(Protocol):
    """Persistence boundary for habits and their completion log."""

    def fetch_habits(self) -> list[Habit]:
        """Return every habit, oldest first."""
        ...

    def fetch_logs(self, habit_id: Optional[str] = None) -> list[CompletionEvent]:
        """Return completion events, newest first, optionally for one habit."""
        ...

    def create_completion(
        self, habit_id: str, day: date, note: Optional[str] = None
    ) -> Optional[CompletionEvent]:
        """Record a completion; a no-op returning the existing event if one is present."""
        ...

    def delete_completion(self, habit_id: str, day: date) -> bool:
        """Remove the completion for that day, returning whether one existed."""
        ...

    def create_habit(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update_habit(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit and every completion recorded for it."""
        ...

    def clear_all(self) -> None:
        """Remove all habits and completions."""
        ...

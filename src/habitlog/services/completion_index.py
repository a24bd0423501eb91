"""In-memory lookup of which habits were completed on which days.

The index is a read-through cache over the store's completion log: build it
from a fresh snapshot after every mutation, or call :meth:`CompletionIndex.apply`
once the store has confirmed a change.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from enum import Enum
from typing import Iterable, Iterator, Optional

from ..dates import DateLike, start_of_day
from ..domain.habit import CompletionEvent

logger = logging.getLogger(__name__)


class ToggleAction(str, Enum):
    """What the store should do to flip a habit's state on a day."""

    CREATE = "create"
    DELETE = "delete"


class CompletionIndex:
    """Completed days grouped by habit id."""

    def __init__(
        self,
        events: Iterable[CompletionEvent] = (),
        *,
        habit_ids: Optional[Iterable[str]] = None,
    ) -> None:
        known = set(habit_ids) if habit_ids is not None else None
        self._known = known
        self._days: dict[str, set[date]] = defaultdict(set)
        self.orphan_count = 0
        for event in events:
            if known is not None and event.habit_id not in known:
                self.orphan_count += 1
                continue
            # Duplicate (habit, day) pairs collapse into one completion.
            self._days[event.habit_id].add(start_of_day(event.date))
        if self.orphan_count:
            logger.debug("Ignored %d completions for unknown habits", self.orphan_count)

    def is_completed(self, habit_id: str, day: DateLike) -> bool:
        days = self._days.get(habit_id)
        return bool(days) and start_of_day(day) in days

    def dates_for(self, habit_id: str) -> list[date]:
        """Completed days for a habit, oldest first, without duplicates."""
        return sorted(self._days.get(habit_id, ()))

    def count_for(self, habit_id: str) -> int:
        return len(self._days.get(habit_id, ()))

    def habit_ids(self) -> set[str]:
        return {habit_id for habit_id, days in self._days.items() if days}

    def toggle(self, habit_id: str, day: DateLike) -> ToggleAction:
        """Decide whether toggling ``day`` creates or deletes a completion."""
        if self.is_completed(habit_id, day):
            return ToggleAction.DELETE
        return ToggleAction.CREATE

    def apply(self, action: ToggleAction, habit_id: str, day: DateLike) -> None:
        """Mirror a mutation the store has already confirmed."""
        normalized = start_of_day(day)
        if action is ToggleAction.CREATE:
            if self._known is not None and habit_id not in self._known:
                logger.debug("Ignored completion for unknown habit %s", habit_id)
                return
            self._days[habit_id].add(normalized)
        else:
            self._days.get(habit_id, set()).discard(normalized)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        habit_id, day = key
        return self.is_completed(habit_id, day)

    def __len__(self) -> int:
        return sum(len(days) for days in self._days.values())

    def __iter__(self) -> Iterator[tuple[str, date]]:
        for habit_id, days in self._days.items():
            for day in sorted(days):
                yield habit_id, day


__all__ = ["CompletionIndex", "ToggleAction"]

"""Habit and completion value types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, time
from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

from ..dates import ALL_DAYS, DateLike, start_of_day

_E = TypeVar("_E", bound=Enum)


class Recurrence(str, Enum):
    """How a habit repeats. ``weekly`` and ``custom`` both use ``target_days``."""

    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class HabitCategory(str, Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    PRODUCTIVITY = "productivity"
    MINDFULNESS = "mindfulness"
    LEARNING = "learning"
    SOCIAL = "social"
    CREATIVITY = "creativity"
    FINANCE = "finance"
    OTHER = "other"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


def coerce_enum(enum_cls: type[_E], value: Any, default: _E) -> _E:
    """Map stored values onto ``enum_cls``, falling back to ``default``."""

    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Habit:
    """A recurring action and the weekdays it is scheduled on.

    ``target_days`` uses Sunday=0 .. Saturday=6. Values outside that range are
    kept as given but can never match a calendar day.
    """

    name: str
    recurrence: Recurrence = Recurrence.DAILY
    target_days: frozenset[int] = ALL_DAYS
    created_at: date = field(default_factory=date.today)
    id: str = field(default_factory=_new_id)
    description: str = ""
    icon: str = "⭐️"
    color: str = "purple"
    category: HabitCategory = HabitCategory.HEALTH
    time_of_day: Optional[TimeOfDay] = None
    reminder_enabled: bool = False
    reminder_time: Optional[time] = None
    goal: int = 1

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "target_days", frozenset(int(d) for d in self.target_days))
        object.__setattr__(self, "created_at", start_of_day(self.created_at))
        object.__setattr__(self, "recurrence", coerce_enum(Recurrence, self.recurrence, Recurrence.DAILY))
        object.__setattr__(self, "category", coerce_enum(HabitCategory, self.category, HabitCategory.OTHER))
        if self.time_of_day is not None:
            object.__setattr__(self, "time_of_day", coerce_enum(TimeOfDay, self.time_of_day, None))

    @property
    def scheduled_days(self) -> frozenset[int]:
        """Weekday indices the habit is expected on."""
        if self.recurrence is Recurrence.DAILY:
            return ALL_DAYS
        return self.target_days

    @property
    def days_per_week(self) -> int:
        return len(self.scheduled_days & ALL_DAYS)

    @property
    def is_everyday(self) -> bool:
        return self.days_per_week == 7

    def with_changes(self, **changes: Any) -> "Habit":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "color": self.color,
            "category": self.category.value,
            "recurrence": self.recurrence.value,
            "target_days": sorted(self.target_days),
            "created_at": self.created_at.isoformat(),
            "time_of_day": self.time_of_day.value if self.time_of_day else None,
            "reminder_enabled": self.reminder_enabled,
            "reminder_time": self.reminder_time.isoformat() if self.reminder_time else None,
            "goal": self.goal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Habit":
        """Rebuild a habit from :meth:`to_dict` output.

        ``id`` and ``name`` are required; everything else falls back to the
        same defaults a freshly created habit gets.
        """
        reminder_time = data.get("reminder_time")
        time_of_day = data.get("time_of_day")
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            icon=data.get("icon", "⭐️"),
            color=data.get("color", "purple"),
            category=coerce_enum(HabitCategory, data.get("category"), HabitCategory.OTHER),
            recurrence=coerce_enum(Recurrence, data.get("recurrence"), Recurrence.DAILY),
            target_days=_parse_days(data.get("target_days")),
            created_at=date.fromisoformat(data["created_at"][:10]) if data.get("created_at") else date.today(),
            time_of_day=coerce_enum(TimeOfDay, time_of_day, None) if time_of_day else None,
            reminder_enabled=bool(data.get("reminder_enabled", False)),
            reminder_time=time.fromisoformat(reminder_time) if reminder_time else None,
            goal=int(data.get("goal", 1)),
        )


def _parse_days(values: Optional[Iterable[Any]]) -> frozenset[int]:
    if values is None:
        return ALL_DAYS
    return frozenset(int(v) for v in values)


@dataclass(frozen=True, slots=True)
class CompletionEvent:
    """Record that a habit was completed on one calendar day."""

    habit_id: str
    date: date
    note: Optional[str] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", start_of_day(self.date))

    @property
    def key(self) -> tuple[str, date]:
        return self.habit_id, self.date

    @classmethod
    def on(cls, habit_id: str, value: DateLike, note: Optional[str] = None) -> "CompletionEvent":
        return cls(habit_id=habit_id, date=start_of_day(value), note=note)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "habit_id": self.habit_id,
            "date": self.date.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompletionEvent":
        kwargs: dict[str, Any] = {
            "habit_id": data["habit_id"],
            "date": date.fromisoformat(data["date"][:10]),
            "note": data.get("note"),
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)


__all__ = [
    "CompletionEvent",
    "Habit",
    "HabitCategory",
    "Recurrence",
    "TimeOfDay",
    "coerce_enum",
]

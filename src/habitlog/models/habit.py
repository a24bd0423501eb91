"""Habit tracking tables."""

from __future__ import annotations

from datetime import date, time
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..domain.habit import CompletionEvent, Habit, HabitCategory, Recurrence, TimeOfDay, coerce_enum


def _encode_days(days: frozenset[int]) -> str:
    return ",".join(str(d) for d in sorted(days))


def _decode_days(raw: Optional[str]) -> frozenset[int]:
    if raw is None:
        return frozenset(range(7))
    return frozenset(int(part) for part in raw.split(",") if part.strip())


class HabitRecord(SQLModel, table=True):
    """Stored form of a :class:`~habitlog.domain.habit.Habit`."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(primary_key=True, max_length=32)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: str = Field(default="", max_length=255)
    icon: str = Field(default="⭐️", max_length=16)
    color: str = Field(default="purple", max_length=32)
    category: str = Field(default=HabitCategory.HEALTH.value, max_length=32)
    recurrence: str = Field(default=Recurrence.DAILY.value, max_length=16)
    # Comma-separated weekday indices, Sunday=0.
    target_days: Optional[str] = Field(default="0,1,2,3,4,5,6", max_length=16)
    created_at: date = Field(nullable=False, index=True)
    time_of_day: Optional[str] = Field(default=None, max_length=16)
    reminder_enabled: bool = Field(default=False, nullable=False)
    reminder_time: Optional[time] = Field(default=None)
    goal: int = Field(default=1, nullable=False)

    @classmethod
    def from_domain(cls, habit: Habit) -> "HabitRecord":
        return cls(
            id=habit.id,
            name=habit.name,
            description=habit.description,
            icon=habit.icon,
            color=habit.color,
            category=habit.category.value,
            recurrence=habit.recurrence.value,
            target_days=_encode_days(habit.target_days),
            created_at=habit.created_at,
            time_of_day=habit.time_of_day.value if habit.time_of_day else None,
            reminder_enabled=habit.reminder_enabled,
            reminder_time=habit.reminder_time,
            goal=habit.goal,
        )

    def apply(self, habit: Habit) -> None:
        """Copy editable fields from ``habit``; ``created_at`` is left alone."""
        self.name = habit.name
        self.description = habit.description
        self.icon = habit.icon
        self.color = habit.color
        self.category = habit.category.value
        self.recurrence = habit.recurrence.value
        self.target_days = _encode_days(habit.target_days)
        self.time_of_day = habit.time_of_day.value if habit.time_of_day else None
        self.reminder_enabled = habit.reminder_enabled
        self.reminder_time = habit.reminder_time
        self.goal = habit.goal

    def to_domain(self) -> Habit:
        return Habit(
            id=self.id,
            name=self.name or "",
            description=self.description or "",
            icon=self.icon or "⭐️",
            color=self.color or "purple",
            category=coerce_enum(HabitCategory, self.category, HabitCategory.OTHER),
            recurrence=coerce_enum(Recurrence, self.recurrence, Recurrence.DAILY),
            target_days=_decode_days(self.target_days),
            created_at=self.created_at,
            time_of_day=coerce_enum(TimeOfDay, self.time_of_day, None) if self.time_of_day else None,
            reminder_enabled=self.reminder_enabled,
            reminder_time=self.reminder_time,
            goal=self.goal,
        )


class CompletionRecord(SQLModel, table=True):
    """One completed calendar day for a habit.

    The composite primary key allows at most one row per habit and day.
    """

    __tablename__: ClassVar[str] = "habit_completion"

    habit_id: str = Field(foreign_key="habit.id", primary_key=True, max_length=32)
    occurred_on: date = Field(primary_key=True, index=True)
    event_id: str = Field(nullable=False, max_length=32)
    note: Optional[str] = Field(default=None, max_length=255)

    @classmethod
    def from_domain(cls, event: CompletionEvent) -> "CompletionRecord":
        return cls(
            habit_id=event.habit_id,
            occurred_on=event.date,
            event_id=event.id,
            note=event.note,
        )

    def to_domain(self) -> CompletionEvent:
        return CompletionEvent(
            habit_id=self.habit_id,
            date=self.occurred_on,
            note=self.note,
            id=self.event_id,
        )

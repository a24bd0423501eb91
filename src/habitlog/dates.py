"""Calendar helpers shared by every habit computation.

All comparisons happen on calendar days (``datetime.date``). Weekday indices
follow a single convention everywhere: Sunday=0, Monday=1, ... Saturday=6.
Habit ``target_days`` are stored with the same numbering.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[date, datetime]

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)
ALL_DAYS = frozenset(range(7))
WEEKDAYS = frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})
WEEKEND = frozenset({SATURDAY, SUNDAY})


def start_of_day(value: DateLike) -> date:
    """Return the calendar day of ``value``, dropping any time of day.

    Aware datetimes are converted to the local zone before truncating so that
    a late-evening UTC timestamp lands on the user's own calendar day.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def day_of_week_index(value: DateLike) -> int:
    """Weekday index in ``0..6`` with Sunday=0."""

    return start_of_day(value).isoweekday() % 7


def add_days(value: DateLike, n: int) -> date:
    return start_of_day(value) + timedelta(days=n)


def days_ago(today: DateLike, n: int) -> date:
    return add_days(today, -n)


def days_between(a: DateLike, b: DateLike) -> int:
    """Signed number of whole days from ``a`` to ``b`` (``b - a``)."""

    return (start_of_day(b) - start_of_day(a)).days


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return start_of_day(a) == start_of_day(b)


def is_today(value: DateLike, today: DateLike) -> bool:
    return days_between(today, value) == 0


def is_future(value: DateLike, today: DateLike) -> bool:
    return days_between(today, value) > 0


def is_past(value: DateLike, today: DateLike) -> bool:
    return days_between(today, value) < 0


def date_range(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive (empty if reversed)."""

    cursor = start_of_day(start)
    last = start_of_day(end)
    while cursor <= last:
        yield cursor
        cursor += timedelta(days=1)


def start_of_week_monday(value: DateLike) -> date:
    day = start_of_day(value)
    return day - timedelta(days=day.weekday())


def week_dates(value: DateLike) -> list[date]:
    """Monday through Sunday of the week containing ``value``."""

    monday = start_of_week_monday(value)
    return [monday + timedelta(days=offset) for offset in range(7)]


def start_of_month(value: DateLike) -> date:
    return start_of_day(value).replace(day=1)


def month_grid(year: int, month: int) -> list[Optional[date]]:
    """Days of a month laid out for a Sunday-first calendar.

    Leading ``None`` entries pad the first row up to the weekday of the 1st.
    """

    first = date(year, month, 1)
    _, length = calendar.monthrange(year, month)
    cells: list[Optional[date]] = [None] * day_of_week_index(first)
    cells.extend(first + timedelta(days=offset) for offset in range(length))
    return cells


__all__ = [
    "ALL_DAYS",
    "WEEKDAYS",
    "WEEKEND",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "DateLike",
    "add_days",
    "date_range",
    "day_of_week_index",
    "days_ago",
    "days_between",
    "is_future",
    "is_past",
    "is_same_day",
    "is_today",
    "month_grid",
    "start_of_day",
    "start_of_month",
    "start_of_week_monday",
    "week_dates",
]

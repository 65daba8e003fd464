"""Utilities for working with local day boundaries."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

DateLike = Union[date, datetime]

# the day window closes one second before the next midnight
DAY_SPAN = timedelta(hours=23, minutes=59, seconds=59)


def local_now() -> datetime:
    return datetime.now()


def to_local_naive(dt: Optional[DateLike]) -> Optional[datetime]:
    """Return ``dt`` as a naive datetime in local time.

    Plain ``date`` values become midnight of that day; aware datetimes are
    converted to the local zone and stripped of their tzinfo.
    """

    if dt is None:
        return None
    if not isinstance(dt, datetime):
        return datetime.combine(dt, time.min)
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def start_of_day(value: DateLike) -> datetime:
    local = to_local_naive(value)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: DateLike) -> datetime:
    return start_of_day(value) + DAY_SPAN


def day_bounds(value: DateLike) -> Tuple[datetime, datetime]:
    start = start_of_day(value)
    return start, start + DAY_SPAN


def same_day(a: Optional[DateLike], b: Optional[DateLike]) -> bool:
    if a is None or b is None:
        return False
    return start_of_day(a) == start_of_day(b)


def with_time(day: DateLike, value: time) -> datetime:
    """Keep the calendar day of ``day`` and replace its time of day."""

    return datetime.combine(start_of_day(day).date(), value.replace(tzinfo=None))


__all__ = [
    "DAY_SPAN",
    "day_bounds",
    "end_of_day",
    "local_now",
    "same_day",
    "start_of_day",
    "to_local_naive",
    "with_time",
]

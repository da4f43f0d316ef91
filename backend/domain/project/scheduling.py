"""
Project Domain - Scheduling rules.
"""

from __future__ import annotations
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Optional, Union

DateLike = Union[date, datetime]

WEEKDAY_KEYS = (
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday',
)

DEFAULT_WORKING_DAYS = {
    'monday': True,
    'tuesday': True,
    'wednesday': True,
    'thursday': True,
    'friday': True,
    'saturday': False,
    'sunday': False,
}


def default_working_days() -> dict:
    return dict(DEFAULT_WORKING_DAYS)


def timeline_duration(start: Optional[DateLike], end: Optional[DateLike]) -> Optional[int]:
    """Whole days between start and end, rounded up. None without an end."""
    if not start or not end:
        return None
    delta = end - start
    return math.ceil(delta.total_seconds() / 86400)


def planned_end(start: DateLike, duration_days: int) -> DateLike:
    return start + timedelta(days=int(duration_days))


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def count_working_days(
    start: DateLike,
    end: DateLike,
    working_days: Optional[Mapping[str, bool]] = None,
    holidays: Iterable = (),
) -> int:
    """
    Number of working days in [start, end].

    A day counts when its weekday is enabled in `working_days` and it is
    not listed in `holidays` (dates or ISO strings).
    """
    calendar = working_days or DEFAULT_WORKING_DAYS
    days_off = {_as_date(h) for h in holidays or ()}
    current, last = _as_date(start), _as_date(end)

    count = 0
    while current <= last:
        if calendar.get(WEEKDAY_KEYS[current.weekday()], False) and current not in days_off:
            count += 1
        current += timedelta(days=1)
    return count

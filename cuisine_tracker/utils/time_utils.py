"""
Calendar helpers shared by the streak, trend and achievement modules.

Week numbering
--------------
``week_of_year()`` uses a simple Sunday-based scheme rather than ISO 8601::

    ceil((days_since_jan_1 + weekday_of_jan_1 + 1) / 7)

where weekdays are counted Sunday = 0 … Saturday = 6. Week 1 is the
(possibly partial) week containing January 1st. Streak code that steps back
from week 1 wraps to the week holding December 31st of the previous year
(52, 53 or 54 depending on the calendar).
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(tz=timezone.utc)


def resolve_today(today: Optional[date] = None) -> date:
    """Return ``today`` if given, else the current UTC date."""
    return today if today is not None else utcnow().date()


def sunday_weekday(d: date) -> int:
    """Weekday with Sunday = 0 … Saturday = 6."""
    return (d.weekday() + 1) % 7


def week_of_year(d: date) -> int:
    """Sunday-based week number of ``d`` within its year (1-54)."""
    jan_1 = date(d.year, 1, 1)
    days = (d - jan_1).days
    return math.ceil((days + sunday_weekday(jan_1) + 1) / 7)


def previous_week(week: int, year: int) -> tuple[int, int]:
    """Step a ``(week, year)`` cursor back by one week."""
    week -= 1
    if week < 1:
        return week_of_year(date(year - 1, 12, 31)), year - 1
    return week, year


def previous_month(d: date) -> tuple[int, int]:
    """``(month, year)`` of the calendar month before ``d``."""
    if d.month == 1:
        return 12, d.year - 1
    return d.month - 1, d.year


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days from ``earlier`` to ``later`` (floored, may be negative)."""
    return math.floor((later - earlier).total_seconds() / 86400)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))

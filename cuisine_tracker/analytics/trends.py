"""
Month-over-month exploration trend.

Entries are bucketed by the calendar month of ``first_tried_at``. The week
breakdown splits the current month into four buckets by day of month
(1-7, 8-14, 15-21, 22-end); days 29-31 fold into the last bucket so every
this-month entry is counted exactly once.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from cuisine_tracker.models.cuisine import ProgressEntry
from cuisine_tracker.models.stats import (
    WEEKS_PER_MONTH_BUCKETS,
    MonthlyTrend,
    TrendDirection,
)
from cuisine_tracker.utils.time_utils import previous_month, resolve_today


def _in_month(entry: ProgressEntry, month: int, year: int) -> bool:
    tried = entry.tried_on
    return tried.month == month and tried.year == year


def monthly_progress(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
) -> int:
    """Number of entries first tried in the current calendar month."""
    ref = resolve_today(today)
    return sum(1 for p in progress if _in_month(p, ref.month, ref.year))


def week_of_month_bucket(day_of_month: int) -> int:
    """Bucket index 0-3 for a day of month."""
    return min((day_of_month - 1) // 7, WEEKS_PER_MONTH_BUCKETS - 1)


def classify_trend(this_month: int, last_month: int) -> TrendDirection:
    if this_month > last_month:
        return TrendDirection.INCREASING
    if this_month < last_month:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def monthly_trend(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
) -> MonthlyTrend:
    """Compare this month's new cuisines against last month's.

    Args:
        progress: User progress snapshot.
        today:    Reference date (default: current UTC date).

    Returns:
        ``MonthlyTrend`` with counts, direction and a 4-bucket breakdown.
    """
    ref = resolve_today(today)
    last_month, last_year = previous_month(ref)

    this_month_entries = [p for p in progress if _in_month(p, ref.month, ref.year)]
    last_month_count = sum(1 for p in progress if _in_month(p, last_month, last_year))

    weekly = [0] * WEEKS_PER_MONTH_BUCKETS
    for entry in this_month_entries:
        weekly[week_of_month_bucket(entry.tried_on.day)] += 1

    return MonthlyTrend(
        this_month=len(this_month_entries),
        last_month=last_month_count,
        trend=classify_trend(len(this_month_entries), last_month_count),
        weekly_breakdown=weekly,
    )

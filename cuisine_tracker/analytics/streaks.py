"""
Exploration streaks.

Three variants are provided; they answer different questions and must not be
swapped for one another.

``day_streak`` (gap allowance)
    Walk entries newest first and count them while each entry's distance
    from *today* is at most ``count + allowance`` days. With the default
    allowance of 7, a user who tries something roughly weekly keeps the
    streak alive. This is NOT a strict daily streak; it feeds
    ``ProgressStats.current_streak``.

``strict_day_streak``
    Consecutive calendar days: each counted entry may be at most one day
    older than the previously counted one (same-day entries also count).

``week_streak``
    Consecutive Sunday-based weeks (see ``utils.time_utils.week_of_year``)
    with at least one entry. If the current week has no entry yet, counting
    starts from the previous week so an in-progress week does not break the
    streak. Drives the streak achievements.

All variants return 0 for empty progress and ignore entries dated after
``today``.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from cuisine_tracker.models.cuisine import ProgressEntry
from cuisine_tracker.models.stats import StreakSummary
from cuisine_tracker.utils.time_utils import (
    previous_week,
    resolve_today,
    week_of_year,
)

DEFAULT_GAP_ALLOWANCE_DAYS = 7


def _newest_first(progress: list[ProgressEntry]) -> list[ProgressEntry]:
    return sorted(progress, key=lambda p: p.first_tried_at, reverse=True)


def day_streak(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
    gap_allowance_days: int = DEFAULT_GAP_ALLOWANCE_DAYS,
) -> int:
    """Day-granularity streak with a sliding gap allowance.

    Args:
        progress:            User progress snapshot.
        today:               Reference date (default: current UTC date).
        gap_allowance_days:  Extra days tolerated on top of the running count.

    Returns:
        Number of entries counted before the first violation. Entries dated
        after ``today`` are ignored.
    """
    if not progress:
        return 0
    ref = resolve_today(today)

    streak = 0
    for entry in _newest_first(progress):
        days_diff = (ref - entry.tried_on).days
        if days_diff < 0:
            continue
        if days_diff <= streak + gap_allowance_days:
            streak += 1
        else:
            break
    return streak


def strict_day_streak(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
) -> int:
    """Streak of entries on consecutive calendar days ending today or yesterday."""
    if not progress:
        return 0
    cursor = resolve_today(today)

    streak = 0
    for entry in _newest_first(progress):
        tried = entry.tried_on
        gap = (cursor - tried).days
        if gap < 0:
            continue
        if gap > 1:
            break
        streak += 1
        cursor = tried
    return streak


def _entry_week(entry: ProgressEntry) -> tuple[int, int]:
    tried = entry.tried_on
    return tried.year, week_of_year(tried)


def week_streak(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
) -> int:
    """Consecutive weeks with at least one entry, ending this week or last.

    Args:
        progress: User progress snapshot.
        today:    Reference date (default: current UTC date).

    Returns:
        Number of consecutive weeks.
    """
    if not progress:
        return 0
    ref = resolve_today(today)
    this_year, this_week = ref.year, week_of_year(ref)

    entries = [p for p in _newest_first(progress) if p.tried_on <= ref]
    if not any(_entry_week(p) == (this_year, this_week) for p in entries):
        cursor_week, cursor_year = previous_week(this_week, this_year)
    else:
        cursor_week, cursor_year = this_week, this_year

    streak = 0
    for entry in entries:
        year, week = _entry_week(entry)
        if (year, week) == (cursor_year, cursor_week):
            streak += 1
            cursor_week, cursor_year = previous_week(cursor_week, cursor_year)
        elif (year, week) < (cursor_year, cursor_week):
            break
    return streak


def longest_week_streak(progress: list[ProgressEntry]) -> int:
    """Longest run of consecutive active weeks anywhere in the history."""
    if not progress:
        return 0

    active = sorted({_entry_week(p) for p in progress}, reverse=True)
    longest = current = 1
    for prev, nxt in zip(active, active[1:]):
        expected_week, expected_year = previous_week(prev[1], prev[0])
        if (nxt[0], nxt[1]) == (expected_year, expected_week):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def streak_summary(
    progress: list[ProgressEntry],
    *,
    today: Optional[date] = None,
) -> StreakSummary:
    """Current and longest weekly streaks plus the most recent try date."""
    if not progress:
        return StreakSummary(current=0, longest=0, last_try_date=None)

    current = week_streak(progress, today=today)
    last = max(p.first_tried_at for p in progress).date()
    return StreakSummary(
        current=current,
        longest=max(current, longest_week_streak(progress)),
        last_try_date=last,
    )

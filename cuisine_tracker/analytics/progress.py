"""
Progress aggregation and diversity scoring.

Diversity score (0-100)
-----------------------
    score = round(100 * (
        0.4 * category_diversity     # share of categories touched
      + 0.3 * cuisine_progress       # share of catalog tried
      + 0.2 * depth_bonus            # mean per-category coverage
      + 0.1 * consistency_bonus      # regularity of exploration
    ))

category_diversity:
    Categories with at least one tried cuisine / categories in the catalog.

cuisine_progress:
    Distinct tried catalog cuisines / catalog size.

depth_bonus:
    Sum of min(tried / size, 1) over touched categories, divided by the total
    category count (untouched categories contribute 0).

consistency_bonus:
    Entries sorted oldest first. A running counter increments when two
    consecutive entries are at most ``consistency_gap_days`` apart and resets
    to 0 otherwise; the counter is added to a total at every step. The total
    is normalised by ``2 * len(progress)`` and capped at 1. Fewer than two
    entries gives 0.

Every component is 0 for an empty catalog, so the score is 0 there too.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from cuisine_tracker.achievements.definitions import CUISINE_GOALS, SYNTHETIC_GOAL_STEP
from cuisine_tracker.analytics.catalog import CatalogIndex
from cuisine_tracker.analytics.streaks import day_streak
from cuisine_tracker.analytics.trends import monthly_progress
from cuisine_tracker.config import AppConfig
from cuisine_tracker.models.achievement import GoalStatus
from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.models.stats import DiversityMetrics, NextGoal, ProgressStats
from cuisine_tracker.utils.time_utils import days_between, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_CONSISTENCY_GAP_DAYS = 30

_W_CATEGORY    = 0.4
_W_PROGRESS    = 0.3
_W_DEPTH       = 0.2
_W_CONSISTENCY = 0.1


def aggregate(
    progress: list[ProgressEntry],
    catalog:  list[Cuisine],
    *,
    today:  Optional[date] = None,
    config: Optional[AppConfig] = None,
) -> ProgressStats:
    """Compute the full ``ProgressStats`` for one user.

    Args:
        progress: User progress snapshot (one entry per tried cuisine).
        catalog:  Full cuisine catalog.
        today:    Reference date for streak/monthly counts (default: UTC today).
        config:   Application config; defaults to ``AppConfig()``.

    Returns:
        ``ProgressStats``. Never raises for well-typed input.
    """
    cfg = config or AppConfig()
    index = CatalogIndex.build(catalog)

    total = len(index)
    tried = len(index.tried_ids(progress))

    stats = ProgressStats(
        total_cuisines=total,
        tried_cuisines=tried,
        percentage=completion_percentage(tried, total),
        diversity_score=diversity_score(
            progress,
            index,
            consistency_gap_days=cfg.streaks.consistency_gap_days,
        ),
        current_streak=day_streak(
            progress,
            today=today,
            gap_allowance_days=cfg.streaks.day_gap_allowance_days,
        ),
        monthly_progress=monthly_progress(progress, today=today),
        next_goal=next_goal(tried),
    )
    logger.debug(
        "Aggregated progress: %d/%d tried, diversity=%d, streak=%d",
        stats.tried_cuisines,
        stats.total_cuisines,
        stats.diversity_score,
        stats.current_streak,
    )
    return stats


def completion_percentage(tried: int, total: int) -> int:
    """``round(tried / total * 100)`` clamped to 0-100; 0 for an empty catalog."""
    if total <= 0:
        return 0
    return max(0, min(100, round_half_up(tried / total * 100)))


# ── Diversity ─────────────────────────────────────────────────────────────────

def diversity_score(
    progress: list[ProgressEntry],
    index:    CatalogIndex,
    *,
    consistency_gap_days: int = DEFAULT_CONSISTENCY_GAP_DAYS,
) -> int:
    """Weighted 0-100 diversity score (see module docstring)."""
    total_cuisines = len(index)
    categories = index.group_progress(progress)
    total_categories = len(categories)
    if total_cuisines == 0 or total_categories == 0:
        return 0

    touched = [c for c in categories if c.tried_count > 0]
    category_diversity = len(touched) / total_categories
    cuisine_progress = len(index.tried_ids(progress)) / total_cuisines
    depth_bonus = sum(c.coverage for c in touched) / total_categories
    consistency = consistency_bonus(progress, max_gap_days=consistency_gap_days)

    raw = (
        category_diversity * _W_CATEGORY
        + cuisine_progress * _W_PROGRESS
        + depth_bonus      * _W_DEPTH
        + consistency      * _W_CONSISTENCY
    )
    return max(0, min(100, round_half_up(raw * 100)))


def consistency_bonus(
    progress: list[ProgressEntry],
    *,
    max_gap_days: int = DEFAULT_CONSISTENCY_GAP_DAYS,
) -> float:
    """Regularity of exploration in [0, 1] (see module docstring)."""
    if len(progress) < 2:
        return 0.0

    ordered = sorted(progress, key=lambda p: p.first_tried_at)
    total = 0
    run = 0
    for prev, cur in zip(ordered, ordered[1:]):
        if days_between(prev.first_tried_at, cur.first_tried_at) <= max_gap_days:
            run += 1
        else:
            run = 0
        total += run

    return min(total / (len(progress) * 2), 1.0)


def diversity_metrics(
    progress: list[ProgressEntry],
    catalog:  list[Cuisine],
    *,
    config: Optional[AppConfig] = None,
) -> DiversityMetrics:
    """Diversity score plus rounded per-category coverage percentages."""
    cfg = config or AppConfig()
    index = CatalogIndex.build(catalog)
    categories = index.group_progress(progress)

    return DiversityMetrics(
        score=diversity_score(
            progress, index, consistency_gap_days=cfg.streaks.consistency_gap_days
        ),
        category_coverage={
            c.category.value: round_half_up(c.coverage * 100) for c in categories
        },
        total_categories=len(categories),
        tried_categories=sum(1 for c in categories if c.tried_count > 0),
    )


# ── Goals ─────────────────────────────────────────────────────────────────────

def next_goal(tried_count: int) -> NextGoal:
    """First goal above ``tried_count``, or the next multiple of 25 past the table."""
    for goal in CUISINE_GOALS:
        if goal.threshold > tried_count:
            return NextGoal(goal=goal.threshold, remaining=goal.threshold - tried_count)

    target = (max(tried_count, 0) // SYNTHETIC_GOAL_STEP + 1) * SYNTHETIC_GOAL_STEP
    return NextGoal(goal=target, remaining=max(0, target - tried_count))


def progress_goals(tried_count: int) -> list[GoalStatus]:
    """The goal table annotated with ``achieved`` flags."""
    return [
        GoalStatus(goal=goal, achieved=tried_count >= goal.threshold)
        for goal in CUISINE_GOALS
    ]


# ── Display helpers ───────────────────────────────────────────────────────────

def recent_activity(progress: list[ProgressEntry], limit: int = 5) -> list[ProgressEntry]:
    """Most recently first-tried entries, newest first."""
    if limit <= 0:
        return []
    return sorted(progress, key=lambda p: p.first_tried_at, reverse=True)[:limit]


def format_progress_text(tried: int, total: int) -> str:
    if total <= 0:
        return "No cuisines available"
    return f"{tried} of {total} cuisines explored ({completion_percentage(tried, total)}%)"

"""
Achievement detection by snapshot diff.

``detect(old_progress, new_progress, catalog)`` is called once per mutation
with the snapshot captured *before* the mutation and the one after it. Every
family below only fires on a threshold that was crossed between the two
snapshots, so ``detect(old, old, catalog)`` is always empty and a batched
mutation that jumps over several thresholds reports each of them once.

Families
--------
Milestone
    ``cuisine_<n>`` for each goal with ``old_count < n <= new_count``.
    ``first_cuisine`` when the count leaves 0.

Category
    Per category, tried counts before/after:
      first     0 -> >=1
      half      crosses ceil(size / 2), i.e. 50% of the category
      complete  crosses size (100%)
    Entries whose cuisine is not in the catalog are ignored.

Streak
    Week-granularity streak of both snapshots (same ``today``); emits
    ``streak_<n>`` for each configured threshold with ``old < n <= new``.

Speed
    Only when ``new`` has more entries than ``old``. Elapsed whole days from
    the earliest to the latest ``first_tried_at`` in ``new``; ``speed_10_30``
    when at least 10 entries span <= 30 days, ``speed_20_60`` for 20 in 60.
    Speed ids are stable, so the caller's granted-id set suppresses repeats.

The detector never raises for well-typed input and returns achievements in
family order: milestone, category, streak, speed.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Iterable, Optional

from cuisine_tracker.achievements.definitions import (
    CUISINE_GOALS,
    FIRST_CUISINE_ID,
    SpeedMilestone,
    category_complete_id,
    category_first_id,
    category_half_id,
    milestone_id,
    streak_id,
    streak_milestone,
)
from cuisine_tracker.analytics.catalog import CatalogIndex
from cuisine_tracker.analytics.streaks import week_streak
from cuisine_tracker.config import AchievementConfig, AppConfig
from cuisine_tracker.models.achievement import Achievement, AchievementKind
from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.utils.time_utils import days_between, utcnow

logger = logging.getLogger(__name__)


def detect(
    old_progress: list[ProgressEntry],
    new_progress: list[ProgressEntry],
    catalog:      list[Cuisine],
    *,
    today:  Optional[date] = None,
    now:    Optional[datetime] = None,
    config: Optional[AppConfig] = None,
) -> list[Achievement]:
    """Return achievements newly crossed between two progress snapshots.

    Args:
        old_progress: Snapshot captured before the mutation.
        new_progress: Snapshot after the mutation.
        catalog:      Full cuisine catalog.
        today:        Reference date for streaks (default: UTC today).
        now:          ``unlocked_at`` stamp (default: current UTC time).
        config:       Application config; defaults to ``AppConfig()``.

    Returns:
        Newly unlocked achievements; empty when nothing was crossed.
    """
    cfg = config or AppConfig()
    stamp = now or utcnow()
    index = CatalogIndex.build(catalog)

    achievements: list[Achievement] = []
    achievements.extend(detect_milestones(old_progress, new_progress, unlocked_at=stamp))
    achievements.extend(
        detect_category_achievements(old_progress, new_progress, index, unlocked_at=stamp)
    )
    achievements.extend(
        detect_streak_achievements(
            week_streak(old_progress, today=today),
            week_streak(new_progress, today=today),
            thresholds=cfg.streaks.streak_thresholds,
            unlocked_at=stamp,
        )
    )
    achievements.extend(
        detect_speed_achievements(
            old_progress, new_progress, cfg.achievements, unlocked_at=stamp
        )
    )

    if achievements:
        logger.debug(
            "Detected %d new achievement(s): %s",
            len(achievements),
            ", ".join(a.id for a in achievements),
        )
    return achievements


def filter_unlocked(
    achievements: Iterable[Achievement],
    granted_ids:  Iterable[str],
) -> list[Achievement]:
    """Drop achievements whose id the caller has already granted."""
    granted = set(granted_ids)
    return [a for a in achievements if a.id not in granted]


# ── Milestones ────────────────────────────────────────────────────────────────

def _distinct_count(progress: list[ProgressEntry]) -> int:
    return len({p.cuisine_id for p in progress})


def detect_milestones(
    old_progress: list[ProgressEntry],
    new_progress: list[ProgressEntry],
    *,
    unlocked_at: datetime,
) -> list[Achievement]:
    old_count = _distinct_count(old_progress)
    new_count = _distinct_count(new_progress)

    found: list[Achievement] = []
    if old_count == 0 and new_count >= 1:
        found.append(
            Achievement(
                id=FIRST_CUISINE_ID,
                name="First Taste",
                description="Tried your first cuisine!",
                icon="🎉",
                threshold=1,
                unlocked_at=unlocked_at,
                kind=AchievementKind.MILESTONE,
            )
        )

    for goal in CUISINE_GOALS:
        if old_count < goal.threshold <= new_count:
            found.append(
                Achievement(
                    id=milestone_id(goal.threshold),
                    name=goal.name,
                    description=goal.description,
                    icon=goal.icon,
                    threshold=goal.threshold,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.MILESTONE,
                )
            )
    return found


# ── Categories ────────────────────────────────────────────────────────────────

def detect_category_achievements(
    old_progress: list[ProgressEntry],
    new_progress: list[ProgressEntry],
    index:        CatalogIndex,
    *,
    unlocked_at: datetime,
) -> list[Achievement]:
    old_counts = index.tried_counts(old_progress)
    new_counts = index.tried_counts(new_progress)

    found: list[Achievement] = []
    for category in index.categories:
        size = index.category_size(category)
        before = old_counts.get(category, 0)
        after = new_counts.get(category, 0)
        if size == 0 or after <= before:
            continue

        name = category.value
        if before == 0:
            found.append(
                Achievement(
                    id=category_first_id(category),
                    name=f"{name} Explorer",
                    description=f"First taste of {name} cuisine!",
                    icon="🌟",
                    threshold=1,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.CATEGORY,
                )
            )

        half = math.ceil(size / 2)
        if before < half <= after:
            found.append(
                Achievement(
                    id=category_half_id(category),
                    name=f"{name} Enthusiast",
                    description=f"Tried half of all {name} cuisines!",
                    icon="🏅",
                    threshold=half,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.CATEGORY,
                )
            )

        if before < size <= after:
            found.append(
                Achievement(
                    id=category_complete_id(category),
                    name=f"{name} Master",
                    description=f"Mastered all {name} cuisines!",
                    icon="👑",
                    threshold=size,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.CATEGORY,
                )
            )
    return found


# ── Streaks ───────────────────────────────────────────────────────────────────

def detect_streak_achievements(
    old_streak: int,
    new_streak: int,
    *,
    thresholds:  Iterable[int],
    unlocked_at: datetime,
) -> list[Achievement]:
    """One achievement per threshold with ``old_streak < threshold <= new_streak``."""
    found: list[Achievement] = []
    for threshold in sorted(thresholds):
        if old_streak < threshold <= new_streak:
            milestone = streak_milestone(threshold)
            found.append(
                Achievement(
                    id=streak_id(threshold),
                    name=milestone.name,
                    description=milestone.description,
                    icon=milestone.icon,
                    threshold=threshold,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.STREAK,
                )
            )
    return found


# ── Speed ─────────────────────────────────────────────────────────────────────

def speed_milestones(cfg: AchievementConfig) -> tuple[SpeedMilestone, ...]:
    return (
        SpeedMilestone(cfg.speed_short_count, cfg.speed_short_days, "Speed Explorer", "⚡"),
        SpeedMilestone(cfg.speed_long_count, cfg.speed_long_days, "Rapid Discoverer", "🚀"),
    )


def detect_speed_achievements(
    old_progress: list[ProgressEntry],
    new_progress: list[ProgressEntry],
    cfg:          AchievementConfig,
    *,
    unlocked_at: datetime,
) -> list[Achievement]:
    if len(new_progress) <= len(old_progress) or not new_progress:
        return []

    timestamps = [p.first_tried_at for p in new_progress]
    elapsed = days_between(min(timestamps), max(timestamps))

    found: list[Achievement] = []
    for milestone in speed_milestones(cfg):
        if len(new_progress) >= milestone.count and elapsed <= milestone.days:
            found.append(
                Achievement(
                    id=milestone.achievement_id,
                    name=milestone.name,
                    description=milestone.description,
                    icon=milestone.icon,
                    threshold=milestone.count,
                    unlocked_at=unlocked_at,
                    kind=AchievementKind.SPEED,
                )
            )
    return found

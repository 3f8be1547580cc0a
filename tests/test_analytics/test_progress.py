"""
Tests for cuisine_tracker/analytics/progress.py.

What we test
------------
aggregate():
  - 3 of 10 tried -> 30%, next goal 5 with 2 remaining.
  - Empty catalog and empty progress produce zeros, never errors.
  - Progress for cuisines outside the catalog does not count as tried.
  - Adding an entry never lowers tried count or percentage.

diversity_score() / consistency_bonus():
  - Follows the weighted formula on a hand-computed example.
  - Consistency counter resets after a long gap and caps at 1.

next_goal() / progress_goals():
  - Fixed table first, then multiples of 25.

completion_percentage(), recent_activity(), format_progress_text().
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cuisine_tracker.analytics.catalog import CatalogIndex
from cuisine_tracker.analytics.progress import (
    aggregate,
    completion_percentage,
    consistency_bonus,
    diversity_metrics,
    diversity_score,
    format_progress_text,
    next_goal,
    progress_goals,
    recent_activity,
)
from cuisine_tracker.config import AppConfig, StreakConfig
from cuisine_tracker.models.cuisine import ProgressEntry


def _entry(cuisine_id: int, when: datetime) -> ProgressEntry:
    return ProgressEntry(user_id="u1", cuisine_id=cuisine_id, first_tried_at=when)


def _days(start: datetime, *offsets: int) -> list[ProgressEntry]:
    return [_entry(i + 1, start + timedelta(days=d)) for i, d in enumerate(offsets)]


_START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestAggregate:
    def test_three_of_ten(self, catalog, progress, today):
        stats = aggregate(progress, catalog, today=today)
        assert stats.total_cuisines == 10
        assert stats.tried_cuisines == 3
        assert stats.percentage == 30
        assert stats.next_goal.goal == 5
        assert stats.next_goal.remaining == 2
        assert stats.monthly_progress == 3

    def test_diversity_matches_hand_computation(self, catalog, progress, today):
        # categories 2/2, progress 3/10, depth (0.4 + 0.2) / 2, consistency 3/6
        # 0.4*1 + 0.3*0.3 + 0.2*0.3 + 0.1*0.5 = 0.60
        assert aggregate(progress, catalog, today=today).diversity_score == 60

    def test_current_streak_uses_gap_allowance(self, catalog, progress, today):
        # 2 days, 9 days, 16 days ago: 2 <= 7, 9 <= 8 fails
        assert aggregate(progress, catalog, today=today).current_streak == 1

    def test_gap_allowance_from_config(self, catalog, progress, today):
        cfg = AppConfig(streaks=StreakConfig(day_gap_allowance_days=14))
        # 2 <= 14, 9 <= 15, 16 <= 16
        assert aggregate(progress, catalog, today=today, config=cfg).current_streak == 3

    def test_empty_catalog(self, progress, today):
        stats = aggregate(progress, [], today=today)
        assert stats.total_cuisines == 0
        assert stats.tried_cuisines == 0
        assert stats.percentage == 0
        assert stats.diversity_score == 0

    def test_empty_progress(self, catalog, today):
        stats = aggregate([], catalog, today=today)
        assert stats.tried_cuisines == 0
        assert stats.percentage == 0
        assert stats.diversity_score == 0
        assert stats.current_streak == 0
        assert stats.monthly_progress == 0
        assert stats.next_goal.goal == 5
        assert stats.next_goal.remaining == 5

    def test_unknown_cuisine_not_counted(self, catalog, progress, today):
        extra = progress + [_entry(99, datetime(2026, 3, 17, tzinfo=timezone.utc))]
        assert aggregate(extra, catalog, today=today).tried_cuisines == 3

    def test_adding_entry_never_lowers_counts(self, catalog, progress, today):
        before = aggregate(progress, catalog, today=today)
        more = progress + [_entry(7, datetime(2026, 3, 17, tzinfo=timezone.utc))]
        after = aggregate(more, catalog, today=today)
        assert after.tried_cuisines == before.tried_cuisines + 1
        assert after.percentage >= before.percentage

    def test_new_category_raises_category_diversity(self, catalog, progress):
        european_only = progress[:2]
        before = diversity_metrics(european_only, catalog)
        after = diversity_metrics(european_only + [progress[2]], catalog)
        assert (before.tried_categories, after.tried_categories) == (1, 2)
        assert after.score >= before.score

    def test_same_category_keeps_category_diversity(self, catalog, progress):
        before = diversity_metrics(progress, catalog)
        more = progress + [_entry(7, datetime(2026, 3, 17, tzinfo=timezone.utc))]
        after = diversity_metrics(more, catalog)
        assert after.tried_categories == before.tried_categories == 2
        assert all(
            after.category_coverage[name] >= pct for name, pct in before.category_coverage.items()
        )

    def test_all_tried_is_100_percent(self, catalog, today):
        everything = _days(_START, *range(10))
        stats = aggregate(everything, catalog, today=today)
        assert stats.percentage == 100
        assert stats.diversity_score <= 100
        assert stats.next_goal.goal == 20


class TestCompletionPercentage:
    @pytest.mark.parametrize(
        "tried, total, expected",
        [(0, 0, 0), (0, 10, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (10, 10, 100)],
    )
    def test_rounding(self, tried, total, expected):
        assert completion_percentage(tried, total) == expected

    def test_clamped_to_100(self):
        assert completion_percentage(12, 10) == 100


class TestDiversity:
    def test_zero_for_empty_catalog(self, progress):
        assert diversity_score(progress, CatalogIndex.build([])) == 0

    def test_within_bounds(self, catalog):
        score = diversity_score(_days(_START, *range(10)), CatalogIndex.build(catalog))
        assert 0 <= score <= 100

    def test_metrics(self, catalog, progress):
        m = diversity_metrics(progress, catalog)
        assert m.score == 60
        assert m.category_coverage == {"Asian": 20, "European": 40}
        assert m.total_categories == 2
        assert m.tried_categories == 2


class TestConsistencyBonus:
    def test_fewer_than_two_entries(self):
        assert consistency_bonus([]) == 0.0
        assert consistency_bonus(_days(_START, 0)) == 0.0

    def test_long_gap_resets_counter(self):
        # (0,10) run 1 -> total 1; (10,100) reset -> total 1
        assert consistency_bonus(_days(_START, 0, 10, 100)) == pytest.approx(1 / 6)

    def test_input_order_irrelevant(self):
        entries = _days(_START, 0, 10, 100)
        assert consistency_bonus(list(reversed(entries))) == consistency_bonus(entries)

    def test_capped_at_one(self):
        # 7 daily entries: 1+2+...+6 = 21 > 14
        assert consistency_bonus(_days(_START, *range(7))) == 1.0

    def test_custom_window(self):
        assert consistency_bonus(_days(_START, 0, 10), max_gap_days=5) == 0.0


class TestGoals:
    @pytest.mark.parametrize(
        "tried, goal, remaining",
        [
            (0, 5, 5),
            (4, 5, 1),
            (5, 10, 5),
            (49, 50, 1),
            (99, 100, 1),
            (100, 125, 25),
            (130, 150, 20),
        ],
    )
    def test_next_goal(self, tried, goal, remaining):
        ng = next_goal(tried)
        assert (ng.goal, ng.remaining) == (goal, remaining)

    def test_progress_goals_flags(self):
        statuses = progress_goals(10)
        assert [s.goal.threshold for s in statuses] == [5, 10, 20, 50, 100]
        assert [s.achieved for s in statuses] == [True, True, False, False, False]


class TestDisplayHelpers:
    def test_recent_activity_newest_first(self, progress):
        assert [p.cuisine_id for p in recent_activity(progress, limit=2)] == [6, 2]

    def test_recent_activity_non_positive_limit(self, progress):
        assert recent_activity(progress, limit=0) == []

    def test_format_progress_text(self):
        assert format_progress_text(3, 10) == "3 of 10 cuisines explored (30%)"
        assert format_progress_text(0, 0) == "No cuisines available"

    def test_today_default_does_not_raise(self, catalog, progress):
        assert aggregate(progress, catalog).total_cuisines == 10

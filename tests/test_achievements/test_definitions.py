"""Tests for the static goal / achievement tables and id builders."""

from __future__ import annotations

from cuisine_tracker.achievements.definitions import (
    CUISINE_GOALS,
    STREAK_MILESTONES,
    SpeedMilestone,
    category_complete_id,
    category_first_id,
    category_half_id,
    milestone_id,
    streak_id,
    streak_milestone,
)
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory


class TestGoalTable:
    def test_thresholds_ascending(self):
        thresholds = [g.threshold for g in CUISINE_GOALS]
        assert thresholds == sorted(thresholds)
        assert thresholds == [5, 10, 20, 50, 100]

    def test_names(self):
        assert [g.name for g in CUISINE_GOALS][:2] == ["Explorer", "Adventurer"]


class TestIds:
    def test_milestone_and_streak(self):
        assert milestone_id(10) == "cuisine_10"
        assert streak_id(30) == "streak_30"

    def test_category_ids_use_slug(self):
        cat = CuisineCategory.LATIN_AMERICAN
        assert category_first_id(cat) == "category_first_latin_american"
        assert category_half_id(cat) == "category_half_latin_american"
        assert category_complete_id(cat) == "category_complete_latin_american"

    def test_speed_id_and_description(self):
        m = SpeedMilestone(10, 30, "Speed Explorer", "⚡")
        assert m.achievement_id == "speed_10_30"
        assert m.description == "10 cuisines in 30 days!"


class TestStreakMilestone:
    def test_known_thresholds(self):
        assert set(STREAK_MILESTONES) == {7, 30, 90, 365}
        assert streak_milestone(7).name == "Week Warrior"

    def test_unknown_threshold_is_generic(self):
        m = streak_milestone(12)
        assert m.threshold == 12
        assert "12" in m.description

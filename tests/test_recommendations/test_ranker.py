"""
Tests for cuisine_tracker/recommendations/ranker.py.

What we test
------------
predict_next():
  - Never returns a cuisine already in progress.
  - Returns at most ``limit`` cuisines; default limit comes from config.
  - Non-positive limit and fully explored catalog return [].
  - Same seed -> same output.

score_candidates():
  - Sorted by unrounded score descending, ties by id.
  - Scores rounded to 4 places and within [0, 1].
  - Untouched categories outrank well-explored ones when jitter is off.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from cuisine_tracker.config import AppConfig, RecommendationConfig
from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.recommendations.ranker import make_rng, predict_next, score_candidates
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

_WHEN = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class _FixedRandom(random.Random):
    """Hands out a fixed sequence of jitter values."""

    def __init__(self, values: list[float]) -> None:
        super().__init__(0)
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)


def _all_tried(catalog) -> list[ProgressEntry]:
    return [ProgressEntry(user_id="u1", cuisine_id=c.id, first_tried_at=_WHEN) for c in catalog]


class TestPredictNext:
    def test_excludes_tried(self, catalog, progress):
        tried = {p.cuisine_id for p in progress}
        result = predict_next(progress, catalog, limit=10, rng=random.Random(1))
        assert len(result) == 7
        assert not tried & {c.id for c in result}

    @pytest.mark.parametrize("limit", [1, 3, 7])
    def test_limit_caps_result(self, catalog, progress, limit):
        assert len(predict_next(progress, catalog, limit, rng=random.Random(1))) == limit

    def test_default_limit(self, catalog, progress):
        assert len(predict_next(progress, catalog, rng=random.Random(1))) == 5

    def test_default_limit_from_config(self, catalog, progress):
        cfg = AppConfig(recommendations=RecommendationConfig(default_limit=2))
        assert len(predict_next(progress, catalog, rng=random.Random(1), config=cfg)) == 2

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, catalog, progress, limit):
        assert predict_next(progress, catalog, limit, rng=random.Random(1)) == []

    def test_fully_explored(self, catalog):
        assert predict_next(_all_tried(catalog), catalog, 5, rng=random.Random(1)) == []

    def test_empty_catalog(self, progress):
        assert predict_next(progress, [], 5, rng=random.Random(1)) == []

    def test_same_seed_is_deterministic(self, catalog, progress):
        a = predict_next(progress, catalog, 5, rng=random.Random(42))
        b = predict_next(progress, catalog, 5, rng=random.Random(42))
        assert [c.id for c in a] == [c.id for c in b]

    def test_catalog_order_does_not_change_seeded_result(self, catalog, progress):
        a = predict_next(progress, catalog, 5, rng=random.Random(42))
        b = predict_next(progress, list(reversed(catalog)), 5, rng=random.Random(42))
        assert [c.id for c in a] == [c.id for c in b]

    def test_seed_from_config(self, catalog, progress):
        cfg = AppConfig(recommendations=RecommendationConfig(random_seed=5))
        a = predict_next(progress, catalog, 5, config=cfg)
        b = predict_next(progress, catalog, 5, config=cfg)
        assert [c.id for c in a] == [c.id for c in b]


class TestScoreCandidates:
    def test_sorted_by_score_desc(self, catalog, progress):
        scored = score_candidates(progress, catalog, rng=random.Random(3))
        scores = [s.score for s in scored]
        assert scores == sorted(scores, reverse=True)

    def test_ordering_uses_unrounded_total(self):
        # Totals 0.31 and 0.310004 both round to 0.31; the larger still ranks first
        catalog = [
            Cuisine(id=1, name="Basque", category=CuisineCategory.EUROPEAN),
            Cuisine(id=2, name="Catalan", category=CuisineCategory.EUROPEAN),
        ]
        scored = score_candidates([], catalog, rng=_FixedRandom([0.1, 0.10004]))
        assert [s.cuisine.id for s in scored] == [2, 1]
        assert scored[0].score == scored[1].score == pytest.approx(0.31)

    def test_scores_rounded_and_bounded(self, catalog, progress):
        for s in score_candidates(progress, catalog, rng=random.Random(3)):
            assert 0.0 <= s.score <= 1.0
            assert s.score == round(s.score, 4)
            assert s.reasoning

    def test_new_category_preferred_without_jitter(self, catalog):
        cfg = AppConfig(
            recommendations=RecommendationConfig(
                category_weight=0.0,
                diversity_weight=1.0,
                country_weight=0.0,
                exploration_weight=0.0,
            )
        )
        # Four European entries, no Asian: every Asian candidate has diversity 1.0
        progress = [
            ProgressEntry(user_id="u1", cuisine_id=i, first_tried_at=_WHEN) for i in (1, 2, 3, 4)
        ]
        scored = score_candidates(progress, catalog, rng=random.Random(0), config=cfg)
        assert [s.cuisine.id for s in scored] == [6, 7, 8, 9, 10, 5]
        assert scored[-1].score == pytest.approx(0.2)

    def test_make_rng_uses_seed(self):
        cfg = RecommendationConfig(random_seed=9)
        assert make_rng(cfg).random() == random.Random(9).random()

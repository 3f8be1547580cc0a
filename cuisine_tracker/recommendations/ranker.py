"""
Recommendation ranker: scores every untried cuisine and returns the best N.

Usage flow
----------
1. score_candidates(progress, catalog, rng=rng)
   -> list[ScoredCuisine]  (one per untried catalog cuisine, best first)

2. predict_next(progress, catalog, limit=5, rng=rng)
   -> list[Cuisine]        (first ``limit`` of the above)

Ordering is score descending, ties broken by cuisine id ascending. With the
same seeded ``rng`` the output is fully deterministic; without one, a fresh
time-seeded generator is used and near-tied candidates may swap between
calls.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from cuisine_tracker.analytics.catalog import CatalogIndex
from cuisine_tracker.config import AppConfig, RecommendationConfig
from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.recommendations.scorer import (
    ScoreComponents,
    build_profile,
    build_reasoning,
    score_cuisine,
)

logger = logging.getLogger(__name__)


@dataclass
class ScoredCuisine:
    """An untried cuisine with its score breakdown.

    Attributes:
        cuisine:    The candidate.
        score:      Weighted total (0–1), rounded to 4 places.
        components: Detailed score breakdown.
        reasoning:  Human-readable explanation string.
    """

    cuisine:    Cuisine
    score:      float
    components: ScoreComponents
    reasoning:  str


def make_rng(cfg: RecommendationConfig) -> random.Random:
    """Generator seeded from ``cfg.random_seed``, or from system entropy if unset."""
    return random.Random(cfg.random_seed)


def score_candidates(
    progress: list[ProgressEntry],
    catalog:  list[Cuisine],
    *,
    rng:    Optional[random.Random] = None,
    config: Optional[AppConfig] = None,
) -> list[ScoredCuisine]:
    """Score every catalog cuisine absent from ``progress``, best first.

    Candidates are scored in catalog-id order so that a seeded ``rng`` assigns
    the same jitter to the same cuisine regardless of input ordering.
    """
    cfg = (config or AppConfig()).recommendations
    generator = rng if rng is not None else make_rng(cfg)
    index = CatalogIndex.build(catalog)

    tried_ids = {p.cuisine_id for p in progress}
    candidates = sorted(
        (c for c in index.by_id.values() if c.id not in tried_ids),
        key=lambda c: c.id,
    )
    if not candidates:
        return []

    profile = build_profile(progress, index, cfg)

    ranked: list[tuple[float, ScoredCuisine]] = []
    for cuisine in candidates:
        components = score_cuisine(cuisine, profile, generator)
        total = components.total(cfg)
        ranked.append(
            (
                total,
                ScoredCuisine(
                    cuisine=cuisine,
                    score=round(total, 4),
                    components=components,
                    reasoning=build_reasoning(cuisine, components),
                ),
            )
        )

    # Order on the unrounded total; the rounded score is for display only.
    ranked.sort(key=lambda pair: (-pair[0], pair[1].cuisine.id))
    return [s for _, s in ranked]


def predict_next(
    progress: list[ProgressEntry],
    catalog:  list[Cuisine],
    limit:    Optional[int] = None,
    *,
    rng:    Optional[random.Random] = None,
    config: Optional[AppConfig] = None,
) -> list[Cuisine]:
    """Return at most ``limit`` untried cuisines ranked best-first.

    Args:
        progress: User progress snapshot.
        catalog:  Full cuisine catalog.
        limit:    Max results (default ``RecommendationConfig.default_limit``).
        rng:      Jitter generator; pass a seeded one for deterministic output.
        config:   Application config; defaults to ``AppConfig()``.

    Returns:
        Up to ``limit`` cuisines, none of which appear in ``progress``.
    """
    cfg = config or AppConfig()
    n = cfg.recommendations.default_limit if limit is None else limit
    if n <= 0:
        return []

    ranked = score_candidates(progress, catalog, rng=rng, config=cfg)[:n]
    logger.debug(
        "Recommended %d of %d candidate(s): %s",
        len(ranked),
        len(catalog),
        ", ".join(s.cuisine.name for s in ranked),
    )
    return [s.cuisine for s in ranked]

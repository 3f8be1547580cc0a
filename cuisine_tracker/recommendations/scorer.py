"""
Recommendation scoring: turns a user's history into per-candidate scores.

Score formula (weighted sum, range 0–1)
---------------------------------------
    total = (
        category_preference * 0.4   # how much the user likes this category
        + diversity_bonus   * 0.3   # pressure toward under-explored categories
        + country_affinity  * 0.2   # recent interest in the origin country
        + exploration       * 0.1   # seeded random jitter for variety
    )

The weights come from ``RecommendationConfig`` and must sum to 1.0.

Component explanations
----------------------
category_preference (0–1):
    Per category:
      frequency = entries in category / max entries in any category
      rating    = (mean rating − 1) / 4, floored at 0, where mean rating is
                  the rating sum over every entry in the category (3 if
                  none are rated)
      preference = 0.6 * frequency + 0.4 * rating
    Categories the user has never tried score 0.

diversity_bonus (0–1):
    1 / (1 + entries already tried in the candidate's category).
    An untouched category gives 1.0.

country_affinity (0–1):
    Origin-country counts over the ``recent_window`` most recent entries,
    normalised by the largest count. Candidates without an origin country,
    or from a country not seen recently, score 0.

exploration (0–1):
    ``rng.random()``. The generator is always injected by the caller; pass a
    seeded ``random.Random`` for reproducible rankings.
"""

from __future__ import annotations

import random
from collections import Counter, defaultdict
from dataclasses import dataclass

from cuisine_tracker.analytics.catalog import CatalogIndex
from cuisine_tracker.config import RecommendationConfig
from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

NEUTRAL_RATING = 3.0


@dataclass
class ScoreComponents:
    """All components of one candidate's recommendation score.

    Attributes:
        category_preference: 0–1, frequency + rating preference for the category.
        diversity_bonus:     0–1, favours categories with few tries so far.
        country_affinity:    0–1, recent interest in the origin country.
        exploration:         0–1, random jitter.
        category_tries:      Entries already tried in this category.
    """

    category_preference: float
    diversity_bonus:     float
    country_affinity:    float
    exploration:         float
    category_tries:      int

    def total(self, cfg: RecommendationConfig) -> float:
        """Weighted total score in [0, 1]."""
        return (
            self.category_preference * cfg.category_weight
            + self.diversity_bonus   * cfg.diversity_weight
            + self.country_affinity  * cfg.country_weight
            + self.exploration       * cfg.exploration_weight
        )


@dataclass(frozen=True)
class PreferenceProfile:
    """Everything learned from the user's history that scoring needs.

    Attributes:
        category_preference: Category -> preference score (0–1).
        category_tries:      Category -> number of tried entries.
        country_affinity:    Origin country -> normalised recent affinity (0–1).
    """

    category_preference: dict[CuisineCategory, float]
    category_tries:      dict[CuisineCategory, int]
    country_affinity:    dict[str, float]


def build_profile(
    progress: list[ProgressEntry],
    index:    CatalogIndex,
    cfg:      RecommendationConfig,
) -> PreferenceProfile:
    """Derive category preferences and country affinity from ``progress``.

    Entries whose cuisine cannot be resolved are skipped.
    """
    tries: dict[CuisineCategory, int] = defaultdict(int)
    rating_totals: dict[CuisineCategory, int] = defaultdict(int)

    for entry in progress:
        category = index.category_of(entry)
        if category is None:
            continue
        tries[category] += 1
        if entry.rating is not None:
            rating_totals[category] += entry.rating

    preferences: dict[CuisineCategory, float] = {}
    max_count = max(tries.values(), default=0)
    for category, count in tries.items():
        # Unrated visits count toward the mean; a category with no ratings is neutral.
        total_rating = rating_totals.get(category, 0)
        mean_rating = total_rating / count if total_rating else NEUTRAL_RATING
        frequency_score = count / max_count if max_count else 0.0
        rating_score = max(0.0, (mean_rating - 1) / 4)
        preferences[category] = (
            frequency_score * cfg.frequency_share
            + rating_score * (1.0 - cfg.frequency_share)
        )

    return PreferenceProfile(
        category_preference=preferences,
        category_tries=dict(tries),
        country_affinity=country_affinity(progress, index, window=cfg.recent_window),
    )


def country_affinity(
    progress: list[ProgressEntry],
    index:    CatalogIndex,
    *,
    window: int = 10,
) -> dict[str, float]:
    """Origin-country counts over the ``window`` most recent entries, max-normalised."""
    recent = sorted(progress, key=lambda p: p.first_tried_at, reverse=True)[:window]

    counts: Counter[str] = Counter()
    for entry in recent:
        cuisine = index.resolve(entry)
        if cuisine is not None and cuisine.origin_country:
            counts[cuisine.origin_country] += 1

    max_count = max(counts.values(), default=0)
    if max_count == 0:
        return {}
    return {country: n / max_count for country, n in counts.items()}


def score_cuisine(
    cuisine: Cuisine,
    profile: PreferenceProfile,
    rng:     random.Random,
) -> ScoreComponents:
    """Score one untried candidate against the user's profile."""
    tries = profile.category_tries.get(cuisine.category, 0)
    affinity = 0.0
    if cuisine.origin_country:
        affinity = profile.country_affinity.get(cuisine.origin_country, 0.0)

    return ScoreComponents(
        category_preference=profile.category_preference.get(cuisine.category, 0.0),
        diversity_bonus=1.0 / (1 + tries),
        country_affinity=affinity,
        exploration=rng.random(),
        category_tries=tries,
    )


def build_reasoning(cuisine: Cuisine, components: ScoreComponents) -> str:
    """Assemble a short human-readable explanation, e.g.

        "New category for you: Asian; Matches your recent interest in Japan"
    """
    reasons: list[str] = []
    category = cuisine.category.value

    if components.category_tries == 0:
        reasons.append(f"New category for you: {category}")
    elif components.category_preference >= 0.7:
        reasons.append(f"You rate {category} cuisines highly")
    elif components.diversity_bonus >= 0.5:
        reasons.append(f"Only {components.category_tries} {category} cuisine tried so far")

    if components.country_affinity >= 0.5 and cuisine.origin_country:
        reasons.append(f"Matches your recent interest in {cuisine.origin_country}")

    return "; ".join(reasons) or "Something different to explore"

"""
Read-only catalog index.

``CatalogIndex.build(catalog)`` is called once per computation pass. It maps
cuisine ids to records and groups the catalog by ``CuisineCategory``; the
progress, achievement and recommendation modules resolve a ``ProgressEntry``
to its cuisine through ``resolve()``.

Resolution order for an entry: its joined ``cuisine`` back-reference, then
the catalog record with the same id. Entries that resolve to nothing are
treated as absent by every consumer (they never count toward a category).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Literal, Optional

from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.models.stats import CategoryProgress
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

logger = logging.getLogger(__name__)

FilterStatus = Literal["all", "tried", "untried"]


@dataclass(frozen=True)
class CatalogIndex:
    """Id lookup and category grouping for one catalog snapshot.

    Attributes:
        by_id:        Cuisine id -> Cuisine.
        by_category:  Category -> cuisines in that category, sorted by name.
    """

    by_id: dict[int, Cuisine] = field(default_factory=dict)
    by_category: dict[CuisineCategory, list[Cuisine]] = field(default_factory=dict)

    @classmethod
    def build(cls, catalog: Iterable[Cuisine]) -> "CatalogIndex":
        by_id: dict[int, Cuisine] = {}
        grouped: dict[CuisineCategory, list[Cuisine]] = defaultdict(list)
        for cuisine in catalog:
            if cuisine.id in by_id:
                logger.warning("Duplicate cuisine id %d in catalog; keeping first.", cuisine.id)
                continue
            by_id[cuisine.id] = cuisine
            grouped[cuisine.category].append(cuisine)

        by_category = {
            cat: sorted(items, key=lambda c: c.name.lower())
            for cat, items in sorted(grouped.items(), key=lambda kv: kv[0].value)
        }
        return cls(by_id=by_id, by_category=by_category)

    # ── Lookup ───────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, cuisine_id: object) -> bool:
        return cuisine_id in self.by_id

    @property
    def categories(self) -> list[CuisineCategory]:
        """Categories present in the catalog, ordered by display name."""
        return list(self.by_category)

    def category_size(self, category: CuisineCategory) -> int:
        return len(self.by_category.get(category, ()))

    def resolve(self, entry: ProgressEntry) -> Optional[Cuisine]:
        """The cuisine ``entry`` refers to, or ``None`` if unknown."""
        if entry.cuisine is not None:
            return entry.cuisine
        return self.by_id.get(entry.cuisine_id)

    def category_of(self, entry: ProgressEntry) -> Optional[CuisineCategory]:
        cuisine = self.resolve(entry)
        return cuisine.category if cuisine is not None else None

    # ── Progress views ───────────────────────────────────────────────────────

    def tried_ids(self, progress: Iterable[ProgressEntry]) -> set[int]:
        """Distinct tried cuisine ids that exist in this catalog."""
        return {p.cuisine_id for p in progress if p.cuisine_id in self.by_id}

    def tried_counts(self, progress: Iterable[ProgressEntry]) -> dict[CuisineCategory, int]:
        """Distinct tried catalog cuisines per category (missing key = 0)."""
        counts: dict[CuisineCategory, int] = defaultdict(int)
        for cuisine_id in self.tried_ids(progress):
            counts[self.by_id[cuisine_id].category] += 1
        return dict(counts)

    def group_progress(self, progress: Iterable[ProgressEntry]) -> list[CategoryProgress]:
        """One ``CategoryProgress`` per catalog category, ordered by name."""
        counts = self.tried_counts(progress)
        return [
            CategoryProgress(
                category=cat,
                cuisines=cuisines,
                tried_count=counts.get(cat, 0),
            )
            for cat, cuisines in self.by_category.items()
        ]


# ── Catalog helpers ───────────────────────────────────────────────────────────

def search_cuisines(catalog: list[Cuisine], query: str) -> list[Cuisine]:
    """Case-insensitive substring search over name, category, country and description.

    A blank query returns ``catalog`` unchanged.
    """
    term = query.strip().lower()
    if not term:
        return catalog

    def _matches(c: Cuisine) -> bool:
        fields = (c.name, c.category.value, c.origin_country or "", c.description or "")
        return any(term in f.lower() for f in fields)

    return [c for c in catalog if _matches(c)]


def filter_cuisines(
    catalog:  list[Cuisine],
    progress: list[ProgressEntry],
    status:   FilterStatus = "all",
) -> list[Cuisine]:
    """Keep all, only tried, or only untried catalog cuisines (catalog order)."""
    if status == "all":
        return catalog
    tried = {p.cuisine_id for p in progress}
    if status == "tried":
        return [c for c in catalog if c.id in tried]
    return [c for c in catalog if c.id not in tried]

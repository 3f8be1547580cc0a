"""
Shared pytest fixtures for the Cuisine Tracker test suite.

Provides:
  - ``catalog``: ten cuisines split evenly across European and Asian.
  - ``progress``: three tried cuisines (two European, one Asian).
  - ``today``: fixed reference date so that streak, trend and achievement
    tests never depend on the wall clock.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

import pytest

from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

UTC = timezone.utc


def _dt(year: int, month: int, day: int, hour: int = 12) -> datetime:
    """Aware UTC datetime at ``hour`` o'clock."""
    return datetime(year, month, day, hour, 0, tzinfo=UTC)


def _entry(
    cuisine_id: int,
    when: datetime,
    *,
    user_id: str = "u1",
    rating: Optional[int] = None,
    times_tried: int = 1,
    cuisine: Optional[Cuisine] = None,
) -> ProgressEntry:
    return ProgressEntry(
        user_id=user_id,
        cuisine_id=cuisine_id,
        first_tried_at=when,
        times_tried=times_tried,
        rating=rating,
        cuisine=cuisine,
    )


_CATALOG_ROWS = [
    (1,  "Italian",    CuisineCategory.EUROPEAN, "Italy"),
    (2,  "French",     CuisineCategory.EUROPEAN, "France"),
    (3,  "Spanish",    CuisineCategory.EUROPEAN, "Spain"),
    (4,  "Greek",      CuisineCategory.EUROPEAN, "Greece"),
    (5,  "German",     CuisineCategory.EUROPEAN, "Germany"),
    (6,  "Japanese",   CuisineCategory.ASIAN,    "Japan"),
    (7,  "Thai",       CuisineCategory.ASIAN,    "Thailand"),
    (8,  "Korean",     CuisineCategory.ASIAN,    "South Korea"),
    (9,  "Indian",     CuisineCategory.ASIAN,    "India"),
    (10, "Vietnamese", CuisineCategory.ASIAN,    "Vietnam"),
]


@pytest.fixture
def catalog() -> list[Cuisine]:
    """Ten-cuisine catalog: ids 1-5 European, ids 6-10 Asian."""
    return [
        Cuisine(id=cid, name=name, category=cat, origin_country=country)
        for cid, name, cat, country in _CATALOG_ROWS
    ]


@pytest.fixture
def progress() -> list[ProgressEntry]:
    """Italian and French (rated), then Japanese (unrated), all in March 2026."""
    return [
        _entry(1, _dt(2026, 3, 2), rating=5),
        _entry(2, _dt(2026, 3, 9), rating=3),
        _entry(6, _dt(2026, 3, 16)),
    ]


@pytest.fixture
def today() -> date:
    """Wednesday 2026-03-18. Its Sunday-based week starts on 2026-03-15."""
    return date(2026, 3, 18)

"""
Catalog and progress models.

``Cuisine`` is an immutable catalog entry seeded outside this package. The
engine never creates or edits cuisines; it only groups and scores them.

``ProgressEntry`` records one user's history with one cuisine. There is at
most one entry per ``(user_id, cuisine_id)`` pair: repeat visits increment
``times_tried`` rather than adding rows (see
``cuisine_tracker.analytics.events.record_try``).

Timestamps
----------
``first_tried_at`` is normalised to an aware datetime. Naive values are taken
to be UTC so that ordering and day arithmetic inside the engine never mixes
naive and aware datetimes. Callers are still responsible for supplying all
timestamps in one consistent zone.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

MIN_RATING = 1
MAX_RATING = 5


class Cuisine(BaseModel):
    """A cuisine in the shared catalog.

    Attributes:
        id: Stable catalog identifier (positive integer).
        name: Display name, unique within the catalog.
        category: Closed regional grouping.
        origin_country: Country the cuisine comes from, if known.
        description: Optional free-form blurb.
        emoji: Optional display glyph.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    category: CuisineCategory
    origin_country: Optional[str] = None
    description: Optional[str] = None
    emoji: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Cuisine id must be a positive integer, got {v}.")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Cuisine name must be non-empty.")
        return v.strip()

    @field_validator("origin_country")
    @classmethod
    def blank_country_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ProgressEntry(BaseModel):
    """One user's tried-history for one cuisine.

    Attributes:
        user_id: Owner of this entry.
        cuisine_id: FK to ``Cuisine.id``.
        first_tried_at: When the cuisine was first tried (aware datetime).
        times_tried: Number of recorded tries, at least 1.
        favorite_restaurant: Venue note, if any.
        rating: How much the user liked it, 1-5; ``None`` when unrated.
        notes: Free-form note.
        cuisine: Optional joined catalog record, for convenience.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    cuisine_id: int
    first_tried_at: datetime
    times_tried: int = 1
    favorite_restaurant: Optional[str] = None
    rating: Optional[int] = None
    notes: Optional[str] = None
    cuisine: Optional[Cuisine] = None

    @field_validator("first_tried_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("times_tried")
    @classmethod
    def validate_times_tried(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"times_tried must be >= 1, got {v}.")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}, got {v}."
            )
        return v

    @property
    def tried_on(self) -> date:
        """Calendar date of ``first_tried_at``."""
        return self.first_tried_at.date()

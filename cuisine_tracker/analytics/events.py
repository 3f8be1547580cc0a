"""
Apply a "tried" event to a progress snapshot.

``record_try()`` returns a NEW list and never mutates its input, so the caller
can keep the pre-mutation snapshot and pass both to
``cuisine_tracker.achievements.detector.detect()``::

    old = progress
    new = record_try(old, user_id="u1", cuisine=thai, tried_at=now, rating=5)
    unlocked = detect(old, new, catalog)

A first try creates an entry with ``times_tried=1``. Repeat tries increment
``times_tried`` and overwrite ``rating`` / ``favorite_restaurant`` / ``notes``
only when new values are supplied; ``first_tried_at`` is never moved.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from cuisine_tracker.models.cuisine import MAX_RATING, MIN_RATING, Cuisine, ProgressEntry

logger = logging.getLogger(__name__)


def record_try(
    progress: list[ProgressEntry],
    *,
    user_id:             str,
    cuisine:             Cuisine,
    tried_at:            datetime,
    rating:              Optional[int] = None,
    favorite_restaurant: Optional[str] = None,
    notes:               Optional[str] = None,
) -> list[ProgressEntry]:
    """Return ``progress`` with one more try of ``cuisine`` by ``user_id``.

    Args:
        progress:            Current snapshot (left untouched).
        user_id:             User recording the try.
        cuisine:             Catalog cuisine that was tried.
        tried_at:            When it was tried.
        rating:              Optional 1-5 rating.
        favorite_restaurant: Optional venue note.
        notes:               Optional free-form note.

    Returns:
        New snapshot, preserving the order of existing entries; a new entry
        is appended at the end.

    Raises:
        ValueError: If ``rating`` is outside 1-5.
    """
    if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}.")

    updated: list[ProgressEntry] = []
    found = False
    for entry in progress:
        if entry.user_id == user_id and entry.cuisine_id == cuisine.id and not found:
            found = True
            changes: dict = {"times_tried": entry.times_tried + 1}
            if rating is not None:
                changes["rating"] = rating
            if favorite_restaurant is not None:
                changes["favorite_restaurant"] = favorite_restaurant
            if notes is not None:
                changes["notes"] = notes
            updated.append(entry.model_copy(update=changes))
        else:
            updated.append(entry)

    if not found:
        updated.append(
            ProgressEntry(
                user_id=user_id,
                cuisine_id=cuisine.id,
                first_tried_at=tried_at,
                times_tried=1,
                favorite_restaurant=favorite_restaurant,
                rating=rating,
                notes=notes,
                cuisine=cuisine,
            )
        )
        logger.debug("User %s tried cuisine %d for the first time.", user_id, cuisine.id)
    return updated

"""
Snapshot loader: JSON file → validated catalog / progress models.

File format
-----------
Both files hold a JSON array of objects whose keys match the model fields::

    catalog.json   [{"id": 1, "name": "Thai", "category": "Asian",
                     "origin_country": "Thailand"}, ...]
    progress.json  [{"user_id": "u1", "cuisine_id": 1,
                     "first_tried_at": "2026-03-01T19:30:00Z",
                     "times_tried": 2, "rating": 5}, ...]

Validation rules
----------------
- The top-level value must be a JSON array.
- Each record must validate against ``Cuisine`` / ``ProgressEntry``.
- Duplicate catalog ids and duplicate catalog names are rejected.
- Duplicate ``(user_id, cuisine_id)`` progress pairs are rejected.

All failures raise ``SnapshotError`` naming the file and record index.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry

log = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """A snapshot file could not be read or failed validation."""


def _read_array(path: Path) -> list[Any]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno}).") from exc

    if not isinstance(raw, list):
        raise SnapshotError(f"{path}: expected a JSON array, got {type(raw).__name__}.")
    return raw


def parse_catalog(records: list[Any], source: str = "<catalog>") -> list[Cuisine]:
    """Validate raw catalog records; raise ``SnapshotError`` on the first problem."""
    cuisines: list[Cuisine] = []
    seen_ids: set[int] = set()
    seen_names: set[str] = set()
    for i, rec in enumerate(records):
        try:
            cuisine = Cuisine.model_validate(rec)
        except ValidationError as exc:
            raise SnapshotError(f"{source}: cuisine at index {i} is invalid: {exc}") from exc
        if cuisine.id in seen_ids:
            raise SnapshotError(f"{source}: duplicate cuisine id {cuisine.id} at index {i}.")
        key = cuisine.name.lower()
        if key in seen_names:
            raise SnapshotError(f"{source}: duplicate cuisine name '{cuisine.name}' at index {i}.")
        seen_ids.add(cuisine.id)
        seen_names.add(key)
        cuisines.append(cuisine)
    return cuisines


def parse_progress(records: list[Any], source: str = "<progress>") -> list[ProgressEntry]:
    """Validate raw progress records; raise ``SnapshotError`` on the first problem."""
    entries: list[ProgressEntry] = []
    seen: set[tuple[str, int]] = set()
    for i, rec in enumerate(records):
        try:
            entry = ProgressEntry.model_validate(rec)
        except ValidationError as exc:
            raise SnapshotError(f"{source}: progress entry at index {i} is invalid: {exc}") from exc
        key = (entry.user_id, entry.cuisine_id)
        if key in seen:
            raise SnapshotError(
                f"{source}: duplicate (user_id, cuisine_id) pair {key} at index {i}."
            )
        seen.add(key)
        entries.append(entry)
    return entries


def load_catalog(path: Path) -> list[Cuisine]:
    """Load and validate a catalog JSON file."""
    cuisines = parse_catalog(_read_array(path), source=str(path))
    log.info("Loaded %d cuisine(s) from %s", len(cuisines), path)
    return cuisines


def load_progress(path: Path) -> list[ProgressEntry]:
    """Load and validate a progress JSON file."""
    entries = parse_progress(_read_array(path), source=str(path))
    log.info("Loaded %d progress entr(ies) from %s", len(entries), path)
    return entries

"""
Export helpers for manual analysis.

All writers create parent directories and return the written ``Path``.
``write_report()`` picks CSV or JSON from the file suffix; CSV exports are
flat (no nested dicts) so they load directly in a spreadsheet.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from cuisine_tracker.recommendations.ranker import ScoredCuisine


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: Any, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Pydantic models (and lists of them) are dumped in JSON mode first.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_jsonable(data), indent=2, default=str), encoding="utf-8")
    return path


def to_jsonable(data: Any) -> Any:
    """Recursively convert pydantic models to plain JSON-compatible values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {k: to_jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(v) for v in data]
    return data


def flatten_recommendations(scored: list[ScoredCuisine]) -> list[dict]:
    """One flat row per recommendation, score components as separate columns."""
    rows: list[dict] = []
    for rank, s in enumerate(scored, start=1):
        comps = s.components
        rows.append(
            {
                "rank":                   rank,
                "cuisine_id":             s.cuisine.id,
                "name":                   s.cuisine.name,
                "category":               s.cuisine.category.value,
                "origin_country":         s.cuisine.origin_country or "",
                "score":                  s.score,
                "sc_category_preference": round(comps.category_preference, 4),
                "sc_diversity_bonus":     round(comps.diversity_bonus, 4),
                "sc_country_affinity":    round(comps.country_affinity, 4),
                "sc_exploration":         round(comps.exploration, 4),
                "reasoning":              s.reasoning,
            }
        )
    return rows


def write_report(data: Any, path: Path) -> Path:
    """Write ``data`` as CSV when ``path`` ends in ``.csv``, else as JSON.

    CSV output expects a list of flat dicts (see ``flatten_recommendations``).
    """
    if path.suffix.lower() == ".csv":
        if not isinstance(data, list):
            raise ValueError("CSV export needs a list of rows.")
        return export_to_csv([to_jsonable(r) for r in data], path)
    return export_to_json(data, path)

"""Tests for cuisine_tracker.reporting.export."""

from __future__ import annotations

import csv
import json
import random
from pathlib import Path

import pytest

from cuisine_tracker.analytics.progress import aggregate
from cuisine_tracker.recommendations.ranker import score_candidates
from cuisine_tracker.reporting.export import (
    export_to_csv,
    export_to_json,
    flatten_recommendations,
    to_jsonable,
    write_report,
)


# ── export_to_csv ─────────────────────────────────────────────────────────────


def test_export_to_csv_basic(tmp_path: Path) -> None:
    records = [{"name": "Thai", "score": 0.72}, {"name": "Korean", "score": 0.51}]
    out = tmp_path / "sub" / "test.csv"
    assert export_to_csv(records, out) == out

    with out.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["name"] for r in rows] == ["Thai", "Korean"]


def test_export_to_csv_empty(tmp_path: Path) -> None:
    out = export_to_csv([], tmp_path / "empty.csv")
    assert out.read_text(encoding="utf-8") == ""


def test_export_to_csv_fieldnames(tmp_path: Path) -> None:
    out = export_to_csv([{"a": 1, "b": 2}], tmp_path / "x.csv", fieldnames=["b"])
    assert out.read_text(encoding="utf-8").splitlines()[0] == "b"


# ── JSON ──────────────────────────────────────────────────────────────────────


def test_to_jsonable_dumps_models(catalog, progress, today) -> None:
    data = to_jsonable({"stats": aggregate(progress, catalog, today=today), "n": [1]})
    assert data["stats"]["percentage"] == 30
    assert data["stats"]["next_goal"] == {"goal": 5, "remaining": 2}
    assert data["n"] == [1]


def test_export_to_json_roundtrip(tmp_path: Path, catalog) -> None:
    out = export_to_json(catalog[:2], tmp_path / "catalog.json")
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded[0]["name"] == "Italian"
    assert loaded[0]["category"] == "European"


# ── recommendations ───────────────────────────────────────────────────────────


def test_flatten_recommendations(catalog, progress) -> None:
    rows = flatten_recommendations(score_candidates(progress, catalog, rng=random.Random(1))[:2])
    assert [r["rank"] for r in rows] == [1, 2]
    assert {"cuisine_id", "score", "sc_diversity_bonus", "reasoning"} <= set(rows[0])


def test_write_report_picks_format(tmp_path: Path, catalog, progress) -> None:
    rows = flatten_recommendations(score_candidates(progress, catalog, rng=random.Random(1)))
    csv_out = write_report(rows, tmp_path / "recs.csv")
    json_out = write_report(rows, tmp_path / "recs.json")
    assert csv_out.read_text(encoding="utf-8").startswith("rank,cuisine_id")
    assert len(json.loads(json_out.read_text(encoding="utf-8"))) == 7


def test_write_report_csv_needs_rows(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="list of rows"):
        write_report({"a": 1}, tmp_path / "x.csv")

"""Tests for Cuisine / ProgressEntry validation."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from cuisine_tracker.models.cuisine import Cuisine, ProgressEntry
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory


class TestCuisine:
    def test_valid_construction(self):
        c = Cuisine(id=1, name="Thai", category=CuisineCategory.ASIAN, origin_country="Thailand")
        assert c.category is CuisineCategory.ASIAN
        assert c.description is None

    def test_category_coerced_from_string(self):
        c = Cuisine(id=1, name="Thai", category="Asian")
        assert c.category is CuisineCategory.ASIAN

    def test_unknown_category_raises(self):
        with pytest.raises(ValidationError):
            Cuisine(id=1, name="Smorgasbord", category="Nordic")

    @pytest.mark.parametrize("bad_id", [0, -3])
    def test_non_positive_id_raises(self, bad_id):
        with pytest.raises(ValidationError, match="positive"):
            Cuisine(id=bad_id, name="Thai", category="Asian")

    def test_blank_name_raises(self):
        with pytest.raises(ValidationError, match="non-empty"):
            Cuisine(id=1, name="   ", category="Asian")

    def test_name_is_stripped(self):
        assert Cuisine(id=1, name="  Thai ", category="Asian").name == "Thai"

    def test_blank_origin_country_becomes_none(self):
        assert Cuisine(id=1, name="Thai", category="Asian", origin_country=" ").origin_country is None

    def test_is_frozen(self):
        c = Cuisine(id=1, name="Thai", category="Asian")
        with pytest.raises(ValidationError):
            c.name = "Lao"


class TestProgressEntry:
    def _entry(self, **kwargs) -> ProgressEntry:
        defaults = dict(
            user_id="u1",
            cuisine_id=1,
            first_tried_at=datetime(2026, 3, 1, 19, 30, tzinfo=timezone.utc),
        )
        defaults.update(kwargs)
        return ProgressEntry(**defaults)

    def test_defaults(self):
        e = self._entry()
        assert e.times_tried == 1
        assert e.rating is None
        assert e.cuisine is None

    def test_naive_datetime_is_treated_as_utc(self):
        e = self._entry(first_tried_at=datetime(2026, 3, 1, 19, 30))
        assert e.first_tried_at.tzinfo is timezone.utc
        assert e.first_tried_at.hour == 19

    def test_aware_datetime_keeps_its_offset(self):
        plus_two = timezone(timedelta(hours=2))
        e = self._entry(first_tried_at=datetime(2026, 3, 1, 1, 0, tzinfo=plus_two))
        assert e.first_tried_at.utcoffset() == timedelta(hours=2)

    def test_iso_string_with_z_parses(self):
        e = self._entry(first_tried_at="2026-03-01T19:30:00Z")
        assert e.first_tried_at == datetime(2026, 3, 1, 19, 30, tzinfo=timezone.utc)

    def test_tried_on(self):
        assert self._entry().tried_on == date(2026, 3, 1)

    @pytest.mark.parametrize("rating", [1, 3, 5])
    def test_rating_in_range(self, rating):
        assert self._entry(rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range_raises(self, rating):
        with pytest.raises(ValidationError, match="rating"):
            self._entry(rating=rating)

    def test_times_tried_below_one_raises(self):
        with pytest.raises(ValidationError, match="times_tried"):
            self._entry(times_tried=0)

    def test_joined_cuisine(self):
        thai = Cuisine(id=1, name="Thai", category="Asian")
        assert self._entry(cuisine=thai).cuisine.name == "Thai"

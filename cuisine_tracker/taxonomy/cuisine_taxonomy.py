"""
Cuisine category taxonomy.

Every catalog entry belongs to exactly one ``CuisineCategory``. The set is
closed: grouping, scoring and achievement code iterate over real enum members
so a misspelled category string can never open a new bucket. Records are
validated at the model boundary (``Cuisine.category``); code that handles
loosely-typed input should go through ``parse_category()``, which returns
``None`` for anything it does not recognise.

``category_slug()`` produces the lowercase key embedded in achievement ids::

    category_slug(CuisineCategory.LATIN_AMERICAN)  # "latin_american"

This module has NO imports from any other ``cuisine_tracker`` package.
"""

import re
from enum import StrEnum
from typing import Optional


class CuisineCategory(StrEnum):
    """Regional grouping for catalog cuisines."""

    EUROPEAN = "European"
    """Italian, French, Spanish, German, Greek, British, Nordic."""

    ASIAN = "Asian"
    """Chinese, Japanese, Korean, Thai, Indian, Vietnamese, Filipino."""

    AFRICAN = "African"
    """Ethiopian, Moroccan, Nigerian, South African."""

    LATIN_AMERICAN = "Latin American"
    """Mexican, Peruvian, Brazilian, Argentinian, Caribbean."""

    AMERICAN = "American"
    """Regional North American styles: Southern, Cajun, Tex-Mex, BBQ."""

    MIDDLE_EASTERN = "Middle Eastern"
    """Lebanese, Turkish, Persian, Israeli."""

    MEDITERRANEAN = "Mediterranean"
    """Pan-Mediterranean styles that do not sit cleanly in one region."""


_SLUG_RE = re.compile(r"\s+")

_LOOKUP: dict[str, CuisineCategory] = {c.value.lower(): c for c in CuisineCategory}
_LOOKUP.update({c.name.lower(): c for c in CuisineCategory})


def parse_category(value: object) -> Optional[CuisineCategory]:
    """Return the ``CuisineCategory`` matching ``value``, or ``None``.

    Matching is case-insensitive and accepts either the display value
    (``"Latin American"``) or the member name (``"latin_american"``).
    Non-string input and unknown names yield ``None``.
    """
    if isinstance(value, CuisineCategory):
        return value
    if not isinstance(value, str):
        return None
    return _LOOKUP.get(value.strip().lower())


def category_slug(category: CuisineCategory) -> str:
    """Lowercase, underscore-joined key for ``category``."""
    return _SLUG_RE.sub("_", category.value.strip().lower())

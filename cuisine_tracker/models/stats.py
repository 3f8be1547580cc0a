"""
Derived analytics outputs.

Every model here is recomputed on each call from the caller's catalog and
progress snapshots; none of them is persisted by this package.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cuisine_tracker.models.cuisine import Cuisine
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory

WEEKS_PER_MONTH_BUCKETS = 4


class TrendDirection(StrEnum):
    """Month-over-month direction of new cuisines tried."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class NextGoal(BaseModel):
    """The next distinct-cuisine target and how far away it is."""

    model_config = ConfigDict(frozen=True)

    goal: int
    remaining: int = Field(ge=0)


class ProgressStats(BaseModel):
    """Aggregate progress snapshot.

    Attributes:
        total_cuisines: Catalog size.
        tried_cuisines: Distinct catalog cuisines the user has tried.
        percentage: ``tried / total`` as a rounded 0-100 integer.
        diversity_score: Weighted 0-100 breadth/depth/consistency score.
        current_streak: Day-granularity streak (with gap allowance).
        monthly_progress: Cuisines first tried this calendar month.
        next_goal: Next milestone target.
    """

    model_config = ConfigDict(frozen=True)

    total_cuisines: int = Field(ge=0)
    tried_cuisines: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)
    diversity_score: int = Field(ge=0, le=100)
    current_streak: int = Field(ge=0)
    monthly_progress: int = Field(ge=0)
    next_goal: NextGoal


class CategoryProgress(BaseModel):
    """Catalog cuisines of one category and how many of them were tried."""

    model_config = ConfigDict(frozen=True)

    category: CuisineCategory
    cuisines: list[Cuisine]
    tried_count: int = Field(ge=0)

    @property
    def size(self) -> int:
        return len(self.cuisines)

    @property
    def coverage(self) -> float:
        """Tried fraction of this category, 0.0-1.0."""
        if not self.cuisines:
            return 0.0
        return min(self.tried_count / len(self.cuisines), 1.0)


class DiversityMetrics(BaseModel):
    """Diversity score plus the per-category coverage behind it."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    category_coverage: dict[str, int]
    total_categories: int
    tried_categories: int


class MonthlyTrend(BaseModel):
    """This month vs last month, with a week-of-month breakdown."""

    model_config = ConfigDict(frozen=True)

    this_month: int = Field(ge=0)
    last_month: int = Field(ge=0)
    trend: TrendDirection
    weekly_breakdown: list[int]

    @field_validator("weekly_breakdown")
    @classmethod
    def validate_breakdown(cls, v: list[int]) -> list[int]:
        if len(v) != WEEKS_PER_MONTH_BUCKETS:
            raise ValueError(
                f"weekly_breakdown must have {WEEKS_PER_MONTH_BUCKETS} buckets, got {len(v)}."
            )
        return v


class StreakSummary(BaseModel):
    """Current and longest weekly streaks."""

    model_config = ConfigDict(frozen=True)

    current: int = Field(ge=0)
    longest: int = Field(ge=0)
    last_try_date: Optional[date] = None

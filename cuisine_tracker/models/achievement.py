"""
Achievement and goal models.

``ProgressGoal`` is a static milestone definition. The ordered goal table
lives in ``cuisine_tracker.achievements.definitions``.

``Achievement`` is a derived unlock. Its ``id`` is a pure function of the
trigger (``cuisine_10``, ``category_complete_asian``, ``streak_30``), so a
caller that persists granted ids can drop repeats without comparing any other
field. Achievements are never stored by this package.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class AchievementKind(StrEnum):
    """Which detector produced an achievement."""

    MILESTONE = "milestone"
    CATEGORY = "category"
    STREAK = "streak"
    SPEED = "speed"


class ProgressGoal(BaseModel):
    """A distinct-cuisine count milestone.

    Attributes:
        threshold: Number of distinct cuisines required.
        name: Badge name, e.g. ``"Explorer"``.
        description: One-line summary shown to the user.
        icon: Display glyph.
    """

    model_config = ConfigDict(frozen=True)

    threshold: int
    name: str
    description: str
    icon: str

    @field_validator("threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Goal threshold must be >= 1, got {v}.")
        return v


class GoalStatus(BaseModel):
    """A ``ProgressGoal`` paired with whether the user has reached it."""

    model_config = ConfigDict(frozen=True)

    goal: ProgressGoal
    achieved: bool


class Achievement(BaseModel):
    """A newly crossed achievement.

    Attributes:
        id: Deterministic key derived from the trigger.
        name: Badge name.
        description: One-line summary.
        icon: Display glyph.
        threshold: The numeric value that triggered it.
        unlocked_at: When the detector emitted it.
        kind: Detector family.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    threshold: int
    unlocked_at: datetime
    kind: AchievementKind

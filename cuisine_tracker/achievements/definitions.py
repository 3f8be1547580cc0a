"""
Static goal and achievement tables.

``CUISINE_GOALS`` is the fixed ascending milestone list. It drives both the
"next goal" shown in ``ProgressStats`` and the milestone achievements, so the
two can never disagree about thresholds.

Id scheme
---------
Achievement ids are built only from the trigger, never from time or user::

    cuisine_<threshold>            distinct-cuisine milestone
    first_cuisine                  first ever cuisine
    category_first_<slug>          first cuisine in a category
    category_half_<slug>           half of a category tried
    category_complete_<slug>       whole category tried
    streak_<weeks>                 consecutive-week streak
    speed_<count>_<days>           count cuisines within a day window
"""

from __future__ import annotations

from dataclasses import dataclass

from cuisine_tracker.models.achievement import ProgressGoal
from cuisine_tracker.taxonomy.cuisine_taxonomy import CuisineCategory, category_slug

CUISINE_GOALS: tuple[ProgressGoal, ...] = (
    ProgressGoal(threshold=5,   name="Explorer",      description="Try 5 different cuisines",   icon="🌟"),
    ProgressGoal(threshold=10,  name="Adventurer",    description="Try 10 different cuisines",  icon="🏆"),
    ProgressGoal(threshold=20,  name="Foodie",        description="Try 20 different cuisines",  icon="🎖️"),
    ProgressGoal(threshold=50,  name="Connoisseur",   description="Try 50 different cuisines",  icon="👑"),
    ProgressGoal(threshold=100, name="Global Palate", description="Try 100 different cuisines", icon="🌍"),
)

# Goals beyond the fixed table are synthesized at this step.
SYNTHETIC_GOAL_STEP = 25

FIRST_CUISINE_ID = "first_cuisine"


@dataclass(frozen=True)
class StreakMilestone:
    """A consecutive-week streak badge."""

    threshold: int
    name: str
    description: str
    icon: str


STREAK_MILESTONES: dict[int, StreakMilestone] = {
    7:   StreakMilestone(7,   "Week Warrior",       "Tried cuisines for 7 consecutive weeks!",  "🔥"),
    30:  StreakMilestone(30,  "Monthly Master",     "Kept exploring for 30 consecutive weeks!", "💪"),
    90:  StreakMilestone(90,  "Quarterly Champion", "90 consecutive weeks of exploration!",     "🏆"),
    365: StreakMilestone(365, "Year-Long Explorer", "365 consecutive weeks of culinary adventures!", "🌟"),
}


@dataclass(frozen=True)
class SpeedMilestone:
    """``count`` distinct cuisines within ``days`` of the first try."""

    count: int
    days: int
    name: str
    icon: str

    @property
    def achievement_id(self) -> str:
        return f"speed_{self.count}_{self.days}"

    @property
    def description(self) -> str:
        return f"{self.count} cuisines in {self.days} days!"


def milestone_id(threshold: int) -> str:
    return f"cuisine_{threshold}"


def streak_id(threshold: int) -> str:
    return f"streak_{threshold}"


def category_first_id(category: CuisineCategory) -> str:
    return f"category_first_{category_slug(category)}"


def category_half_id(category: CuisineCategory) -> str:
    return f"category_half_{category_slug(category)}"


def category_complete_id(category: CuisineCategory) -> str:
    return f"category_complete_{category_slug(category)}"


def streak_milestone(threshold: int) -> StreakMilestone:
    """Badge text for ``threshold``; thresholds outside the table get generic text."""
    known = STREAK_MILESTONES.get(threshold)
    if known is not None:
        return known
    return StreakMilestone(
        threshold,
        f"{threshold}-Week Streak",
        f"Tried cuisines for {threshold} consecutive weeks!",
        "🔥",
    )

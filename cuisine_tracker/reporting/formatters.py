"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept engine output models and return plain multi-line
strings suitable for ``typer.echo()``. No third-party dependencies.

Progress bars are drawn with ``#`` and ``.``::

  [##########..........]  50%
"""

from __future__ import annotations

from cuisine_tracker.models.achievement import Achievement, GoalStatus
from cuisine_tracker.models.stats import (
    DiversityMetrics,
    MonthlyTrend,
    ProgressStats,
    StreakSummary,
)
from cuisine_tracker.recommendations.ranker import ScoredCuisine

_BAR_WIDTH = 20


def format_bar(percent: int, width: int = _BAR_WIDTH) -> str:
    """Return ``[###...]`` for ``percent`` clamped to 0-100."""
    pct = max(0, min(100, percent))
    filled = round(width * pct / 100)
    return "[" + "#" * filled + "." * (width - filled) + f"] {pct:3d}%"


# ── Progress ──────────────────────────────────────────────────────────────────


def format_stats(
    stats:     ProgressStats,
    metrics:   DiversityMetrics | None = None,
    goals:     list[GoalStatus] | None = None,
) -> str:
    """Render the progress overview, optional category coverage and goal table."""
    lines = [
        "Progress",
        f"  Tried:           {stats.tried_cuisines} / {stats.total_cuisines}",
        f"  Completion:      {format_bar(stats.percentage)}",
        f"  Diversity score: {stats.diversity_score}",
        f"  Current streak:  {stats.current_streak}",
        f"  This month:      {stats.monthly_progress}",
        f"  Next goal:       {stats.next_goal.goal} "
        f"({stats.next_goal.remaining} to go)",
    ]

    if metrics is not None and metrics.category_coverage:
        lines.append("")
        lines.append(
            f"Category coverage ({metrics.tried_categories}/{metrics.total_categories} touched)"
        )
        width = max(len(name) for name in metrics.category_coverage)
        for name, pct in metrics.category_coverage.items():
            lines.append(f"  {name:<{width}}  {format_bar(pct)}")

    if goals:
        lines.append("")
        lines.append("Goals")
        for status in goals:
            mark = "x" if status.achieved else " "
            g = status.goal
            lines.append(f"  [{mark}] {g.threshold:>4}  {g.name}: {g.description}")

    return "\n".join(lines)


def format_streaks(summary: StreakSummary, day_streak: int, strict_streak: int) -> str:
    last = summary.last_try_date.isoformat() if summary.last_try_date else "never"
    return "\n".join([
        "Streaks",
        f"  Weekly (current): {summary.current}",
        f"  Weekly (longest): {summary.longest}",
        f"  Day (with gaps):  {day_streak}",
        f"  Day (strict):     {strict_streak}",
        f"  Last try:         {last}",
    ])


def format_trend(trend: MonthlyTrend) -> str:
    weeks = "  ".join(
        f"W{i + 1}:{n}" for i, n in enumerate(trend.weekly_breakdown)
    )
    return "\n".join([
        "Monthly trend",
        f"  This month: {trend.this_month}",
        f"  Last month: {trend.last_month}",
        f"  Direction:  {trend.trend.value}",
        f"  Weekly:     {weeks}",
    ])


# ── Recommendations / achievements ────────────────────────────────────────────


def format_recommendations(scored: list[ScoredCuisine]) -> str:
    """Rank-ordered table of recommended cuisines with score and reasoning."""
    if not scored:
        return "  No recommendations: every catalog cuisine has been tried."

    header = f"  {'#':>2}  {'Cuisine':<20} {'Category':<15} {'Score':>6}  Why"
    lines = ["Try next", header, "  " + "-" * (len(header) - 2)]
    for rank, s in enumerate(scored, start=1):
        lines.append(
            f"  {rank:>2}  {s.cuisine.name:<20.20} {s.cuisine.category.value:<15} "
            f"{s.score:>6.3f}  {s.reasoning}"
        )
    return "\n".join(lines)


def format_achievements(achievements: list[Achievement]) -> str:
    if not achievements:
        return "  No new achievements."
    lines = ["New achievements"]
    for a in achievements:
        lines.append(f"  {a.icon} {a.name} ({a.id}): {a.description}")
    return "\n".join(lines)

"""
Cuisine Tracker — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load catalog / progress snapshot files.
  4. Run the analytics engine.
  5. Report to stdout, optionally exporting with ``--output``.

Install and run::

    pip install -e .
    cuisine-tracker --help
    cuisine-tracker validate-config
    cuisine-tracker stats        --catalog catalog.json --progress progress.json
    cuisine-tracker streaks      --catalog catalog.json --progress progress.json
    cuisine-tracker trend        --catalog catalog.json --progress progress.json
    cuisine-tracker recommend    --catalog catalog.json --progress progress.json --limit 5 --seed 42
    cuisine-tracker achievements --catalog catalog.json --old-progress before.json --progress after.json
    cuisine-tracker try          --catalog catalog.json --progress progress.json --user u1 --cuisine-id 7
"""

from __future__ import annotations

import json
import random
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="cuisine-tracker",
    help="Cuisine exploration analytics — progress, streaks, achievements, recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from cuisine_tracker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from cuisine_tracker.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_snapshots_or_exit(catalog_path: str, progress_path: Optional[str]):
    """Load catalog and (optionally) progress files, exiting with code 1 on error."""
    from cuisine_tracker.ingestion.snapshot import SnapshotError, load_catalog, load_progress

    try:
        catalog = load_catalog(Path(catalog_path))
        progress = load_progress(Path(progress_path)) if progress_path else []
    except SnapshotError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    return catalog, progress


def _parse_today_or_exit(today: Optional[str]) -> Optional[date]:
    if today is None:
        return None
    try:
        return date.fromisoformat(today)
    except ValueError:
        typer.echo(f"[ERROR] --today must be YYYY-MM-DD, got '{today}'.", err=True)
        raise typer.Exit(code=1)


def _write_output(data, output: Optional[str]) -> None:
    if not output:
        return
    from cuisine_tracker.reporting.export import write_report

    try:
        path = write_report(data, Path(output))
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc} Use a .json output path for this command.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"  Written: {path}")


_CATALOG_OPT = typer.Option(..., "--catalog", help="Path to catalog JSON file.")
_PROGRESS_OPT = typer.Option(None, "--progress", help="Path to progress JSON file.")
_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_TODAY_OPT = typer.Option(None, "--today", help="Reference date YYYY-MM-DD (default: UTC today).")
_OUTPUT_OPT = typer.Option(None, "--output", "-o", help="Export result to .json (or .csv where supported).")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    rec = config.recommendations

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Day gap allowance:  {config.streaks.day_gap_allowance_days}d")
    typer.echo(f"  Consistency window: {config.streaks.consistency_gap_days}d")
    typer.echo(f"  Streak thresholds:  {', '.join(map(str, config.streaks.streak_thresholds))}")
    typer.echo(
        "  Recommender:        "
        f"category={rec.category_weight} diversity={rec.diversity_weight} "
        f"country={rec.country_weight} exploration={rec.exploration_weight}"
    )
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("stats")
def stats(
    catalog_path: str = _CATALOG_OPT,
    progress_path: Optional[str] = _PROGRESS_OPT,
    today: Optional[str] = _TODAY_OPT,
    output: Optional[str] = _OUTPUT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print progress stats, category coverage and the goal table."""
    from cuisine_tracker.analytics.progress import aggregate, diversity_metrics, progress_goals
    from cuisine_tracker.reporting.formatters import format_stats

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref = _parse_today_or_exit(today)
    catalog, progress = _load_snapshots_or_exit(catalog_path, progress_path)

    result = aggregate(progress, catalog, today=ref, config=config)
    metrics = diversity_metrics(progress, catalog, config=config)
    goals = progress_goals(result.tried_cuisines)

    typer.echo(format_stats(result, metrics, goals))
    _write_output({"stats": result, "diversity": metrics}, output)


@app.command("streaks")
def streaks(
    catalog_path: str = _CATALOG_OPT,
    progress_path: Optional[str] = _PROGRESS_OPT,
    today: Optional[str] = _TODAY_OPT,
    output: Optional[str] = _OUTPUT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print weekly, gap-tolerant daily and strict daily streaks."""
    from cuisine_tracker.analytics.streaks import day_streak, streak_summary, strict_day_streak
    from cuisine_tracker.reporting.formatters import format_streaks

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref = _parse_today_or_exit(today)
    _, progress = _load_snapshots_or_exit(catalog_path, progress_path)

    summary = streak_summary(progress, today=ref)
    days = day_streak(
        progress, today=ref, gap_allowance_days=config.streaks.day_gap_allowance_days
    )
    strict = strict_day_streak(progress, today=ref)

    typer.echo(format_streaks(summary, days, strict))
    _write_output(
        {"weekly": summary, "day_streak": days, "strict_day_streak": strict}, output
    )


@app.command("trend")
def trend(
    catalog_path: str = _CATALOG_OPT,
    progress_path: Optional[str] = _PROGRESS_OPT,
    today: Optional[str] = _TODAY_OPT,
    output: Optional[str] = _OUTPUT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print this month vs last month with a week-of-month breakdown."""
    from cuisine_tracker.analytics.trends import monthly_trend
    from cuisine_tracker.reporting.formatters import format_trend

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref = _parse_today_or_exit(today)
    _, progress = _load_snapshots_or_exit(catalog_path, progress_path)

    result = monthly_trend(progress, today=ref)
    typer.echo(format_trend(result))
    _write_output(result, output)


@app.command("recommend")
def recommend(
    catalog_path: str = _CATALOG_OPT,
    progress_path: Optional[str] = _PROGRESS_OPT,
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Max recommendations (default: config recommendations.default_limit).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the exploration jitter (default: config, else random).",
    ),
    output: Optional[str] = _OUTPUT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Rank untried cuisines and print the top N with reasoning.

    \b
    --output accepts .json (full breakdown) or .csv (one flat row per cuisine).
    """
    from cuisine_tracker.recommendations.ranker import make_rng, score_candidates
    from cuisine_tracker.reporting.export import flatten_recommendations
    from cuisine_tracker.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    catalog, progress = _load_snapshots_or_exit(catalog_path, progress_path)

    n = limit if limit is not None else config.recommendations.default_limit
    if n < 0:
        typer.echo("[ERROR] --limit must be >= 0.", err=True)
        raise typer.Exit(code=1)

    rng = random.Random(seed) if seed is not None else make_rng(config.recommendations)
    ranked = score_candidates(progress, catalog, rng=rng, config=config)[:n]

    typer.echo(format_recommendations(ranked))
    _write_output(flatten_recommendations(ranked), output)


@app.command("achievements")
def achievements(
    catalog_path: str = _CATALOG_OPT,
    old_progress_path: Optional[str] = typer.Option(
        None,
        "--old-progress",
        help="Progress JSON captured before the change (default: empty history).",
    ),
    progress_path: Optional[str] = _PROGRESS_OPT,
    granted: Optional[str] = typer.Option(
        None,
        "--granted",
        help="Comma-separated achievement ids already granted; these are not shown.",
    ),
    today: Optional[str] = _TODAY_OPT,
    output: Optional[str] = _OUTPUT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Diff two progress snapshots and print newly crossed achievements."""
    from cuisine_tracker.achievements.detector import detect, filter_unlocked
    from cuisine_tracker.ingestion.snapshot import SnapshotError, load_progress
    from cuisine_tracker.reporting.formatters import format_achievements

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref = _parse_today_or_exit(today)
    catalog, new_progress = _load_snapshots_or_exit(catalog_path, progress_path)

    old_progress = []
    if old_progress_path:
        try:
            old_progress = load_progress(Path(old_progress_path))
        except SnapshotError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)

    found = detect(old_progress, new_progress, catalog, today=ref, config=config)
    if granted:
        found = filter_unlocked(found, [g.strip() for g in granted.split(",") if g.strip()])

    typer.echo(format_achievements(found))
    _write_output(found, output)


@app.command("try")
def record(
    catalog_path: str = _CATALOG_OPT,
    progress_path: Optional[str] = _PROGRESS_OPT,
    user_id: str = typer.Option(..., "--user", help="User id recording the try."),
    cuisine_id: int = typer.Option(..., "--cuisine-id", help="Catalog id of the cuisine tried."),
    rating: Optional[int] = typer.Option(None, "--rating", help="Rating 1-5."),
    restaurant: Optional[str] = typer.Option(None, "--restaurant", help="Venue note."),
    today: Optional[str] = _TODAY_OPT,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the updated progress snapshot to this JSON file.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Apply one tried event and print the achievements it unlocks."""
    from cuisine_tracker.achievements.detector import detect
    from cuisine_tracker.analytics.events import record_try
    from cuisine_tracker.reporting.formatters import format_achievements

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    ref = _parse_today_or_exit(today)
    catalog, old_progress = _load_snapshots_or_exit(catalog_path, progress_path)

    cuisine = next((c for c in catalog if c.id == cuisine_id), None)
    if cuisine is None:
        typer.echo(f"[ERROR] Cuisine id {cuisine_id} is not in the catalog.", err=True)
        raise typer.Exit(code=1)

    tried_at = datetime.now(tz=timezone.utc)
    if ref is not None:
        tried_at = datetime(ref.year, ref.month, ref.day, 12, 0, tzinfo=timezone.utc)

    try:
        new_progress = record_try(
            old_progress,
            user_id=user_id,
            cuisine=cuisine,
            tried_at=tried_at,
            rating=rating,
            favorite_restaurant=restaurant,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    entry = next(p for p in new_progress if p.user_id == user_id and p.cuisine_id == cuisine_id)
    typer.echo(f"  {cuisine.name}: tried {entry.times_tried} time(s).")
    typer.echo(format_achievements(detect(old_progress, new_progress, catalog, today=ref, config=config)))

    if output:
        from cuisine_tracker.reporting.export import export_to_json

        snapshot = [p.model_dump(mode="json", exclude={"cuisine"}) for p in new_progress]
        path = export_to_json(snapshot, Path(output))
        typer.echo(f"  Written: {path}")


if __name__ == "__main__":
    app()

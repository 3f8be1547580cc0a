"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``CUISINE_TRACKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The application entry point builds one ``AppConfig`` and passes it to the
engine functions that take a ``config`` argument. There is no module-level
config instance; engine functions called without one fall back to
``AppConfig()``, which carries the built-in defaults.
"""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class StreakConfig(BaseModel):
    """Streak and consistency windows."""

    model_config = ConfigDict(frozen=True)

    day_gap_allowance_days: int = 7     # day streak tolerates gaps up to this
    consistency_gap_days: int = 30      # diversity consistency bonus window
    streak_thresholds: list[int] = [7, 30, 90, 365]

    @field_validator("day_gap_allowance_days", "consistency_gap_days")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Window must be >= 0 days, got {v}.")
        return v

    @field_validator("streak_thresholds")
    @classmethod
    def validate_thresholds(cls, v: list[int]) -> list[int]:
        if any(t < 1 for t in v):
            raise ValueError(f"Streak thresholds must be >= 1, got {v}.")
        return sorted(set(v))


class AchievementConfig(BaseModel):
    """Velocity ("speed") achievement windows."""

    model_config = ConfigDict(frozen=True)

    speed_short_count: int = 10
    speed_short_days: int = 30
    speed_long_count: int = 20
    speed_long_days: int = 60


class RecommendationConfig(BaseModel):
    """Weights and windows for the next-cuisine recommender.

    The four score weights must sum to 1.0 so that the total stays in [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    category_weight: float = 0.4
    diversity_weight: float = 0.3
    country_weight: float = 0.2
    exploration_weight: float = 0.1
    frequency_share: float = 0.6        # rest of the category preference is rating
    recent_window: int = 10
    default_limit: int = 5
    random_seed: Optional[int] = None

    @field_validator("frequency_share")
    @classmethod
    def validate_share(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"frequency_share must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("recent_window", "default_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_weights(self) -> "RecommendationConfig":
        weights = (
            self.category_weight,
            self.diversity_weight,
            self.country_weight,
            self.exploration_weight,
        )
        if any(w < 0 for w in weights):
            raise ValueError(f"Recommendation weights must be non-negative, got {weights}.")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-6):
            raise ValueError(
                f"Recommendation weights must sum to 1.0, got {sum(weights):.3f}."
            )
        return self


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    streaks: StreakConfig = StreakConfig()
    achievements: AchievementConfig = AchievementConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply CUISINE_TRACKER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply CUISINE_TRACKER_* env vars to the raw config dict.

    Supported overrides:
      CUISINE_TRACKER_LOG_LEVEL    → raw["logging"]["level"]
      CUISINE_TRACKER_DEBUG        → raw["debug"]
      CUISINE_TRACKER_RANDOM_SEED  → raw["recommendations"]["random_seed"]
    """
    if log_level := os.environ.get("CUISINE_TRACKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("CUISINE_TRACKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    if seed := os.environ.get("CUISINE_TRACKER_RANDOM_SEED"):
        raw.setdefault("recommendations", {})["random_seed"] = int(seed)

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        streaks=StreakConfig(**raw.get("streaks", {})),
        achievements=AchievementConfig(**raw.get("achievements", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )

"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``SOURCE_VALUATION_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Configuration governs the outer layers only (logging, report output,
takeaway selection). The scoring engine takes no configuration: its
weights and threshold rules are fixed.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/source_valuation.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class ReportConfig(BaseModel):
    """Report output settings."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"
    top_n_per_quadrant: int = 5
    default_label: str = "sources"

    @field_validator("top_n_per_quadrant")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n_per_quadrant must be >= 1, got {v}.")
        return v


class TakeawayConfig(BaseModel):
    """Key-takeaway selection parameters."""

    model_config = ConfigDict(frozen=True)

    dominant_share: float = 0.40   # quadrant share above which it "dominates"
    max_takeaways: int = 4

    @field_validator("dominant_share")
    @classmethod
    def validate_dominant_share(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"dominant_share must be in (0.0, 1.0), got {v}.")
        return v

    @field_validator("max_takeaways")
    @classmethod
    def validate_max_takeaways(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_takeaways must be >= 1, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    report: ReportConfig = ReportConfig()
    takeaways: TakeawayConfig = TakeawayConfig()
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
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists() and local_config_path != config_path:
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply SOURCE_VALUATION_* environment variable overrides
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
    """Apply SOURCE_VALUATION_* env vars to the raw config dict.

    Supported overrides:
      SOURCE_VALUATION_LOG_LEVEL   → raw["logging"]["level"]
      SOURCE_VALUATION_OUTPUT_DIR  → raw["report"]["output_dir"]
      SOURCE_VALUATION_DEBUG       → raw["debug"]
    """
    if log_level := os.environ.get("SOURCE_VALUATION_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("SOURCE_VALUATION_OUTPUT_DIR"):
        raw.setdefault("report", {})["output_dir"] = output_dir

    if debug := os.environ.get("SOURCE_VALUATION_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        report=ReportConfig(**raw.get("report", {})),
        takeaways=TakeawayConfig(**raw.get("takeaways", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )

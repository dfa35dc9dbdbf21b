"""
Configuration for the diplomatic risk dashboard.

Layers, lowest precedence first:

    config/default.toml    committed defaults
    config/local.toml      machine-specific overrides, optional, gitignored
    .env                   loaded into the environment (never overrides it)
    DIPLO_RISK_* vars      see ``_ENV_OVERRIDES``

``load_config()`` returns one frozen ``AppConfig`` which is passed explicitly
to the orchestrator, settings store and CLI commands.

API keys are not configuration.  They belong to the settings store
(``diplo_risk.settings``), which falls back to ``NEWSAPI_KEY`` and
``OPENWEATHER_API_KEY`` from the environment.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from diplo_risk.taxonomy.regions import DEFAULT_REGION, SUPPORTED_REGIONS

# ── Sub-config models ─────────────────────────────────────────────────────────


class RegionsConfig(BaseModel):
    """Region used when the settings store has no region saved."""

    model_config = ConfigDict(frozen=True)

    default_region: str = DEFAULT_REGION

    @field_validator("default_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        if v not in SUPPORTED_REGIONS:
            raise ValueError(
                f"Unknown region '{v}'. Must be one of {sorted(SUPPORTED_REGIONS)}."
            )
        return v


class AcquisitionConfig(BaseModel):
    """HTTP acquisition parameters for the news, economic and weather sources."""

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = 10.0
    news_base_url: str = "https://newsapi.org/v2/everything"
    news_query_template: str = "{country} politics conflict diplomacy"
    news_page_size: int = 8
    news_language: str = "en"
    demo_news: bool = False
    worldbank_base_url: str = "https://api.worldbank.org/v2"
    worldbank_indicator: str = "NY.GDP.MKTP.CD"
    worldbank_date_range: str = "2020:2024"
    worldbank_per_page: int = 5
    weather_base_url: str = "https://api.openweathermap.org/data/2.5/weather"

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {v}.")
        return v

    @field_validator("news_page_size", "worldbank_per_page")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"page sizes must be >= 1, got {v}.")
        return v


class SeriesConfig(BaseModel):
    """Synthetic chart series settings.

    ``random_seed`` makes the fallback economic trend and the series wobble
    reproducible; leave unset for a fresh draw each run.
    """

    model_config = ConfigDict(frozen=True)

    point_count: int = 5
    wobble_amplitude: float = 0.4
    checkpoint_interval_days: int = 7
    random_seed: Optional[int] = None

    @field_validator("point_count", "checkpoint_interval_days")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}.")
        return v

    @field_validator("wobble_amplitude")
    @classmethod
    def validate_wobble(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"wobble_amplitude must be >= 0, got {v}.")
        return v


class DataConfig(BaseModel):
    """Filesystem paths for persisted settings and exported snapshots."""

    model_config = ConfigDict(frozen=True)

    settings_file: str = "data/settings.json"
    outputs_dir: str = "data/outputs"


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


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    ``AppConfig()`` with no arguments gives the committed defaults, which is
    what the tests use.
    """

    model_config = ConfigDict(frozen=True)

    regions: RegionsConfig = RegionsConfig()
    acquisition: AcquisitionConfig = AcquisitionConfig()
    series: SeriesConfig = SeriesConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

# env var → (section, field); a ``None`` section means a top-level field
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str]] = {
    "DIPLO_RISK_REGION": ("regions", "default_region"),
    "DIPLO_RISK_SETTINGS_FILE": ("data", "settings_file"),
    "DIPLO_RISK_LOG_LEVEL": ("logging", "level"),
    "DIPLO_RISK_DEBUG": (None, "debug"),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _find_project_root(start: Optional[Path] = None) -> Path:
    """First ancestor of ``start`` (default: this package) holding pyproject.toml."""
    here = (start or Path(__file__)).resolve()
    for candidate in here.parents:
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return Path(__file__).resolve().parent.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the ``AppConfig`` for this process.

    Args:
        config_path: TOML file to start from.  ``None`` means
            ``<project_root>/config/default.toml``.  A ``local.toml`` next to
            it, when present, is merged on top.

    Raises:
        FileNotFoundError: ``config_path`` does not exist.
        pydantic.ValidationError: A merged value is invalid (e.g. an
            unknown ``DIPLO_RISK_REGION``).
    """
    root = _find_project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Pass --config or restore config/default.toml."
        )

    raw = _read_toml(path)
    local = path.with_name("local.toml")
    if local.is_file():
        raw = _deep_merge(raw, _read_toml(local))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``override``; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay the ``DIPLO_RISK_*`` variables listed in ``_ENV_OVERRIDES``."""
    for var, (section, field) in _ENV_OVERRIDES.items():
        value: Any = os.environ.get(var)
        if not value:
            continue
        if field == "debug":
            value = value.strip().lower() in _TRUTHY
        target = raw if section is None else raw.setdefault(section, {})
        target[field] = value
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Validate the merged dict.  ``[project].debug`` is honoured when no top-level ``debug``."""
    sections = {name: raw.get(name, {}) for name in ("regions", "acquisition", "series", "data", "logging")}
    debug = raw.get("debug", raw.get("project", {}).get("debug", False))
    return AppConfig.model_validate({**sections, "debug": debug})

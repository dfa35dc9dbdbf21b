"""
Persisted user settings: API credentials and the selected region.

This is the only state that survives between runs.  Two implementations of
the ``SettingsStore`` protocol are provided:

  JsonSettingsStore    — one JSON object on disk (default ``data/settings.json``)
  MemorySettingsStore  — dict-backed, for tests and one-off runs

Keys:
  ``newsapi``      NewsAPI key ("" = not set)
  ``openweather``  OpenWeather key ("" = not set)
  ``region``       One of ``SUPPORTED_REGIONS``

Writing an unknown region raises ``ConfigurationInvalid`` and leaves the
stored region untouched.  Credentials are whitespace-stripped on write.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict

from diplo_risk.config import AppConfig
from diplo_risk.errors import ConfigurationInvalid
from diplo_risk.taxonomy.regions import DEFAULT_REGION, SUPPORTED_REGIONS

logger = logging.getLogger(__name__)

CREDENTIAL_KEYS = frozenset({"newsapi", "openweather"})
SETTINGS_KEYS = CREDENTIAL_KEYS | {"region"}

# Environment fallbacks for credentials (typically set via .env)
CREDENTIAL_ENV_VARS: dict[str, str] = {
    "newsapi": "NEWSAPI_KEY",
    "openweather": "OPENWEATHER_API_KEY",
}


class SettingsStore(Protocol):
    """Get/set access to persisted settings."""

    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...


class DashboardSettings(BaseModel):
    """Resolved settings for one run (store values merged with env fallbacks)."""

    model_config = ConfigDict(frozen=True)

    newsapi_key: str = ""
    openweather_key: str = ""
    region: str = DEFAULT_REGION


def _validate_write(key: str, value: str) -> str:
    if key not in SETTINGS_KEYS:
        raise ConfigurationInvalid(
            f"Unknown settings key '{key}'. Must be one of {sorted(SETTINGS_KEYS)}.",
            key=key,
            value=value,
        )
    value = (value or "").strip()
    if key == "region" and value not in SUPPORTED_REGIONS:
        raise ConfigurationInvalid(
            f"Unknown region '{value}'. Must be one of {sorted(SUPPORTED_REGIONS)}.",
            key=key,
            value=value,
        )
    return value


class MemorySettingsStore:
    """In-memory settings store.

    Args:
        default_region: Returned for ``region`` until one is written.
        initial:        Optional starting values (validated like writes).
    """

    def __init__(
        self,
        default_region: str = DEFAULT_REGION,
        initial: Optional[dict[str, str]] = None,
    ) -> None:
        self.default_region = default_region
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> str:
        if key == "region":
            return self._values.get("region") or self.default_region
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        self._values[key] = _validate_write(key, value)


class JsonSettingsStore:
    """Settings persisted as a single JSON object.

    The file is read on every ``get`` and rewritten on every ``set``, so two
    CLI invocations never see stale values.  A missing or corrupt file reads
    as empty; a corrupt file is logged and replaced on the next write.
    """

    def __init__(self, path: Path, default_region: str = DEFAULT_REGION) -> None:
        self.path = Path(path)
        self.default_region = default_region

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return {}
        return {k: str(v) for k, v in data.items() if k in SETTINGS_KEYS and v is not None}

    def get(self, key: str) -> str:
        values = self._read()
        if key == "region":
            region = values.get("region", "")
            return region if region in SUPPORTED_REGIONS else self.default_region
        return values.get(key, "")

    def set(self, key: str, value: str) -> None:
        clean = _validate_write(key, value)
        values = self._read()
        values[key] = clean
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, indent=2), encoding="utf-8")
        logger.info("Settings updated: %s", key)


def open_settings_store(config: AppConfig) -> JsonSettingsStore:
    """Return the persisted store configured in ``config.data.settings_file``."""
    return JsonSettingsStore(
        Path(config.data.settings_file),
        default_region=config.regions.default_region,
    )


def resolve_settings(store: SettingsStore) -> DashboardSettings:
    """Read the store, falling back to environment variables for credentials."""
    return DashboardSettings(
        newsapi_key=store.get("newsapi") or os.environ.get(CREDENTIAL_ENV_VARS["newsapi"], ""),
        openweather_key=(
            store.get("openweather") or os.environ.get(CREDENTIAL_ENV_VARS["openweather"], "")
        ),
        region=store.get("region"),
    )


def mask_secret(value: str) -> str:
    """``"abcdef123456"`` -> ``"abcd…3456"``; short or empty values are fully hidden."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…{value[-4:]}"

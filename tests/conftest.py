"""
Shared pytest fixtures for the diplomatic risk test suite.

Provides:
  - ``app_config``: default ``AppConfig`` (no TOML, no env).
  - ``settings``:   ``DashboardSettings`` with both keys set, West Africa.
  - ``rng``:        seeded ``random.Random`` for deterministic draws.

Test doubles and sample data live in ``tests/helpers.py``.
"""

from __future__ import annotations

import random

import pytest

from diplo_risk.config import AppConfig
from diplo_risk.settings.store import DashboardSettings


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def settings() -> DashboardSettings:
    return DashboardSettings(
        newsapi_key="news-test-key",
        openweather_key="weather-test-key",
        region="West Africa",
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)

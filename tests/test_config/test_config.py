"""
Tests for diplo_risk/config.py.

What we test
------------
  - AppConfig() defaults match config/default.toml.
  - load_config() reads an explicit TOML file and merges local.toml.
  - DIPLO_RISK_* environment overrides win over TOML.
  - Validators reject bad regions, timeouts, page sizes and log levels.
  - Missing config file → FileNotFoundError.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from diplo_risk.config import (
    AcquisitionConfig,
    AppConfig,
    LoggingConfig,
    RegionsConfig,
    SeriesConfig,
    load_config,
)

_TOML = """
[regions]
default_region = "East Africa"

[acquisition]
timeout_seconds = 3.5
demo_news = true

[series]
point_count = 7
random_seed = 42

[logging]
level = "debug"
"""

_ENV_VARS = (
    "DIPLO_RISK_REGION",
    "DIPLO_RISK_SETTINGS_FILE",
    "DIPLO_RISK_LOG_LEVEL",
    "DIPLO_RISK_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text(_TOML, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.regions.default_region == "West Africa"
        assert cfg.acquisition.timeout_seconds == 10.0
        assert cfg.acquisition.news_page_size == 8
        assert cfg.series.point_count == 5
        assert cfg.series.wobble_amplitude == 0.4
        assert cfg.series.random_seed is None
        assert cfg.debug is False

    def test_committed_default_toml_loads(self):
        cfg = load_config()
        assert cfg.regions.default_region == "West Africa"
        assert cfg.acquisition.worldbank_indicator == "NY.GDP.MKTP.CD"


class TestLoadConfig:
    def test_explicit_file(self, config_file):
        cfg = load_config(config_file)
        assert cfg.regions.default_region == "East Africa"
        assert cfg.acquisition.timeout_seconds == 3.5
        assert cfg.acquisition.demo_news is True
        assert cfg.series.point_count == 7
        assert cfg.series.random_seed == 42
        assert cfg.logging.level == "DEBUG"
        # untouched sections keep defaults
        assert cfg.acquisition.news_page_size == 8

    def test_local_toml_overrides(self, config_file):
        (config_file.parent / "local.toml").write_text(
            "[series]\npoint_count = 3\n", encoding="utf-8"
        )
        cfg = load_config(config_file)
        assert cfg.series.point_count == 3
        assert cfg.series.random_seed == 42

    def test_env_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("DIPLO_RISK_REGION", "Central Africa")
        monkeypatch.setenv("DIPLO_RISK_SETTINGS_FILE", "/tmp/s.json")
        monkeypatch.setenv("DIPLO_RISK_LOG_LEVEL", "warning")
        monkeypatch.setenv("DIPLO_RISK_DEBUG", "yes")
        cfg = load_config(config_file)
        assert cfg.regions.default_region == "Central Africa"
        assert cfg.data.settings_file == "/tmp/s.json"
        assert cfg.logging.level == "WARNING"
        assert cfg.debug is True

    def test_env_region_is_validated(self, config_file, monkeypatch):
        monkeypatch.setenv("DIPLO_RISK_REGION", "Atlantis")
        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestValidators:
    def test_unknown_region(self):
        with pytest.raises(ValidationError):
            RegionsConfig(default_region="North Africa")

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_timeout_must_be_positive(self, timeout):
        with pytest.raises(ValidationError):
            AcquisitionConfig(timeout_seconds=timeout)

    def test_page_size(self):
        with pytest.raises(ValidationError):
            AcquisitionConfig(news_page_size=0)

    def test_series_bounds(self):
        with pytest.raises(ValidationError):
            SeriesConfig(point_count=0)
        with pytest.raises(ValidationError):
            SeriesConfig(wobble_amplitude=-0.1)

    def test_log_level(self):
        assert LoggingConfig(level="info").level == "INFO"
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")

    def test_frozen(self):
        cfg = AppConfig()
        with pytest.raises(ValidationError):
            cfg.debug = True  # type: ignore[misc]

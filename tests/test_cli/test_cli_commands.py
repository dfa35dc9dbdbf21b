"""
Tests for diplo_risk/cli.py (typer CliRunner, no network).

What we test
------------
  - validate-config prints parsed values; a bad file exits 1.
  - regions lists all three regions.
  - set-region persists a supported region and echoes the stored (trimmed)
    value; an unknown one exits 1 and
    reports the unchanged region.
  - set-key rejects unknown services and masks saved keys in ``settings``.
  - run --region rejects an unknown region before any fetch.
"""

from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from diplo_risk.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # commands reconfigure the root logger against the runner's captured stderr
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    for var in ("NEWSAPI_KEY", "OPENWEATHER_API_KEY", "DIPLO_RISK_SETTINGS_FILE", "DIPLO_RISK_REGION"):
        monkeypatch.delenv(var, raising=False)
    settings_path = tmp_path / "settings.json"
    path = tmp_path / "test.toml"
    path.write_text(
        f'[data]\nsettings_file = "{settings_path.as_posix()}"\n'
        f'outputs_dir = "{(tmp_path / "out").as_posix()}"\n'
        '[logging]\nlevel = "WARNING"\n',
        encoding="utf-8",
    )
    return path


class TestValidateConfig:
    def test_valid(self, config_file):
        result = runner.invoke(app, ["validate-config", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "West Africa" in result.output
        assert "[OK] Config valid." in result.output

    def test_invalid(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text('[regions]\ndefault_region = "Atlantis"\n', encoding="utf-8")
        result = runner.invoke(app, ["validate-config", "--config", str(bad)])
        assert result.exit_code == 1


class TestRegions:
    def test_lists_regions(self):
        result = runner.invoke(app, ["regions"])
        assert result.exit_code == 0
        assert "West Africa: Nigeria, Ghana, Senegal, Mali, Niger" in result.output
        assert "Central Africa:" in result.output


class TestSetRegion:
    def test_persists(self, config_file, tmp_path):
        result = runner.invoke(app, ["set-region", "East Africa", "--config", str(config_file)])
        assert result.exit_code == 0
        saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert saved["region"] == "East Africa"

    def test_reports_stored_value(self, config_file, tmp_path):
        result = runner.invoke(app, ["set-region", "  East Africa ", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "[OK] Region set to East Africa." in result.output
        saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert saved["region"] == "East Africa"

    def test_unknown_region_keeps_previous(self, config_file, tmp_path):
        runner.invoke(app, ["set-region", "Central Africa", "--config", str(config_file)])
        result = runner.invoke(app, ["set-region", "Atlantis", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "Region unchanged: Central Africa" in result.output
        saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert saved["region"] == "Central Africa"


class TestKeys:
    def test_unknown_service(self, config_file):
        result = runner.invoke(app, ["set-key", "twitter", "x", "--config", str(config_file)])
        assert result.exit_code == 1

    def test_saved_key_is_masked(self, config_file):
        runner.invoke(app, ["set-key", "newsapi", "abcdef123456", "--config", str(config_file)])
        result = runner.invoke(app, ["settings", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "abcd…3456" in result.output
        assert "abcdef123456" not in result.output


class TestRun:
    def test_unknown_region_rejected(self, config_file):
        result = runner.invoke(app, ["run", "--region", "Atlantis", "--config", str(config_file)])
        assert result.exit_code == 1

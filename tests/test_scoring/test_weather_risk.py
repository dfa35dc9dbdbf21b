"""
Tests for diplo_risk/scoring/weather.py.

What we test
------------
weather_risk():
  - No observation → 0.
  - Each rule contributes independently.
  - Thresholds are strict (exactly 40 °C / 0 °C / 90 % add nothing).
  - Sum is capped at 5 (320 K + 95 % + Thunderstorm = 6 → 5).
  - Missing / non-finite numbers contribute nothing instead of raising.
"""

from __future__ import annotations

import pytest

from diplo_risk.models.signals import WeatherObservation
from diplo_risk.scoring.weather import weather_risk


def _obs(temp=298.0, humidity=50.0, condition="Clear") -> WeatherObservation:
    return WeatherObservation(
        temperature_kelvin=temp, humidity_percent=humidity, condition_main=condition
    )


class TestWeatherRisk:
    def test_absent_observation_is_zero(self):
        assert weather_risk(None) == 0

    def test_calm_weather_is_zero(self):
        assert weather_risk(_obs()) == 0

    def test_hot(self):
        assert weather_risk(_obs(temp=320.0)) == 2

    def test_cold(self):
        assert weather_risk(_obs(temp=260.0)) == 2

    def test_humid(self):
        assert weather_risk(_obs(humidity=95.0)) == 1

    @pytest.mark.parametrize("condition", ["Thunderstorm", "Tornado", "Hurricane", "Extreme"])
    def test_severe_conditions(self, condition):
        assert weather_risk(_obs(condition=condition)) == 3

    def test_condition_match_is_exact(self):
        assert weather_risk(_obs(condition="thunderstorm")) == 0
        assert weather_risk(_obs(condition="Rain")) == 0

    def test_thresholds_are_strict(self):
        assert weather_risk(_obs(temp=313.15)) == 0
        assert weather_risk(_obs(temp=273.15)) == 0
        assert weather_risk(_obs(humidity=90.0)) == 0

    def test_capped_at_five(self):
        assert weather_risk(_obs(temp=320.0, humidity=95.0, condition="Thunderstorm")) == 5

    def test_hot_and_severe_is_five(self):
        assert weather_risk(_obs(temp=320.0, condition="Tornado")) == 5

    def test_humid_and_severe(self):
        assert weather_risk(_obs(humidity=99.0, condition="Hurricane")) == 4


class TestMalformedObservation:
    def test_missing_numbers_contribute_nothing(self):
        obs = WeatherObservation(condition_main="Thunderstorm")
        assert weather_risk(obs) == 3

    def test_nan_temperature_ignored(self):
        assert weather_risk(_obs(temp=float("nan"), humidity=95.0)) == 1

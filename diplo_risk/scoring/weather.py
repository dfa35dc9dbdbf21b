"""
Weather risk contribution (0–5) from a single current observation.

Each rule contributes independently and the sum is capped at 5:

    temperature > 313.15 K (40 °C)                        +2
    temperature < 273.15 K (0 °C)                         +2
    humidity > 90 %                                       +1
    condition in {Thunderstorm, Tornado, Hurricane, Extreme}  +3

No observation (no key configured, fetch failed) contributes 0.
"""

from __future__ import annotations

from typing import Optional

from diplo_risk.models.signals import WeatherObservation
from diplo_risk.utils.numeric import as_finite_float

HOT_THRESHOLD_K = 313.15
COLD_THRESHOLD_K = 273.15
HUMIDITY_THRESHOLD_PCT = 90.0
SEVERE_CONDITIONS = frozenset({"Thunderstorm", "Tornado", "Hurricane", "Extreme"})
MAX_WEATHER_RISK = 5


def weather_risk(obs: Optional[WeatherObservation]) -> int:
    """Return the weather risk contribution for ``obs`` (``None`` → 0)."""
    if obs is None:
        return 0

    risk = 0
    temp = as_finite_float(obs.temperature_kelvin)
    if temp is not None:
        if temp > HOT_THRESHOLD_K:
            risk += 2
        if temp < COLD_THRESHOLD_K:
            risk += 2

    humidity = as_finite_float(obs.humidity_percent)
    if humidity is not None and humidity > HUMIDITY_THRESHOLD_PCT:
        risk += 1

    if obs.condition_main in SEVERE_CONDITIONS:
        risk += 3

    return min(risk, MAX_WEATHER_RISK)

"""
Risk composition: sentiment + weather + economic trend → 1–10 score.

Score formula (fixed weights, base 5.0)
---------------------------------------
    score = 5.0
          + negative% / 100 * 3.0      # up to +3
          − positive% / 100 * 2.0      # down to −2
          + weather_risk   * 0.5       # up to +2.5
          + (1.0 if econ_trend < 0)    # decline penalty

    score = clamp(round_half_up(score, 1), 1.0, 10.0)

The weights are not configurable.  Changing any of them changes every score,
so a different formula needs a new function, not new parameters.
"""

from __future__ import annotations

from typing import Any

from diplo_risk.models.risk import RISK_MAX, RISK_MIN, CountryRiskRecord
from diplo_risk.models.signals import SentimentDistribution
from diplo_risk.utils.numeric import as_finite_float, clamp, round_half_up

BASE_SCORE = 5.0
NEGATIVE_WEIGHT = 3.0
POSITIVE_WEIGHT = 2.0
WEATHER_WEIGHT = 0.5
ECON_DECLINE_PENALTY = 1.0


def compose_risk(
    sentiment: SentimentDistribution,
    weather_risk: Any,
    econ_trend: Any,
) -> float:
    """Combine the three signals into one bounded risk score.

    Malformed numeric inputs (``None``, NaN, strings) count as zero.

    Args:
        sentiment:    Per-country sentiment distribution.
        weather_risk: Weather contribution, normally 0–5.
        econ_trend:   Signed economic trend; only its sign is used.

    Returns:
        Score in [1.0, 10.0] with one decimal.
    """
    weather = as_finite_float(weather_risk) or 0.0
    trend = as_finite_float(econ_trend) or 0.0

    score = BASE_SCORE
    score += (sentiment.negative / 100) * NEGATIVE_WEIGHT
    score -= (sentiment.positive / 100) * POSITIVE_WEIGHT
    score += weather * WEATHER_WEIGHT
    if trend < 0:
        score += ECON_DECLINE_PENALTY

    return clamp(round_half_up(score, 1), RISK_MIN, RISK_MAX)


def build_record(
    country_key: str,
    sentiment: SentimentDistribution,
    weather_risk: Any,
    econ_trend: Any,
) -> CountryRiskRecord:
    return CountryRiskRecord(
        country_key=country_key,
        score=compose_risk(sentiment, weather_risk, econ_trend),
    )

"""
Economic trend derivation from a short yearly GDP series.

    trend = value(latest year) − value(previous year)

Observations with a missing or non-numeric value are dropped first.  With
fewer than two usable points the trend is a synthetic placeholder drawn
uniformly from [−0.1, +0.1] (a ±10 % swing proxy).  The placeholder has no
economic meaning; only its sign matters to the risk composer.

The random source is injected so callers (and tests) control the draw.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass

from diplo_risk.models.signals import EconomicObservation
from diplo_risk.utils.numeric import as_finite_float

FALLBACK_TREND_BOUND = 0.1


@dataclass(frozen=True)
class TrendResult:
    """Trend value plus whether it came from the fallback draw."""

    value: float
    synthetic: bool


def derive_trend(
    series: Iterable[EconomicObservation],
    rng: random.Random,
) -> TrendResult:
    """Compute the trend and report whether the fallback path was taken."""
    usable: list[tuple[int, float]] = []
    for obs in series:
        value = as_finite_float(obs.value)
        if value is not None:
            usable.append((obs.date, value))

    usable.sort(key=lambda pair: pair[0])
    if len(usable) >= 2:
        return TrendResult(value=usable[-1][1] - usable[-2][1], synthetic=False)

    return TrendResult(
        value=rng.uniform(-FALLBACK_TREND_BOUND, FALLBACK_TREND_BOUND),
        synthetic=True,
    )


def economic_trend(
    series: Iterable[EconomicObservation],
    rng: random.Random,
) -> float:
    """Signed trend of ``series`` in raw indicator units (see module docstring)."""
    return derive_trend(series, rng).value


def trend_direction(trend: float) -> str:
    """Arrow for the economics summary line: ↑ rising, ↓ falling, → flat."""
    if trend > 0:
        return "↑"
    if trend < 0:
        return "↓"
    return "→"

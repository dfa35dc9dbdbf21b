"""
Synthetic chart series.

A run produces one real score per country.  For the trend chart that score
is expanded into ``point_count`` values by adding an independent uniform
wobble in [−a, +a] to each point:

    point_i = clamp(round_half_up(current + U(−a, a), 1), 1.0, 10.0)

These points are NOT historical observations.  Every consumer labels them
as synthetic (``RiskSeries.synthetic`` is always ``True``).
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Optional

from diplo_risk.models.risk import RISK_MAX, RISK_MIN, RiskSeries
from diplo_risk.utils.numeric import as_finite_float, clamp, round_half_up

DEFAULT_POINT_COUNT = 5
DEFAULT_WOBBLE = 0.4


def synthesize_series(
    current: float,
    rng: random.Random,
    point_count: int = DEFAULT_POINT_COUNT,
    wobble_amplitude: float = DEFAULT_WOBBLE,
) -> list[float]:
    """Return ``point_count`` perturbed copies of ``current``.

    A non-numeric ``current`` is treated as the minimum score.

    Raises:
        ValueError: If ``point_count`` < 1 or ``wobble_amplitude`` < 0.
    """
    if point_count < 1:
        raise ValueError(f"point_count must be >= 1, got {point_count}.")
    if wobble_amplitude < 0:
        raise ValueError(f"wobble_amplitude must be >= 0, got {wobble_amplitude}.")

    base = as_finite_float(current)
    if base is None:
        base = RISK_MIN

    return [
        clamp(
            round_half_up(base + rng.uniform(-wobble_amplitude, wobble_amplitude), 1),
            RISK_MIN,
            RISK_MAX,
        )
        for _ in range(point_count)
    ]


def build_series(
    country_key: str,
    current: float,
    rng: random.Random,
    point_count: int = DEFAULT_POINT_COUNT,
    wobble_amplitude: float = DEFAULT_WOBBLE,
) -> RiskSeries:
    return RiskSeries(
        country_key=country_key,
        points=synthesize_series(current, rng, point_count, wobble_amplitude),
        synthetic=True,
    )


def checkpoint_labels(
    point_count: int = DEFAULT_POINT_COUNT,
    interval_days: int = 7,
    today: Optional[date] = None,
) -> list[str]:
    """ISO dates for the chart x-axis, oldest first, the last one being today.

    >>> checkpoint_labels(3, 7, date(2025, 1, 15))
    ['2025-01-01', '2025-01-08', '2025-01-15']
    """
    end = today or date.today()
    return [
        (end - timedelta(days=i * interval_days)).isoformat()
        for i in range(point_count - 1, -1, -1)
    ]

"""
Numeric helpers shared by the scoring functions.

Rounding is half-up on the exact binary value of the float, so a score of
6.25 becomes 6.3 (Python's built-in ``round`` would give 6.2).  Scores are
displayed with one decimal and must not drift between runs on tie values.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals, ties away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def as_finite_float(value: Any) -> Optional[float]:
    """Coerce ``value`` to a finite float, or ``None`` when that is not possible.

    Booleans are rejected: ``True`` is not a temperature.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result

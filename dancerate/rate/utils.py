"""Numeric helpers shared by the rate estimators and strategies."""

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* into ``[lo, hi]``. NaN is returned unchanged."""
    if math.isnan(value):
        return value
    return min(hi, max(lo, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)

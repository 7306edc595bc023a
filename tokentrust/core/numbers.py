"""Numeric helpers shared by verification and risk scoring."""

from __future__ import annotations

import math

# Keeps a sum over many checks finite.
MAX_WEIGHT = 1e9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def finite_weight(value: float | None) -> float:
    """Weight clamped to 0..MAX_WEIGHT; None, NaN and infinities count as 0."""
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return min(MAX_WEIGHT, max(0.0, value))

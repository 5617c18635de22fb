"""Numeric helpers shared by the personalization engine."""

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, 3.5 -> 4)."""
    return int(math.floor(value + 0.5))

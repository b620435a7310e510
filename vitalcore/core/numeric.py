"""Numeric helpers shared by the scoring services."""

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding), so scores match the device app."""
    return int(math.floor(value + 0.5))

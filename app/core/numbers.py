from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (built-in round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))

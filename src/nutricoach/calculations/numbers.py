"""Numeric helpers shared by the calculation pipeline."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def coerce_number(value: object) -> float:
    """Return a finite float for ``value`` or 0 when it is not numeric."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number

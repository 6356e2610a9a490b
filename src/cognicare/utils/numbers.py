"""Numeric helpers shared by the scoring modules."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's round() uses banker's rounding; scores are displayed with
    the conventional rule instead (2.5 -> 3, -2.5 -> -2).
    """
    return math.floor(value + 0.5)

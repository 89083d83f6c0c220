"""Mathematical utility functions for grid coordinates."""

from __future__ import annotations

import math


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Python's built-in ``round`` rounds ties to even (round(2.5) == 2);
    grid coordinates use the conventional rule instead (2.5 -> 3, -2.5 -> -3).
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # compare the fraction directly; floor(x + 0.5) misrounds 0.49999999999999994
    rounded = whole + 1 if magnitude - whole >= 0.5 else whole
    return -rounded if value < 0 else rounded


def is_integral(value: float, tol: float = 1e-9) -> bool:
    """True if ``value`` lies within ``tol`` of an integer."""
    return abs(value - round_half_away(value)) <= tol

"""
Base classes for grid interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from gridlib.errors import InsufficientDataError


class Interpolator(ABC):
    """Base class for univariate interpolation methods."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Knot coordinates (grid offsets, year fractions, ...)
            values: Values at the knots
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise InsufficientDataError(
                f"Need at least 2 points for interpolation, got {len(pillars)}"
            )

        # Sort by pillars
        sorted_pairs = sorted(zip(pillars, values, strict=True))
        self.pillars = np.array([float(p[0]) for p in sorted_pairs])
        self.values = np.array([float(p[1]) for p in sorted_pairs])

        # Check for duplicates
        if len(np.unique(self.pillars)) != len(self.pillars):
            raise ValueError("Duplicate pillars not allowed")

        self.pillars.setflags(write=False)
        self.values.setflags(write=False)

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at t."""
        pass

    def __call__(self, t: float) -> float:
        return self.interpolate(t)

    def is_inside(self, t: float) -> bool:
        """True if t lies within [first pillar, last pillar]."""
        return self.pillars[0] <= t <= self.pillars[-1]


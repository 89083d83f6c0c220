"""
Piecewise-linear interpolation on a univariate slice of a grid.
"""
import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Piecewise-linear interpolation between sorted knots.

    Beyond the first/last knot the nearest end segment is extended linearly.
    """

    def interpolate(self, t: float) -> float:
        """Linear interpolation (or extrapolation) at t."""
        t = float(t)
        # Segment index, clamped to the end segments for extrapolation
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        i = max(0, min(i, len(self.pillars) - 2))

        t1, t2 = self.pillars[i], self.pillars[i + 1]
        v1, v2 = self.values[i], self.values[i + 1]

        weight = (t - t1) / (t2 - t1)
        return float(v1 + weight * (v2 - v1))

"""
Bilinear interpolation on a regular two-dimensional grid.
"""
import logging
from typing import Sequence, Tuple

import numpy as np

from gridlib.errors import InsufficientDataError

logger = logging.getLogger(__name__)


class BiLinearInterpolation:
    """
    Bilinear surface over a rectangular (x, y) grid.

    Inside the grid the value is the bilinear combination of the four
    corners of the enclosing cell. Outside, the edge cell is extended
    linearly along each axis.
    """

    def __init__(
        self,
        x: Sequence[float],
        y: Sequence[float],
        values: Sequence[Sequence[float]],
    ):
        """
        Build the surface.

        Args:
            x: Strictly increasing first-axis knots (maturities)
            y: Strictly increasing second-axis knots (terminations)
            values: Matrix of shape (len(x), len(y)); values[i][j] sits at (x[i], y[j])
        """
        self.x = np.array(x, dtype=float)
        self.y = np.array(y, dtype=float)
        self.values = np.array(values, dtype=float)

        if self.x.ndim != 1 or self.y.ndim != 1:
            raise ValueError("Surface axes must be one-dimensional")
        if len(self.x) < 2 or len(self.y) < 2:
            raise InsufficientDataError(
                f"Bilinear interpolation needs at least 2 points per axis, "
                f"got {len(self.x)} x {len(self.y)}"
            )
        if self.values.shape != (len(self.x), len(self.y)):
            raise ValueError(
                f"values shape {self.values.shape} does not match axes "
                f"({len(self.x)}, {len(self.y)})"
            )
        if np.any(np.diff(self.x) <= 0) or np.any(np.diff(self.y) <= 0):
            raise ValueError("Surface axes must be strictly increasing")

        for arr in (self.x, self.y, self.values):
            arr.setflags(write=False)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    @staticmethod
    def _cell(axis: np.ndarray, t: float) -> int:
        i = int(np.searchsorted(axis, t, side="right")) - 1
        return max(0, min(i, len(axis) - 2))

    def is_inside(self, x: float, y: float) -> bool:
        return self.x[0] <= x <= self.x[-1] and self.y[0] <= y <= self.y[-1]

    def value(self, x: float, y: float) -> float:
        """Evaluate the surface at (x, y)."""
        x, y = float(x), float(y)
        if not self.is_inside(x, y):
            logger.debug("Extrapolating surface at (%s, %s)", x, y)

        i = self._cell(self.x, x)
        j = self._cell(self.y, y)

        x0, x1 = self.x[i], self.x[i + 1]
        y0, y1 = self.y[j], self.y[j + 1]
        wx = (x - x0) / (x1 - x0)
        wy = (y - y0) / (y1 - y0)

        q00 = self.values[i, j]
        q10 = self.values[i + 1, j]
        q01 = self.values[i, j + 1]
        q11 = self.values[i + 1, j + 1]

        return float(
            q00 * (1 - wx) * (1 - wy)
            + q10 * wx * (1 - wy)
            + q01 * (1 - wx) * wy
            + q11 * wx * wy
        )

    def __call__(self, x: float, y: float) -> float:
        return self.value(x, y)

"""
Array-backed time discretization.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Iterable, Optional, Union

import numpy as np

from gridlib import settings

from .discretization import SearchResult, TimeDiscretization

logger = logging.getLogger(__name__)


class ShortPeriodLocation(Enum):
    """Where a regular grid places the leftover short period."""

    SHORT_PERIOD_AT_START = "SHORT_PERIOD_AT_START"
    SHORT_PERIOD_AT_END = "SHORT_PERIOD_AT_END"


class TimeDiscretizationFromArray(TimeDiscretization):
    """
    Time discretization built from a set of time points.

    Every time is rounded to an integer multiple of the tick size; times
    that coincide after rounding are merged. The default tick size is
    ``settings.DEFAULT_TIME_TICK_SIZE`` (one hour in ACT/365 years).
    """

    def __init__(
        self,
        times: Union[float, Iterable[float]],
        tick_size: Optional[float] = None,
    ):
        """
        Initialize the grid.

        Args:
            times: Time points in any order (a single float is accepted)
            tick_size: Smallest resolvable time difference, must be positive
        """
        tick_size = settings.DEFAULT_TIME_TICK_SIZE if tick_size is None else float(tick_size)
        if not math.isfinite(tick_size) or tick_size <= 0:
            raise ValueError(f"Tick size must be positive and finite, got {tick_size}")

        if isinstance(times, np.ndarray):
            raw = times.astype(float).ravel()
        elif isinstance(times, (int, float)):
            raw = np.array([float(times)])
        else:
            raw = np.array([float(t) for t in times], dtype=float)
        if not np.all(np.isfinite(raw)):
            raise ValueError("Time points must be finite")

        rounded = np.unique(_round_to_tick(raw, tick_size))
        if len(rounded) != len(raw):
            logger.debug("Merged %s time points within tick %s", len(raw) - len(rounded), tick_size)

        rounded.setflags(write=False)
        self._times = rounded
        self._tick_size = tick_size

    @classmethod
    def from_uniform(
        cls,
        initial: float,
        number_of_time_steps: int,
        delta_t: float,
        tick_size: Optional[float] = None,
    ) -> "TimeDiscretizationFromArray":
        """Equidistant grid ``initial + i * delta_t`` for i = 0..number_of_time_steps."""
        if number_of_time_steps < 0:
            raise ValueError("Number of time steps must be non-negative")
        times = initial + np.arange(number_of_time_steps + 1) * delta_t
        return cls(times, tick_size)

    @classmethod
    def from_range(
        cls,
        initial: float,
        last: float,
        delta_t: float,
        short_period_location: ShortPeriodLocation = ShortPeriodLocation.SHORT_PERIOD_AT_END,
        tick_size: Optional[float] = None,
    ) -> "TimeDiscretizationFromArray":
        """
        Grid from ``initial`` to ``last`` in steps of ``delta_t``.

        If the interval is not a whole number of steps, the remaining short
        period is placed at the end or at the start of the grid.
        """
        if delta_t <= 0:
            raise ValueError(f"delta_t must be positive, got {delta_t}")
        if last < initial:
            raise ValueError(f"last ({last}) must not be before initial ({initial})")

        number_of_full_steps = int(math.floor((last - initial) / delta_t + 1e-10))
        steps = np.arange(number_of_full_steps + 1) * delta_t
        if short_period_location is ShortPeriodLocation.SHORT_PERIOD_AT_END:
            times = np.append(initial + steps, last)
        else:
            times = np.append(last - steps, initial)
        return cls(times, tick_size)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_number_of_times(self) -> int:
        return len(self._times)

    def get_time(self, time_index: int) -> float:
        if not 0 <= time_index < len(self._times):
            raise IndexError(
                f"Time index {time_index} out of range [0, {len(self._times)})"
            )
        return float(self._times[time_index])

    def get_as_array(self) -> np.ndarray:
        return self._times

    def get_tick_size(self) -> float:
        return self._tick_size

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _round(self, time: float) -> float:
        return float(_round_to_tick(np.float64(time), self._tick_size))

    def search(self, time: float) -> SearchResult:
        rounded = self._round(time)
        index = int(np.searchsorted(self._times, rounded, side="left"))
        found = index < len(self._times) and self._times[index] == rounded
        return SearchResult(bool(found), index)

    def get_time_index_nearest_less_or_equal(self, time: float) -> int:
        return int(np.searchsorted(self._times, self._round(time), side="right")) - 1

    def get_time_index_nearest_greater_or_equal(self, time: float) -> int:
        return int(np.searchsorted(self._times, self._round(time), side="left"))

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------
    def union(self, that: TimeDiscretization) -> "TimeDiscretizationFromArray":
        tick_size = min(self._tick_size, that.get_tick_size())
        if that.get_tick_size() != self._tick_size:
            logger.debug(
                "Union of grids with tick sizes %s and %s rounds to %s",
                self._tick_size, that.get_tick_size(), tick_size,
            )
        return TimeDiscretizationFromArray(
            np.concatenate([self._times, that.get_as_array()]), tick_size
        )

    def intersect(self, that: TimeDiscretization) -> "TimeDiscretizationFromArray":
        tick_size = max(self._tick_size, that.get_tick_size())
        if that.get_tick_size() != self._tick_size:
            logger.debug(
                "Intersection of grids with tick sizes %s and %s rounds to %s",
                self._tick_size, that.get_tick_size(), tick_size,
            )
        mine = _round_to_tick(self._times, tick_size)
        theirs = _round_to_tick(np.asarray(that.get_as_array(), dtype=float), tick_size)
        return TimeDiscretizationFromArray(np.intersect1d(mine, theirs), tick_size)

    def get_time_shifted_time_discretization(self, time_shift: float) -> "TimeDiscretizationFromArray":
        return TimeDiscretizationFromArray(self._times + time_shift, self._tick_size)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeDiscretization):
            return NotImplemented
        return (
            self._tick_size == other.get_tick_size()
            and np.array_equal(self._times, other.get_as_array())
        )

    def __hash__(self) -> int:
        return hash((self._tick_size, self._times.tobytes()))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(times={self.get_as_list()}, "
            f"tick_size={self._tick_size})"
        )


def _round_to_tick(times, tick_size: float):
    """Round times to the nearest integer multiple of ``tick_size``."""
    # "+ 0.0" folds -0.0 into 0.0 so equal grids hash equally.
    return np.rint(times / tick_size) * tick_size + 0.0

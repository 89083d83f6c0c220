"""
Time discretization contract: an ordered grid of distinct time points.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, List

import numpy as np


@dataclass(frozen=True)
class SearchResult:
    """Outcome of an exact time search.

    ``index`` is the position of the time if ``found``, otherwise the
    insertion point that keeps the grid sorted.
    """

    found: bool
    index: int

    def to_sentinel(self) -> int:
        """Encode as a single int: the index, or -(insertion point) - 1."""
        return self.index if self.found else -self.index - 1

    @classmethod
    def from_sentinel(cls, value: int) -> "SearchResult":
        if value >= 0:
            return cls(True, value)
        return cls(False, -value - 1)


class TimeDiscretization(ABC):
    """
    Strictly increasing sequence of time points with a tick size.

    The tick size is the smallest resolvable time difference: times closer
    than a tick are the same time for search and set operations.
    Implementations are immutable; every operation returns a new grid.

    Set operations round times to the tick size of the result, which is the
    finer tick for ``union`` and the coarser one for ``intersect``. When the
    tick sizes differ the algebra is not associative: points of a coarse
    grid can be re-rounded more than once, so ``a.union(b).union(c)`` need
    not equal ``a.union(b.union(c))``.
    """

    @abstractmethod
    def get_number_of_times(self) -> int:
        """Number of time points."""

    def get_number_of_time_steps(self) -> int:
        """Number of time steps, one less than the number of times."""
        return self.get_number_of_times() - 1

    @abstractmethod
    def get_time(self, time_index: int) -> float:
        """Time at ``time_index``; raises IndexError outside [0, N)."""

    def get_time_step(self, time_index: int) -> float:
        """Length of the step from ``time_index`` to ``time_index + 1``."""
        return self.get_time(time_index + 1) - self.get_time(time_index)

    @abstractmethod
    def search(self, time: float) -> SearchResult:
        """Exact search for ``time`` within tick tolerance."""

    def get_time_index(self, time: float) -> int:
        """
        Index of ``time`` if it is on the grid.

        Otherwise returns ``-(insertion_point) - 1``, which is negative and
        lets the caller recover the insertion point as ``-result - 1``.
        """
        return self.search(time).to_sentinel()

    @abstractmethod
    def get_time_index_nearest_less_or_equal(self, time: float) -> int:
        """Largest index with time <= ``time``, or -1 below the first time."""

    @abstractmethod
    def get_time_index_nearest_greater_or_equal(self, time: float) -> int:
        """Smallest index with time >= ``time``, or N above the last time."""

    def get_first_time(self) -> float:
        return self.get_time(0)

    def get_last_time(self) -> float:
        return self.get_time(self.get_number_of_times() - 1)

    @abstractmethod
    def get_as_array(self) -> np.ndarray:
        """Times as a read-only numpy array."""

    def get_as_list(self) -> List[float]:
        return [float(t) for t in self.get_as_array()]

    @abstractmethod
    def get_tick_size(self) -> float:
        """Smallest resolvable time difference."""

    def filter(self, times_to_keep: Callable[[float], bool]) -> "TimeDiscretization":
        """
        Keep the times satisfying ``times_to_keep``.

        The kept times are intersected with this grid through a freshly
        built grid of the same tick size, so the result is rounded exactly
        like any other grid.
        """
        from .from_array import TimeDiscretizationFromArray

        kept = [t for t in self if times_to_keep(t)]
        return self.intersect(TimeDiscretizationFromArray(kept, self.get_tick_size()))

    @abstractmethod
    def union(self, that: "TimeDiscretization") -> "TimeDiscretization":
        """All times of both grids at the finer tick size."""

    @abstractmethod
    def intersect(self, that: "TimeDiscretization") -> "TimeDiscretization":
        """Times present in both grids at the coarser tick size."""

    @abstractmethod
    def get_time_shifted_time_discretization(self, time_shift: float) -> "TimeDiscretization":
        """Grid with every time moved by ``time_shift``; tick size unchanged."""

    def __iter__(self) -> Iterator[float]:
        return iter(self.get_as_list())

    def __len__(self) -> int:
        return self.get_number_of_times()

"""
Time discretizations: ordered time grids with tick-size aware search and
set operations.
"""

from .discretization import SearchResult, TimeDiscretization
from .from_array import ShortPeriodLocation, TimeDiscretizationFromArray

__all__ = [
    "TimeDiscretization",
    "TimeDiscretizationFromArray",
    "ShortPeriodLocation",
    "SearchResult",
]

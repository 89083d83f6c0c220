"""
Tenor tables package.

Main APIs:
---------
    - DataTableBasic: Exact-match (maturity, termination) table
    - DataTableLinear: Table interpolating between grid nodes
    - TenorPoint, GridEntry: Table coordinates and stored entries
"""

from .base import DataTable, GridEntry, TenorPoint
from .basic import DataTableBasic
from .linear import DataTableLinear

__all__ = [
    "DataTable",
    "DataTableBasic",
    "DataTableLinear",
    "GridEntry",
    "TenorPoint",
]

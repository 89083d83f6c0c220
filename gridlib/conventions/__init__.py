"""
Table conventions and offset/date arithmetic.
"""

from .offsets import date_to_offset, offset_to_date, offset_to_delta
from .types import TableConvention, get_scale_factor, get_table_convention

__all__ = [
    "TableConvention",
    "get_scale_factor",
    "get_table_convention",
    "offset_to_date",
    "offset_to_delta",
    "date_to_offset",
]

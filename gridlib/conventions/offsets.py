"""
Conversion between integer grid offsets and calendar dates.
"""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from gridlib.conventions.types import TableConvention, get_table_convention
from gridlib.utils.date import to_date


def offset_to_delta(offset: int, convention: Union[str, TableConvention]) -> relativedelta:
    """Calendar period spanned by ``offset`` units of a convention."""
    convention = get_table_convention(convention)
    if convention is TableConvention.YEARS:
        return relativedelta(years=offset)
    if convention is TableConvention.MONTHS:
        return relativedelta(months=offset)
    if convention is TableConvention.WEEKS:
        return relativedelta(weeks=offset)
    return relativedelta(days=offset)


def offset_to_date(
    reference_date: Union[str, date, datetime],
    offset: int,
    convention: Union[str, TableConvention],
) -> date:
    """
    Shift a reference date by an integer number of convention units.

    Month and year offsets follow relativedelta's end-of-month clipping
    (2024-01-31 + 1M -> 2024-02-29).
    """
    return to_date(reference_date) + offset_to_delta(offset, convention)


def date_to_offset(
    reference_date: Union[str, date, datetime],
    target_date: Union[str, date, datetime],
    convention: Union[str, TableConvention],
) -> int:
    """
    Number of whole convention units from ``reference_date`` to ``target_date``.

    Partial units are truncated towards zero.
    """
    convention = get_table_convention(convention)
    start = to_date(reference_date)
    end = to_date(target_date)

    if convention in (TableConvention.YEARS, TableConvention.MONTHS):
        delta = relativedelta(end, start)
        months = delta.years * 12 + delta.months
        if convention is TableConvention.YEARS:
            return int(months / 12)
        return months

    days = (end - start).days
    if convention is TableConvention.WEEKS:
        return int(days / 7)
    return days

"""
Table conventions: the unit system of integer tenor offsets.
"""

from enum import Enum
from typing import Dict, Union

from gridlib.errors import UnknownConventionError


class TableConvention(Enum):
    """Unit in which a table's maturity and termination offsets are counted."""

    YEARS = "YEARS"
    MONTHS = "MONTHS"
    WEEKS = "WEEKS"
    DAYS = "DAYS"

    def scale_factor(self) -> int:
        """Number of grid units per year."""
        return get_scale_factor(self)


# Grid units per year, used to turn year fractions into integer offsets.
_SCALE_FACTORS: Dict[TableConvention, int] = {
    TableConvention.YEARS: 1,
    TableConvention.MONTHS: 12,
    TableConvention.WEEKS: 52,
    TableConvention.DAYS: 365,
}


def get_scale_factor(convention: TableConvention) -> int:
    """Look up the integer scale factor of a convention."""
    try:
        return _SCALE_FACTORS[convention]
    except (KeyError, TypeError):
        raise UnknownConventionError(f"No scale factor for table convention: {convention!r}") from None


def get_table_convention(convention: Union[str, TableConvention]) -> TableConvention:
    """
    Resolve a convention from its enum member or name.

    Args:
        convention: TableConvention member or case-insensitive name ("MONTHS", "years", ...)

    Returns:
        The matching TableConvention
    """
    if isinstance(convention, TableConvention):
        return convention
    if isinstance(convention, str):
        key = convention.strip().upper()
        if key in TableConvention.__members__:
            return TableConvention[key]
    raise UnknownConventionError(
        f"Unknown table convention: {convention!r}. "
        f"Available: {', '.join(TableConvention.__members__)}"
    )

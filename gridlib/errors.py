"""
Exception hierarchy for grid tables and time discretizations.
"""


class GridError(Exception):
    """Base class for all gridlib errors."""


class ConstructionError(GridError, ValueError):
    """Raised when a table cannot be built from its inputs.

    Covers mismatched input lengths, duplicate tenor points and otherwise
    malformed construction arguments. No partial table is ever returned.
    """


class UnknownConventionError(ConstructionError):
    """Raised when a table convention is not one of the supported units."""


class QueryError(GridError, RuntimeError):
    """Raised when a value cannot be resolved for a query point."""


class IrregularGridError(QueryError):
    """Full-surface interpolation requested on an incomplete cartesian grid."""


class InsufficientDataError(QueryError):
    """Too few points to build the interpolant a query needs."""


class MissingEntryError(QueryError, KeyError):
    """Exact lookup of a tenor point that is not stored in the table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""

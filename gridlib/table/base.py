"""
Base types and protocols for tenor data tables.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterator, List, Optional, Protocol, Union, runtime_checkable

from gridlib.conventions.types import TableConvention

Coordinate = Union[int, float]


@dataclass(frozen=True, order=True)
class TenorPoint:
    """Grid cell coordinate in native table units.

    ``termination`` is an offset relative to the maturity, not to the
    reference date.
    """

    maturity: int
    termination: int


@dataclass(frozen=True)
class GridEntry:
    """A stored table value at a tenor point."""

    point: TenorPoint
    value: float

    @property
    def maturity(self) -> int:
        return self.point.maturity

    @property
    def termination(self) -> int:
        return self.point.termination


@runtime_checkable
class DataTable(Protocol):
    """Protocol defining the interface for all tenor tables."""

    name: str
    convention: TableConvention
    reference_date: date
    schedule_meta_data: Optional[Any]

    def get_value(self, maturity: Coordinate, termination: Coordinate) -> float:
        """Get the value at (maturity, termination)."""
        ...

    def contains_entry_for(self, maturity: Coordinate, termination: Coordinate) -> bool:
        """True if an exact entry exists at (maturity, termination)."""
        ...

    def size(self) -> int:
        """Number of stored entries."""
        ...

    def get_maturities(self) -> List[int]:
        """Ordered distinct maturities."""
        ...

    def get_terminations(self) -> List[int]:
        """Ordered distinct terminations."""
        ...

    def get_terminations_for_maturity(self, maturity: int) -> List[int]:
        """Ordered terminations stored under a maturity."""
        ...

    def get_maturities_for_termination(self, termination: int) -> List[int]:
        """Ordered maturities stored under a termination."""
        ...

    def __iter__(self) -> Iterator[GridEntry]:
        ...

    def to_string(self, unit: float = 1.0) -> str:
        """Human-readable dump with values divided by ``unit``."""
        ...

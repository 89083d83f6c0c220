"""
Exact-match tenor table (no interpolation).
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from gridlib.conventions.offsets import offset_to_date
from gridlib.conventions.types import TableConvention, get_scale_factor, get_table_convention
from gridlib.errors import ConstructionError, MissingEntryError
from gridlib.utils.date import to_date
from gridlib.utils.mathutils import is_integral, round_half_away

from .base import Coordinate, GridEntry, TenorPoint

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, pd.Timestamp]


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _frame_offsets(column: pd.Series, name: str) -> List[int]:
    """Integer offsets from a frame column; whole-number floats (12.0) are accepted."""
    offsets = []
    for value in column:
        if _is_integer(value):
            offsets.append(int(value))
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = math.nan
        if not (math.isfinite(number) and is_integral(number)):
            raise ConstructionError(
                f"Table {name}: column {column.name!r} holds a non-integer offset {value!r}"
            )
        offsets.append(round_half_away(number))
    return offsets


class DataTableBasic:
    """
    Sparse table of values keyed by (maturity, termination) offsets.

    Offsets are integers counted in the table convention's unit, maturity
    relative to the reference date and termination relative to the maturity.
    Only stored points can be queried; see DataTableLinear for interpolation.
    Tables are immutable: ``add_point`` returns a new table.
    """

    def __init__(
        self,
        name: str,
        convention: Union[str, TableConvention],
        reference_date: DateLike,
        schedule_meta_data: Optional[Any] = None,
        maturities: Optional[Sequence[int]] = None,
        terminations: Optional[Sequence[int]] = None,
        values: Optional[Sequence[float]] = None,
    ):
        """
        Create a table.

        Args:
            name: Table name
            convention: Unit of the offsets (TableConvention or its name)
            reference_date: Date the maturity offsets are measured from
            schedule_meta_data: Opaque schedule description, passed through
            maturities: Maturity offsets of the points
            terminations: Termination offsets of the points, relative to the maturity
            values: Values at the points
        """
        self._name = name
        self._convention = get_table_convention(convention)
        try:
            self._reference_date = to_date(reference_date)
        except (TypeError, ValueError) as exc:
            raise ConstructionError(f"Invalid reference date for table {name}: {exc}") from exc
        self._schedule_meta_data = schedule_meta_data

        maturities = [] if maturities is None else list(maturities)
        terminations = [] if terminations is None else list(terminations)
        values = [] if values is None else list(values)
        if not (len(maturities) == len(terminations) == len(values)):
            raise ConstructionError(
                f"Table {name}: maturities ({len(maturities)}), terminations "
                f"({len(terminations)}) and values ({len(values)}) must have same length"
            )

        entries: Dict[TenorPoint, float] = {}
        for maturity, termination, value in zip(maturities, terminations, values, strict=True):
            if not (_is_integer(maturity) and _is_integer(termination)):
                raise ConstructionError(
                    f"Table {name}: offsets must be integers, got ({maturity!r}, {termination!r})"
                )
            point = TenorPoint(int(maturity), int(termination))
            if point in entries:
                raise ConstructionError(f"Table {name}: duplicate entry for {point}")
            entries[point] = float(value)

        self._entries = entries
        self._terminations_by_maturity: Dict[int, List[int]] = {}
        self._maturities_by_termination: Dict[int, List[int]] = {}
        for point in sorted(entries):
            self._terminations_by_maturity.setdefault(point.maturity, []).append(point.termination)
            self._maturities_by_termination.setdefault(point.termination, []).append(point.maturity)
        for column in self._maturities_by_termination.values():
            column.sort()
        self._maturities = sorted(self._terminations_by_maturity)
        self._terminations = sorted(self._maturities_by_termination)
        logger.debug(
            "Built table %s: %s entries, %s maturities x %s terminations",
            name, len(entries), len(self._maturities), len(self._terminations),
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        name: str,
        convention: Union[str, TableConvention],
        reference_date: DateLike,
        schedule_meta_data: Optional[Any] = None,
        maturity_col: str = "maturity",
        termination_col: str = "termination",
        value_col: str = "value",
    ):
        """Build a table from a long-format frame with one row per point."""
        missing = [c for c in (maturity_col, termination_col, value_col) if c not in frame.columns]
        if missing:
            raise ConstructionError(f"Table {name}: missing columns {missing}")
        return cls(
            name,
            convention,
            reference_date,
            schedule_meta_data,
            _frame_offsets(frame[maturity_col], name),
            _frame_offsets(frame[termination_col], name),
            frame[value_col].astype(float).tolist(),
        )

    def add_point(self, maturity: int, termination: int, value: float):
        """Return a new table holding this table's entries plus one point."""
        return self.add_points([maturity], [termination], [value])

    def add_points(
        self,
        maturities: Sequence[int],
        terminations: Sequence[int],
        values: Sequence[float],
    ):
        """Return a new table holding this table's entries plus the given points."""
        own_maturities, own_terminations, own_values = self._as_lists()
        return type(self)(
            self._name,
            self._convention,
            self._reference_date,
            self._schedule_meta_data,
            own_maturities + list(maturities),
            own_terminations + list(terminations),
            own_values + list(values),
        )

    def clone(self):
        """Independent copy built from this table's entries."""
        maturities, terminations, values = self._as_lists()
        return type(self)(
            self._name,
            self._convention,
            self._reference_date,
            self._schedule_meta_data,
            maturities,
            terminations,
            values,
        )

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def convention(self) -> TableConvention:
        return self._convention

    @property
    def reference_date(self) -> date:
        return self._reference_date

    @property
    def schedule_meta_data(self) -> Optional[Any]:
        return self._schedule_meta_data

    def get_date_for_offset(self, offset: int) -> date:
        """Calendar date ``offset`` convention units after the reference date."""
        return offset_to_date(self._reference_date, offset, self._convention)

    # ------------------------------------------------------------------
    # Axes
    # ------------------------------------------------------------------
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_maturities(self) -> List[int]:
        return list(self._maturities)

    def get_terminations(self) -> List[int]:
        return list(self._terminations)

    def get_terminations_for_maturity(self, maturity: int) -> List[int]:
        return list(self._terminations_by_maturity.get(maturity, []))

    def get_maturities_for_termination(self, termination: int) -> List[int]:
        return list(self._maturities_by_termination.get(termination, []))

    def is_regular(self) -> bool:
        """True if the entries cover the full maturity x termination product."""
        return self.size() == len(self._maturities) * len(self._terminations)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def to_grid_point(self, maturity: float, termination: float) -> TenorPoint:
        """
        Round continuous coordinates onto the table grid.

        Both coordinates are year fractions from the reference date; the
        termination is converted to an offset relative to the rounded maturity.
        """
        scale = get_scale_factor(self._convention)
        rounded_maturity = round_half_away(maturity * scale)
        rounded_termination = round_half_away(termination * scale) - rounded_maturity
        return TenorPoint(rounded_maturity, rounded_termination)

    def contains_entry_for(self, maturity: Coordinate, termination: Coordinate) -> bool:
        """
        True if a value is stored exactly at the given coordinates.

        Integer coordinates are grid offsets. Float coordinates are year
        fractions and only match when they fall exactly on a grid node
        (within 1e-9 after scaling). No rounding is applied, so this is
        stricter than ``get_value``: for a MONTHS table
        ``contains_entry_for(1.04, 2.0)`` is False although
        ``get_value(1.04, 2.0)`` returns the value rounded onto (12, 12).
        DataTableLinear relies on this to tell exact hits from rounded ones.
        """
        if _is_integer(maturity) and _is_integer(termination):
            return TenorPoint(int(maturity), int(termination)) in self._entries

        scale = get_scale_factor(self._convention)
        if not (is_integral(maturity * scale) and is_integral(termination * scale)):
            return False
        return self.to_grid_point(maturity, termination) in self._entries

    def __contains__(self, point: Union[TenorPoint, Tuple[int, int]]) -> bool:
        if isinstance(point, TenorPoint):
            return point in self._entries
        maturity, termination = point
        return self.contains_entry_for(maturity, termination)

    def get_value(self, maturity: Coordinate, termination: Coordinate) -> float:
        """
        Get the value stored at (maturity, termination).

        Integer arguments are grid offsets; float arguments are year fractions
        and are rounded onto the grid first.

        Raises:
            MissingEntryError: If no value is stored at the point
        """
        if _is_integer(maturity) and _is_integer(termination):
            point = TenorPoint(int(maturity), int(termination))
        else:
            point = self.to_grid_point(maturity, termination)
        try:
            return self._entries[point]
        except KeyError:
            raise MissingEntryError(f"Table {self._name} holds no entry for {point}") from None

    def __iter__(self) -> Iterator[GridEntry]:
        for point in sorted(self._entries):
            yield GridEntry(point, self._entries[point])

    def _as_lists(self) -> Tuple[List[int], List[int], List[float]]:
        maturities: List[int] = []
        terminations: List[int] = []
        values: List[float] = []
        for maturity in self._maturities:
            for termination in self._terminations_by_maturity[maturity]:
                maturities.append(maturity)
                terminations.append(termination)
                values.append(self._entries[TenorPoint(maturity, termination)])
        return maturities, terminations, values

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        """Long-format frame with columns maturity, termination, value."""
        maturities, terminations, values = self._as_lists()
        return pd.DataFrame(
            {"maturity": maturities, "termination": terminations, "value": values},
            columns=["maturity", "termination", "value"],
        )

    def to_string(self, unit: float = 1.0) -> str:
        """Matrix dump (maturities down, terminations across) with values divided by ``unit``."""
        header = (
            f"Name: {self._name}, convention: {self._convention.value}, "
            f"reference date: {self._reference_date.isoformat()}"
        )
        if not self._entries:
            return header + "\n(empty)"

        frame = self.to_frame()
        matrix = frame.pivot(index="maturity", columns="termination", values="value") / unit
        return header + "\n" + matrix.to_string(na_rep="")

    def __str__(self) -> str:
        return self.to_string(1.0)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self._name!r}, "
            f"convention={self._convention.value}, "
            f"reference_date={self._reference_date.isoformat()}, size={self.size()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataTableBasic):
            return NotImplemented
        return (
            self._name == other._name
            and self._convention is other._convention
            and self._reference_date == other._reference_date
            and self._schedule_meta_data == other._schedule_meta_data
            and self._entries == other._entries
        )

    __hash__ = None

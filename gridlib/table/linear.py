"""
Tenor table with linear and bilinear interpolation between grid nodes.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional

from gridlib.conventions.types import get_scale_factor
from gridlib.errors import InsufficientDataError, IrregularGridError
from gridlib.interpolation import BiLinearInterpolation, LinearInterpolator
from gridlib.utils.mathutils import round_half_away

from .base import Coordinate, DataTable, TenorPoint
from .basic import DataTableBasic, _is_integer

logger = logging.getLogger(__name__)


class DataTableLinear(DataTableBasic):
    """
    DataTableBasic that interpolates values between tenor grid nodes.

    A query is resolved in this order:

    1. an exact entry is returned unchanged;
    2. if the table holds a single maturity equal to the query maturity, the
       terminations of that row are interpolated linearly;
    3. symmetrically for a single termination equal to the query termination;
    4. otherwise a bilinear surface over the full maturity x termination grid
       is evaluated. This requires a regular grid (every cell populated).

    The surface is built on first use and reused afterwards. It is never
    copied: ``clone``, ``copy`` and pickling all rebuild it lazily. Float
    queries are rounded to the accuracy of the table convention, so nearby
    float coordinates can resolve to the same grid cell.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._surface: Optional[BiLinearInterpolation] = None
        self._surface_lock = threading.Lock()

    @classmethod
    def interpolate_data_table(cls, base_table: DataTable) -> "DataTableLinear":
        """
        Create an interpolated table from any tenor table.

        Every stored (maturity, termination) value of ``base_table`` is copied,
        so the result agrees with the source on all stored points and only
        interpolates for points the source does not hold.
        """
        maturities: List[int] = []
        terminations: List[int] = []
        values: List[float] = []
        for maturity in base_table.get_maturities():
            for termination in base_table.get_terminations_for_maturity(maturity):
                maturities.append(maturity)
                terminations.append(termination)
                values.append(base_table.get_value(maturity, termination))

        return cls(
            base_table.name,
            base_table.convention,
            base_table.reference_date,
            base_table.schedule_meta_data,
            maturities,
            terminations,
            values,
        )

    # ------------------------------------------------------------------
    # Surface cache
    # ------------------------------------------------------------------
    def has_interpolation_surface(self) -> bool:
        """True once the bilinear surface has been built."""
        return self._surface is not None

    def _get_surface(self) -> BiLinearInterpolation:
        surface = self._surface
        if surface is not None:
            return surface

        with self._surface_lock:
            if self._surface is None:
                maturities = self.get_maturities()
                terminations = self.get_terminations()
                values = [
                    [self._entries[TenorPoint(maturity, termination)]
                     for termination in terminations]
                    for maturity in maturities
                ]
                try:
                    surface = BiLinearInterpolation(maturities, terminations, values)
                except InsufficientDataError as exc:
                    raise InsufficientDataError(f"Table {self.name}: {exc}") from exc
                logger.debug(
                    "Built interpolation surface for %s (%s x %s)",
                    self.name, len(maturities), len(terminations),
                )
                self._surface = surface
            return self._surface

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_value(self, maturity: Coordinate, termination: Coordinate) -> float:
        """
        Get the value at (maturity, termination), interpolating if needed.

        Integer arguments are grid offsets; anything else is treated as year
        fractions and rounded to the table convention first.

        Raises:
            InsufficientDataError: A single-row/column slice or the surface has too few points
            IrregularGridError: The surface is needed but the grid is incomplete
            UnknownConventionError: Float query on a table without a valid convention
        """
        if _is_integer(maturity) and _is_integer(termination):
            return self._get_value_on_grid(int(maturity), int(termination))
        return self._get_value_continuous(float(maturity), float(termination))

    def _get_value_on_grid(self, maturity: int, termination: int) -> float:
        if self.contains_entry_for(maturity, termination):
            return super().get_value(maturity, termination)

        # Single row or column matching the query: interpolate along it.
        maturities = self.get_maturities()
        terminations = self.get_terminations()
        if len(maturities) == 1 and maturities[0] == maturity:
            row = self.get_terminations_for_maturity(maturity)
            logger.debug("Table %s: slice interpolation along maturity %s", self.name, maturity)
            return self._interpolate_slice(
                row, [self._entries[TenorPoint(maturity, t)] for t in row], termination
            )
        if len(terminations) == 1 and terminations[0] == termination:
            column = self.get_maturities_for_termination(termination)
            logger.debug("Table %s: slice interpolation along termination %s", self.name, termination)
            return self._interpolate_slice(
                column, [self._entries[TenorPoint(m, termination)] for m in column], maturity
            )

        if not self.is_regular():
            raise IrregularGridError(
                f"For interpolation {self.name} requires a regular grid of values: "
                f"{self.size()} entries for {len(maturities)} maturities x "
                f"{len(terminations)} terminations"
            )

        return self._get_surface().value(maturity, termination)

    def _interpolate_slice(self, pillars: List[int], values: List[float], at: int) -> float:
        try:
            curve = LinearInterpolator(pillars, values)
        except InsufficientDataError as exc:
            raise InsufficientDataError(f"Table {self.name}: {exc}") from exc
        if not curve.is_inside(at):
            logger.debug("Table %s: extrapolating slice at %s", self.name, at)
        return curve.interpolate(at)

    def _get_value_continuous(self, maturity: float, termination: float) -> float:
        if self.contains_entry_for(maturity, termination):
            return super().get_value(maturity, termination)

        # Round to make a regular grid
        scale = get_scale_factor(self.convention)
        rounded_maturity = round_half_away(maturity * scale)
        rounded_termination = round_half_away(termination * scale) - rounded_maturity
        logger.debug(
            "Table %s: (%s, %s) rounded to %s",
            self.name, maturity, termination, TenorPoint(rounded_maturity, rounded_termination),
        )
        return self._get_value_on_grid(rounded_maturity, rounded_termination)

    # ------------------------------------------------------------------
    # Pickling
    # ------------------------------------------------------------------
    def __getstate__(self):
        state = self.__dict__.copy()
        state["_surface"] = None
        del state["_surface_lock"]
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._surface_lock = threading.Lock()

    def to_string(self, unit: float = 1.0) -> str:
        return "DataTableLinear with base table: " + super().to_string(unit)

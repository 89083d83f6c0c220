import logging
from datetime import date

import pytest

from gridlib.conventions import (
    TableConvention,
    date_to_offset,
    get_scale_factor,
    get_table_convention,
    offset_to_date,
    offset_to_delta,
)
from gridlib.errors import ConstructionError, UnknownConventionError
from gridlib import settings
from gridlib.utils import is_integral, round_half_away, to_date


@pytest.mark.parametrize(
    "convention, scale",
    [
        (TableConvention.YEARS, 1),
        (TableConvention.MONTHS, 12),
        (TableConvention.WEEKS, 52),
        (TableConvention.DAYS, 365),
    ],
)
def test_scale_factors(convention, scale):
    assert convention.scale_factor() == scale
    assert get_scale_factor(convention) == scale


def test_convention_from_name_is_case_insensitive():
    assert get_table_convention("months") is TableConvention.MONTHS
    assert get_table_convention(" Years ") is TableConvention.YEARS
    assert get_table_convention(TableConvention.DAYS) is TableConvention.DAYS


def test_unknown_convention_raises():
    with pytest.raises(UnknownConventionError):
        get_table_convention("QUARTERS")
    with pytest.raises(UnknownConventionError):
        get_scale_factor("MONTHS")
    assert issubclass(UnknownConventionError, ConstructionError)


def test_offset_to_date_clips_month_end():
    assert offset_to_date(date(2024, 1, 31), 1, TableConvention.MONTHS) == date(2024, 2, 29)
    assert offset_to_date("2024-01-02", 2, "YEARS") == date(2026, 1, 2)
    assert offset_to_date("20240102", 3, "WEEKS") == date(2024, 1, 23)
    assert offset_to_date(date(2024, 1, 2), -1, "DAYS") == date(2024, 1, 1)


def test_date_to_offset_truncates():
    ref = date(2024, 1, 15)
    assert date_to_offset(ref, date(2025, 3, 14), "MONTHS") == 13
    assert date_to_offset(ref, date(2026, 1, 14), "YEARS") == 1
    assert date_to_offset(ref, date(2024, 1, 29), "WEEKS") == 2
    assert date_to_offset(ref, date(2023, 12, 15), "MONTHS") == -1


def test_round_half_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3
    assert round_half_away(12.48) == 12
    assert round_half_away(0.4) == 0
    # largest double below one half
    assert round_half_away(0.49999999999999994) == 0
    assert round_half_away(-0.49999999999999994) == 0
    assert round_half_away(float(2**52 + 1)) == 2**52 + 1
    assert is_integral(24.0000000001)
    assert not is_integral(12.48)


def test_to_date_rejects_garbage():
    with pytest.raises(ValueError):
        to_date("not a date")
    with pytest.raises(TypeError):
        to_date(20240102)


def test_offset_to_delta_per_convention():
    start = date(2024, 1, 2)
    assert start + offset_to_delta(2, "YEARS") == date(2026, 1, 2)
    assert start + offset_to_delta(1, TableConvention.WEEKS) == date(2024, 1, 9)
    assert start + offset_to_delta(-1, TableConvention.DAYS) == date(2024, 1, 1)


def test_configure_logging_sets_package_level():
    logger = settings.configure_logging("debug")
    try:
        assert logger.name == "gridlib"
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(logging.NOTSET)

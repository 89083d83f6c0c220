from datetime import date

import pytest

from gridlib.table import DataTableBasic, DataTableLinear

REFERENCE_DATE = date(2024, 1, 2)

# Swaption-style 3x3 grid in months: value = maturity + termination / 100
MATURITIES = [12, 24, 36]
TERMINATIONS = [12, 24, 60]


def _regular_points():
    maturities, terminations, values = [], [], []
    for m in MATURITIES:
        for t in TERMINATIONS:
            maturities.append(m)
            terminations.append(t)
            values.append(m + t / 100.0)
    return maturities, terminations, values


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def regular_points():
    return _regular_points()


@pytest.fixture
def basic_table(regular_points):
    return DataTableBasic("swaption_vol", "MONTHS", REFERENCE_DATE, None, *regular_points)


@pytest.fixture
def linear_table(regular_points):
    return DataTableLinear("swaption_vol", "MONTHS", REFERENCE_DATE, None, *regular_points)

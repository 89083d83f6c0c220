import copy
from datetime import date

import numpy as np
import pandas as pd
import pytest

from gridlib.conventions import TableConvention
from gridlib.errors import ConstructionError, MissingEntryError, QueryError, UnknownConventionError
from gridlib.table import DataTable, DataTableBasic, GridEntry, TenorPoint


def test_exact_round_trip(basic_table, regular_points):
    for m, t, v in zip(*regular_points):
        assert basic_table.get_value(m, t) == v


def test_metadata_is_passed_through(reference_date):
    meta = object()
    table = DataTableBasic("atm", TableConvention.YEARS, "2024-01-02", meta, [1], [2], [0.5])
    assert table.name == "atm"
    assert table.convention is TableConvention.YEARS
    assert table.reference_date == reference_date
    assert table.schedule_meta_data is meta
    assert isinstance(table, DataTable)


def test_axes_are_ordered(basic_table):
    assert basic_table.get_maturities() == [12, 24, 36]
    assert basic_table.get_terminations() == [12, 24, 60]
    assert basic_table.get_terminations_for_maturity(24) == [12, 24, 60]
    assert basic_table.get_maturities_for_termination(60) == [12, 24, 36]
    assert basic_table.get_terminations_for_maturity(48) == []
    assert basic_table.size() == len(basic_table) == 9
    assert basic_table.is_regular()


def test_sparse_axes():
    table = DataTableBasic("sparse", "MONTHS", date(2024, 1, 2), None,
                           [36, 12, 12], [24, 60, 12], [3.0, 2.0, 1.0])
    assert table.get_maturities() == [12, 36]
    assert table.get_terminations() == [12, 24, 60]
    assert table.get_terminations_for_maturity(12) == [12, 60]
    assert table.get_maturities_for_termination(24) == [36]
    assert not table.is_regular()
    assert [e.point for e in table] == [TenorPoint(12, 12), TenorPoint(12, 60), TenorPoint(36, 24)]


def test_numpy_inputs_are_accepted():
    table = DataTableBasic("np", "DAYS", date(2024, 1, 2), None,
                           np.array([1, 2]), np.array([7, 7]), np.array([0.1, 0.2]))
    assert table.get_value(np.int64(2), np.int64(7)) == pytest.approx(0.2)


def test_missing_entry(basic_table):
    with pytest.raises(MissingEntryError) as info:
        basic_table.get_value(18, 12)
    assert isinstance(info.value, KeyError)
    assert isinstance(info.value, QueryError)


def test_continuous_lookup_rounds_onto_grid(basic_table):
    # 1 year maturity, 3 years termination -> (12, 24) months
    assert basic_table.get_value(1.0, 3.0) == basic_table.get_value(12, 24)
    assert basic_table.get_value(1.01, 3.0) == basic_table.get_value(12, 24)


def test_contains_entry_for(basic_table):
    assert basic_table.contains_entry_for(12, 24)
    assert not basic_table.contains_entry_for(12, 36)
    assert basic_table.contains_entry_for(1.0, 3.0)
    # off-node float coordinates are never exact
    assert not basic_table.contains_entry_for(1.01, 3.0)
    assert basic_table.get_value(1.04, 2.0) == basic_table.get_value(12, 12)
    assert not basic_table.contains_entry_for(1.04, 2.0)
    assert TenorPoint(36, 60) in basic_table
    assert (36, 60) in basic_table


@pytest.mark.parametrize(
    "maturities, terminations, values",
    [
        ([12, 24], [12], [1.0, 2.0]),
        ([12], [12], []),
        ([12, 12], [24, 24], [1.0, 2.0]),
        ([12.5], [24], [1.0]),
    ],
)
def test_construction_errors(maturities, terminations, values):
    with pytest.raises(ConstructionError):
        DataTableBasic("bad", "MONTHS", date(2024, 1, 2), None, maturities, terminations, values)


def test_unknown_convention_on_construction():
    with pytest.raises(UnknownConventionError):
        DataTableBasic("bad", "QUARTERS", date(2024, 1, 2))
    with pytest.raises(ConstructionError):
        DataTableBasic("bad", "MONTHS", "yesterday")


def test_add_point_returns_new_table(basic_table):
    extended = basic_table.add_point(48, 12, 48.12)
    assert extended.size() == basic_table.size() + 1
    assert extended.get_value(48, 12) == 48.12
    assert not basic_table.contains_entry_for(48, 12)
    assert type(extended) is DataTableBasic
    with pytest.raises(ConstructionError):
        basic_table.add_point(12, 12, 0.0)
    several = basic_table.add_points([48, 48], [12, 24], [1.0, 2.0])
    assert several.get_terminations_for_maturity(48) == [12, 24]


def test_clone_and_copy_are_equal_but_independent(basic_table):
    for clone in (basic_table.clone(), copy.copy(basic_table), copy.deepcopy(basic_table)):
        assert clone == basic_table
        assert clone is not basic_table


def test_frame_conversion(basic_table):
    frame = basic_table.to_frame()
    assert list(frame.columns) == ["maturity", "termination", "value"]
    assert len(frame) == 9

    shuffled = frame.sample(frac=1.0, random_state=7)
    rebuilt = DataTableBasic.from_frame(shuffled, "swaption_vol", "MONTHS", date(2024, 1, 2))
    assert rebuilt == basic_table

    with pytest.raises(ConstructionError):
        DataTableBasic.from_frame(pd.DataFrame({"maturity": [1]}), "x", "YEARS", date(2024, 1, 2))


def test_frame_offsets_must_be_whole_numbers():
    whole = pd.DataFrame({"maturity": [12.0, 24.0], "termination": [12, 12], "value": [1.0, 2.0]})
    table = DataTableBasic.from_frame(whole, "vol", "MONTHS", date(2024, 1, 2))
    assert table.get_maturities() == [12, 24]

    fractional = whole.assign(maturity=[12.7, 24.0])
    with pytest.raises(ConstructionError):
        DataTableBasic.from_frame(fractional, "vol", "MONTHS", date(2024, 1, 2))

    missing = whole.assign(termination=[12.0, np.nan])
    with pytest.raises(ConstructionError):
        DataTableBasic.from_frame(missing, "vol", "MONTHS", date(2024, 1, 2))


def test_to_string_scales_values():
    table = DataTableBasic("vol", "MONTHS", date(2024, 1, 2), None, [12, 12, 24], [12, 24, 12],
                           [0.01, 0.02, 0.03])
    text = table.to_string(0.0001)
    assert text.startswith("Name: vol, convention: MONTHS, reference date: 2024-01-02")
    assert "100.0" in text
    assert "300.0" in text
    assert str(table) == table.to_string(1.0)


def test_empty_table():
    table = DataTableBasic("empty", "YEARS", date(2024, 1, 2))
    assert table.size() == 0
    assert table.get_maturities() == []
    assert "(empty)" in table.to_string()
    with pytest.raises(MissingEntryError):
        table.get_value(1, 1)


def test_date_for_offset(basic_table):
    assert basic_table.get_date_for_offset(12) == date(2025, 1, 2)


def test_iteration_yields_grid_entries(basic_table):
    entries = list(basic_table)
    assert all(isinstance(e, GridEntry) for e in entries)
    assert entries[0].maturity == 12 and entries[0].termination == 12
    assert entries[-1].point == TenorPoint(36, 60)

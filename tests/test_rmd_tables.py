import pytest

from engine.rmd_tables import DEFAULT_RMD_TABLE, RMDTable


def test_divisor_lookup():
    assert DEFAULT_RMD_TABLE.divisor_for(73) == 26.5
    assert DEFAULT_RMD_TABLE.divisor_for(100) == 6.4


def test_ages_past_table_use_last_entry():
    assert DEFAULT_RMD_TABLE.divisor_for(101) == 6.4
    assert DEFAULT_RMD_TABLE.divisor_for(120) == 6.4


def test_gaps_use_nearest_lower_age():
    table = RMDTable({75: 20.0, 80: 10.0}, start_age=73)
    assert table.divisor_for(77) == 20.0
    assert table.divisor_for(73) == 20.0
    assert table.divisor_for(85) == 10.0


def test_required_withdrawal():
    assert DEFAULT_RMD_TABLE.required_withdrawal(265_000, 73) == pytest.approx(10_000)
    assert DEFAULT_RMD_TABLE.required_withdrawal(265_000, 72) == 0.0
    assert DEFAULT_RMD_TABLE.required_withdrawal(0, 80) == 0.0


def test_lookup_has_no_hidden_state():
    first = [DEFAULT_RMD_TABLE.divisor_for(age) for age in range(73, 110)]
    second = [DEFAULT_RMD_TABLE.divisor_for(age) for age in range(73, 110)]
    assert first == second


def test_non_positive_divisor_rejected():
    with pytest.raises(ValueError):
        RMDTable({73: 0.0})

import numpy as np
import pytest

from engine.tax_engine import DEFAULT_TAX_TABLE, TaxTable, estimate_tax, marginal_rate


def test_income_below_standard_deduction_is_untaxed():
    assert estimate_tax(0) == 0.0
    assert estimate_tax(-5_000) == 0.0
    assert estimate_tax(14_600) == 0.0


def test_progressive_brackets():
    # Top of the 10% bracket
    assert estimate_tax(14_600 + 11_600) == pytest.approx(1_160.0)
    # Top of the 12% bracket
    assert estimate_tax(14_600 + 47_150) == pytest.approx(1_160.0 + 35_550 * 0.12)
    # Into the 22% bracket
    assert estimate_tax(85_000) == pytest.approx(5_426.0 + 23_250 * 0.22)


def test_substitute_two_bracket_table():
    table = TaxTable.from_pairs([(10_000, 0.10), (np.inf, 0.20)], standard_deduction=0)
    assert estimate_tax(25_000, table) == pytest.approx(1_000 + 3_000)
    assert estimate_tax(5_000, table) == pytest.approx(500)


def test_tax_is_monotonic():
    rng = np.random.default_rng(42)
    incomes = np.sort(rng.uniform(0, 1_500_000, size=500))
    taxes = [estimate_tax(x) for x in incomes]
    assert all(a <= b + 1e-9 for a, b in zip(taxes, taxes[1:]))


def test_tax_is_pure():
    assert estimate_tax(123_456.78) == estimate_tax(123_456.78)


def test_marginal_rate():
    assert marginal_rate(1_000) == 0.0
    assert marginal_rate(14_600 + 20_000) == 0.12
    assert marginal_rate(10_000_000) == 0.37


def test_ceiling_for():
    assert DEFAULT_TAX_TABLE.ceiling_for(1) == 47_150
    assert DEFAULT_TAX_TABLE.ceiling_for(6) == np.inf
    with pytest.raises(ValueError):
        DEFAULT_TAX_TABLE.ceiling_for(7)


@pytest.mark.parametrize("pairs", [
    [(10_000, 0.20), (np.inf, 0.10)],   # rates not progressive
    [(10_000, 0.10), (5_000, 0.20), (np.inf, 0.30)],   # ceilings decrease
    [(10_000, 0.10), (50_000, 0.20)],   # no unbounded top bracket
    [],
])
def test_invalid_tables_rejected(pairs):
    with pytest.raises(ValueError):
        TaxTable.from_pairs(pairs, standard_deduction=0)

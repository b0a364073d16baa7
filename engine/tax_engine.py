"""
Progressive federal income tax estimate for retirement drawdown planning.
The bracket table and standard deduction are data: pass a TaxTable to any
function here to substitute your own (e.g. a two-bracket table in tests).
"""
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from config.tax_assumptions import ORDINARY_BRACKETS_SINGLE, STANDARD_DEDUCTION_SINGLE


@dataclass(frozen=True)
class TaxBracket:
    ceiling: float
    rate: float


@dataclass(frozen=True)
class TaxTable:
    brackets: Tuple[TaxBracket, ...]
    standard_deduction: float

    def __post_init__(self):
        if not self.brackets:
            raise ValueError("Tax table needs at least one bracket.")
        if np.isfinite(self.brackets[-1].ceiling):
            raise ValueError("The top tax bracket must be unbounded (ceiling = inf).")
        for lower, upper in zip(self.brackets, self.brackets[1:]):
            if upper.ceiling <= lower.ceiling:
                raise ValueError(f"Bracket ceilings must increase: {lower.ceiling} -> {upper.ceiling}")
            if upper.rate <= lower.rate:
                raise ValueError(f"Bracket rates must increase: {lower.rate} -> {upper.rate}")

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[float, float]], standard_deduction: float) -> "TaxTable":
        """Build a table from (ceiling, rate) pairs."""
        return cls(
            brackets=tuple(TaxBracket(float(ceiling), float(rate)) for ceiling, rate in pairs),
            standard_deduction=float(standard_deduction),
        )

    def ceiling_for(self, index: int) -> float:
        """Taxable-income ceiling (after deduction) of the bracket at `index`."""
        if not 0 <= index < len(self.brackets):
            raise ValueError(f"Bracket index {index} out of range (0-{len(self.brackets) - 1}).")
        return self.brackets[index].ceiling


DEFAULT_TAX_TABLE = TaxTable.from_pairs(ORDINARY_BRACKETS_SINGLE, STANDARD_DEDUCTION_SINGLE)


def estimate_tax(taxable_income: float, table: TaxTable = DEFAULT_TAX_TABLE) -> float:
    """
    Tax owed on `taxable_income` (gross ordinary income before the standard
    deduction).

    Args:
        taxable_income: Ordinary income for the year.
        table: Bracket table plus standard deduction.

    Returns:
        float: Tax owed, never negative.
    """
    income = max(0.0, taxable_income - table.standard_deduction)
    if income <= 0:
        return 0.0

    tax = 0.0
    previous_ceiling = 0.0
    for bracket in table.brackets:
        # Portion of income falling inside this bracket
        top = min(income, bracket.ceiling)
        tax += (top - previous_ceiling) * bracket.rate
        if income <= bracket.ceiling:
            break
        previous_ceiling = bracket.ceiling

    return tax


def marginal_rate(taxable_income: float, table: TaxTable = DEFAULT_TAX_TABLE) -> float:
    """Rate applied to the next dollar of income."""
    income = max(0.0, taxable_income - table.standard_deduction)
    if taxable_income < table.standard_deduction:
        return 0.0
    for bracket in table.brackets:
        if income < bracket.ceiling:
            return bracket.rate
    return table.brackets[-1].rate

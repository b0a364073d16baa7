# tax_planning.py
#
# Income targets used by the Roth optimizer and the bracket-filler strategy.
#

from engine.tax_engine import DEFAULT_TAX_TABLE, TaxTable


def get_conversion_target(target_bracket_index: int, table: TaxTable = DEFAULT_TAX_TABLE) -> float:
    """
    Gross taxable income at which the target bracket is full: the bracket
    ceiling plus the standard deduction (income below the deduction is
    untaxed).  Unbounded for the top bracket.
    """
    return table.ceiling_for(target_bracket_index) + table.standard_deduction


def remaining_room(target_income: float, taxable_income: float) -> float:
    """Income that can still be added before reaching `target_income`."""
    return max(0.0, target_income - taxable_income)

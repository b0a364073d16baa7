# engine/roth_optimizer.py

import logging

import numpy as np

from engine.tax_engine import DEFAULT_TAX_TABLE, TaxTable
from engine.tax_planning import get_conversion_target, remaining_room
from models import SimulationConfig

logger = logging.getLogger(__name__)


def in_conversion_window(age: int, config: SimulationConfig) -> bool:
    return config.conversion_start_age <= age <= config.conversion_end_age


def optimal_roth_conversion(
    traditional_balance: float,
    taxable_income: float,
    target_bracket_index: int,
    table: TaxTable = DEFAULT_TAX_TABLE,
) -> float:
    """
    Calculates the Roth conversion that fills taxable income up to the top
    of the target bracket.

    Args:
        traditional_balance: Funds available to convert.
        taxable_income: Taxable income already accumulated this year, BEFORE
            this conversion.
    """
    if traditional_balance <= 0:
        return 0.0

    target_income = get_conversion_target(target_bracket_index, table)

    # Room is the space between current income and the bracket ceiling
    room_in_tax_bracket = remaining_room(target_income, taxable_income)
    if not np.isfinite(room_in_tax_bracket):
        return traditional_balance

    return min(traditional_balance, room_in_tax_bracket)


def manual_roth_conversion(traditional_balance: float, annual_amount: float) -> float:
    return max(0.0, min(traditional_balance, annual_amount))


def conversion_amount(
    age: int,
    traditional_balance: float,
    taxable_income: float,
    config: SimulationConfig,
    table: TaxTable = DEFAULT_TAX_TABLE,
) -> float:
    """
    Amount to move from traditional to Roth this year.  Zero outside the
    conversion window or when there is nothing left to convert.
    """
    if traditional_balance <= 0 or not in_conversion_window(age, config):
        return 0.0

    if config.uses_auto_optimizer:
        amount = optimal_roth_conversion(
            traditional_balance, taxable_income, config.target_bracket_index, table
        )
        logger.debug(
            "Age %d: auto conversion %.2f fills bracket %d (income before %.2f)",
            age, amount, config.target_bracket_index, taxable_income,
        )
        return amount

    return manual_roth_conversion(traditional_balance, config.conversion_amount)

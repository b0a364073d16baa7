# config/tax_assumptions.py
# Reference tables used by the drawdown engine.  These are **defaults**:
# every engine entry point accepts replacement tables.
import numpy as np
from typing import Dict, List, Tuple

# =============================================================================
# Federal ordinary income brackets (simplified 2024, single filer)
# (ceiling, marginal rate) - the last ceiling must be unbounded
# =============================================================================
ORDINARY_BRACKETS_SINGLE: List[Tuple[float, float]] = [
    (11_600, 0.10),
    (47_150, 0.12),
    (100_525, 0.22),
    (191_950, 0.24),
    (243_725, 0.32),
    (609_350, 0.35),
    (np.inf, 0.37),
]

STANDARD_DEDUCTION_SINGLE = 14_600

# =============================================================================
# IRS Uniform Lifetime Table (RMD divisors, ages 73-100)
# =============================================================================
RMD_START_AGE = 73

UNIFORM_LIFETIME_TABLE: Dict[int, float] = {
    73: 26.5, 74: 25.5, 75: 24.6, 76: 23.7, 77: 22.9, 78: 22.0, 79: 21.1,
    80: 20.2, 81: 19.4, 82: 18.5, 83: 17.7, 84: 16.8, 85: 16.0, 86: 15.2,
    87: 14.4, 88: 13.7, 89: 12.9, 90: 12.2, 91: 11.5, 92: 10.8, 93: 10.1,
    94: 9.5, 95: 8.9, 96: 8.4, 97: 7.8, 98: 7.3, 99: 6.8, 100: 6.4,
}

# =============================================================================
# Simplifying assumptions
# =============================================================================

# Share of Social Security benefits treated as taxable income (flat, not tiered)
SS_TAXABLE_FRACTION = 0.85

# Bracket-filler strategy: taxable income to fill from traditional accounts
BRACKET_FILLER_TARGET_INCOME = 60_000

# Sequence-of-returns stress test
STRESS_RETURN = -0.12
STRESS_YEARS = 3

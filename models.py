# models.py
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

# Withdrawal strategy names accepted by the engine
STRATEGIES: Tuple[str, ...] = ("taxable-first", "bracket-filler", "proportional")

POOLS: Tuple[str, ...] = ("taxable", "traditional", "roth")


@dataclass(frozen=True)
class AccountBalances:
    """Immutable per-pool amounts (balances, withdrawals, ...)."""
    taxable: float = 0.0
    traditional: float = 0.0
    roth: float = 0.0

    @property
    def total(self) -> float:
        return self.taxable + self.traditional + self.roth

    def as_dict(self) -> Dict[str, float]:
        return {pool: getattr(self, pool) for pool in POOLS}


@dataclass(frozen=True)
class SimulationConfig:
    # Ages
    current_age: int
    target_retirement_age: int
    retirement_end_age: int

    # Spending & market
    annual_spending: float
    inflation_rate: float
    avg_return: float
    stress_test: bool = False

    # Strategy
    strategy: str = "taxable-first"

    # Roth conversion ladder
    conversion_start_age: int = 0
    conversion_end_age: int = -1
    conversion_amount: float = 0.0
    auto_optimize: bool = False
    target_bracket_index: int = 1
    advanced_features: bool = False

    # Social Security
    ss_amount: float = 0.0
    ss_start_age: int = 67

    # Portfolio
    balances: AccountBalances = field(default_factory=AccountBalances)

    # Calendar year label of the first simulated year
    start_year: int = field(default_factory=lambda: date.today().year)

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown withdrawal strategy '{self.strategy}'. "
                f"Expected one of: {', '.join(STRATEGIES)}"
            )

    @property
    def uses_auto_optimizer(self) -> bool:
        return self.auto_optimize and self.advanced_features


@dataclass(frozen=True)
class YearResult:
    age: int
    year: int
    start_total: float
    spending: float
    ss_income: float
    conversion: float
    rmd: float
    rmd_reinvested: float
    need_after_rmd: float
    withdrawals: AccountBalances
    taxable_income: float
    tax_paid: float
    unpaid_tax: float
    shortfall: float
    end_balances: AccountBalances
    growth_rate: float

    @property
    def total_balance(self) -> float:
        return self.end_balances.total

    def as_row(self) -> Dict[str, Any]:
        """Flat dictionary used for DataFrame rows."""
        row = {
            "Age": self.age,
            "Year": self.year,
            "Start Total": self.start_total,
            "Spending": self.spending,
            "Social Security": self.ss_income,
            "Roth Conversion": self.conversion,
            "RMD": self.rmd,
            "RMD Reinvested": self.rmd_reinvested,
            "Need After RMD": self.need_after_rmd,
        }
        for pool in POOLS:
            row[f"{pool.capitalize()} Withdrawal"] = getattr(self.withdrawals, pool)
        row.update({
            "Taxable Income": self.taxable_income,
            "Tax Paid": self.tax_paid,
            "Unpaid Tax": self.unpaid_tax,
            "Shortfall": self.shortfall,
        })
        for pool in POOLS:
            row[f"{pool.capitalize()} Bal"] = getattr(self.end_balances, pool)
        row["Total Balance"] = self.total_balance
        row["Growth Rate"] = self.growth_rate
        return row


@dataclass(frozen=True)
class SimulationSummary:
    total_tax: float
    depletion_age: Optional[int]
    estate_value: float
    conversion_plan: Tuple[YearResult, ...] = ()

    @property
    def depleted(self) -> bool:
        return self.depletion_age is not None


@dataclass(frozen=True)
class SimulationResult:
    years: Tuple[YearResult, ...]
    summary: SimulationSummary

    def __iter__(self):
        # allows: years, summary = simulate(config)
        return iter((list(self.years), self.summary))

    def to_frame(self) -> pd.DataFrame:
        rows: List[Dict[str, Any]] = [yr.as_row() for yr in self.years]
        if not rows:
            return pd.DataFrame(columns=list(_empty_row().keys()))
        return pd.DataFrame(rows).set_index("Age", drop=False)


def _empty_row() -> Dict[str, Any]:
    zeros = AccountBalances()
    return YearResult(
        age=0, year=0, start_total=0.0, spending=0.0, ss_income=0.0,
        conversion=0.0, rmd=0.0, rmd_reinvested=0.0, need_after_rmd=0.0,
        withdrawals=zeros, taxable_income=0.0, tax_paid=0.0, unpaid_tax=0.0,
        shortfall=0.0, end_balances=zeros, growth_rate=0.0,
    ).as_row()

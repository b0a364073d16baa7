# engine.simulator.py

import logging
from typing import List, Optional

from config.tax_assumptions import SS_TAXABLE_FRACTION, STRESS_RETURN, STRESS_YEARS
from engine.ledger import AccountLedger
from engine.rmd_tables import DEFAULT_RMD_TABLE, RMDTable
from engine.roth_optimizer import conversion_amount
from engine.tax_engine import DEFAULT_TAX_TABLE, TaxTable, estimate_tax
from engine.withdrawal_engine import WithdrawalStrategy, get_strategy
from models import SimulationConfig, SimulationResult, SimulationSummary, YearResult

logger = logging.getLogger(__name__)


class RetirementSimulator:
    """
    Deterministic year-by-year drawdown projection for one configuration.

    Each call to `run_simulation` starts from a fresh copy of the configured
    balances, so one simulator can be run repeatedly with identical results.
    """
    def __init__(
        self,
        config: SimulationConfig,
        tax_table: Optional[TaxTable] = None,
        rmd_table: Optional[RMDTable] = None,
        strategy: Optional[WithdrawalStrategy] = None,
        ss_taxable_fraction: float = SS_TAXABLE_FRACTION,
        reinvest_rmd_surplus: bool = False,
    ):
        self.config = config
        self.tax_table = tax_table or DEFAULT_TAX_TABLE
        self.rmd_table = rmd_table or DEFAULT_RMD_TABLE
        self.strategy = strategy or get_strategy(config.strategy)
        self.ss_taxable_fraction = ss_taxable_fraction
        self.reinvest_rmd_surplus = reinvest_rmd_surplus

        self.debug_log: List[str] = []

    # =========================================================================
    # 1. CORE SIMULATION RUNNER
    # =========================================================================
    def run_simulation(self) -> SimulationResult:
        """Runs every year from current age through the terminal age."""
        cfg = self.config
        self.debug_log = []

        ledger = AccountLedger.from_balances(cfg.balances)
        years: List[YearResult] = []

        if cfg.retirement_end_age < cfg.current_age:
            logger.warning(
                "Terminal age %d is before current age %d; nothing to simulate.",
                cfg.retirement_end_age, cfg.current_age,
            )

        for year_index, age in enumerate(range(cfg.current_age, cfg.retirement_end_age + 1)):
            result = self.simulate_year(ledger, age, year_index)
            years.append(result)

        summary = summarize(years, initial_total=cfg.balances.total)
        logger.info(
            "Simulated %d years (%s): total tax %.0f, estate %.0f, depletion age %s",
            len(years), cfg.strategy, summary.total_tax, summary.estate_value,
            summary.depletion_age if summary.depleted else "never",
        )
        return SimulationResult(years=tuple(years), summary=summary)

    # =========================================================================
    # 2. ONE SIMULATED YEAR
    # =========================================================================
    def simulate_year(self, ledger: AccountLedger, age: int, year_index: int) -> YearResult:
        """
        Advances `ledger` by one year and returns the year's audit trail.
        Steps run in a fixed order: Social Security, conversion, RMD,
        withdrawals, tax, growth.
        """
        cfg = self.config
        start_total = ledger.total
        inflation_factor = (1 + cfg.inflation_rate) ** year_index

        # -----------------------
        # STEP 1: Social Security
        # -----------------------
        ss_income = cfg.ss_amount * inflation_factor if age >= cfg.ss_start_age else 0.0
        taxable_income = ss_income * self.ss_taxable_fraction

        # -----------------------
        # STEP 2: Spending need after Social Security
        # -----------------------
        retired = age >= cfg.target_retirement_age
        spending = cfg.annual_spending * inflation_factor if retired else 0.0
        need = max(0.0, spending - ss_income)

        # -----------------------
        # STEP 3: Roth conversion
        # -----------------------
        conversion = conversion_amount(
            age, ledger.balance("traditional"), taxable_income, cfg, self.tax_table
        )
        conversion = ledger.transfer("traditional", "roth", conversion)
        taxable_income += conversion

        # -----------------------
        # STEP 4: Required minimum distribution
        # -----------------------
        rmd = ledger.withdraw(
            "traditional", self.rmd_table.required_withdrawal(ledger.balance("traditional"), age)
        )
        taxable_income += rmd
        rmd_spent = min(need, rmd)
        need -= rmd_spent
        # Distribution beyond the year's need leaves the portfolio unless reinvested
        rmd_reinvested = rmd - rmd_spent if self.reinvest_rmd_surplus else 0.0
        ledger.deposit("taxable", rmd_reinvested)

        # -----------------------
        # STEP 5: Withdrawal strategy
        # -----------------------
        need_after_rmd = need
        outcome = self.strategy.withdraw(need_after_rmd, ledger, taxable_income)
        taxable_income = outcome.taxable_income

        # -----------------------
        # STEP 6: Pay taxes (taxable first, then Roth - never traditional)
        # -----------------------
        tax_paid = estimate_tax(taxable_income, self.tax_table)
        unpaid_tax = tax_paid
        unpaid_tax -= ledger.withdraw("taxable", unpaid_tax)
        unpaid_tax -= ledger.withdraw("roth", unpaid_tax)

        # -----------------------
        # STEP 7: Growth (sequence-of-returns override when stress testing)
        # -----------------------
        growth_rate = self.growth_rate(year_index)
        ledger.grow(growth_rate)

        result = YearResult(
            age=age,
            year=cfg.start_year + year_index,
            start_total=start_total,
            spending=spending,
            ss_income=ss_income,
            conversion=conversion,
            rmd=rmd,
            rmd_reinvested=rmd_reinvested,
            need_after_rmd=need_after_rmd,
            withdrawals=outcome.withdrawals,
            taxable_income=taxable_income,
            tax_paid=tax_paid,
            unpaid_tax=max(0.0, unpaid_tax),
            shortfall=outcome.shortfall,
            end_balances=ledger.snapshot(),
            growth_rate=growth_rate,
        )

        msg = (
            f"Age {age}: need {need_after_rmd:,.0f} conv {conversion:,.0f} rmd {rmd:,.0f} "
            f"tax {tax_paid:,.0f} shortfall {outcome.shortfall:,.0f} end {result.total_balance:,.0f}"
        )
        self.debug_log.append(msg)
        logger.debug(msg)
        if outcome.shortfall > 0:
            logger.info("Age %d: spending shortfall of %.2f", age, outcome.shortfall)

        return result

    def growth_rate(self, year_index: int) -> float:
        if self.config.stress_test and year_index < STRESS_YEARS:
            return STRESS_RETURN
        return self.config.avg_return


# =============================================================================
# SUMMARY STATISTICS
# =============================================================================
def summarize(years: List[YearResult], initial_total: float = 0.0) -> SimulationSummary:
    """
    Derives headline statistics in one pass over the year series.  With no
    simulated years the estate value is the starting portfolio.
    """
    total_tax = 0.0
    depletion_age = None
    conversion_plan = []

    for yr in years:
        total_tax += yr.tax_paid
        if depletion_age is None and yr.total_balance <= 0 and yr.shortfall > 0:
            depletion_age = yr.age
        if yr.conversion > 0:
            conversion_plan.append(yr)

    estate_value = years[-1].total_balance if years else initial_total

    return SimulationSummary(
        total_tax=total_tax,
        depletion_age=depletion_age,
        estate_value=estate_value,
        conversion_plan=tuple(conversion_plan),
    )


def simulate(
    config: SimulationConfig,
    tax_table: Optional[TaxTable] = None,
    rmd_table: Optional[RMDTable] = None,
) -> SimulationResult:
    """
    Pure entry point: projects `config` and returns the year series plus
    summary.  Unpacks as `years, summary = simulate(config)`.
    """
    return RetirementSimulator(config, tax_table=tax_table, rmd_table=rmd_table).run_simulation()

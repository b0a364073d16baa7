# withdrawal_engine.py

from dataclasses import dataclass
from typing import Dict, Sequence, Type

from config.tax_assumptions import BRACKET_FILLER_TARGET_INCOME
from engine.ledger import AccountLedger
from engine.tax_planning import remaining_room
from models import POOLS, AccountBalances

# Draws from these pools are ordinary income
TAX_DEFERRED_POOLS = ("traditional",)


@dataclass(frozen=True)
class WithdrawalOutcome:
    withdrawals: AccountBalances
    taxable_income: float
    shortfall: float


class WithdrawalStrategy:
    """
    Decides which pools fund the spending need left after Social Security
    and RMDs.  Subclasses implement `_draw`; the ledger is mutated in place.
    """
    name = ""

    def withdraw(self, need: float, ledger: AccountLedger, taxable_income: float) -> WithdrawalOutcome:
        """
        Args:
            need: Spending still unfunded this year.
            ledger: Current balances (mutated).
            taxable_income: Taxable income accumulated so far this year.

        Returns:
            WithdrawalOutcome with per-pool draws, the updated taxable income
            and the unmet need (shortfall).
        """
        drawn = {pool: 0.0 for pool in POOLS}
        need = max(0.0, need)
        remaining = self._draw(need, ledger, taxable_income, drawn)

        for pool in TAX_DEFERRED_POOLS:
            taxable_income += drawn[pool]

        return WithdrawalOutcome(
            withdrawals=AccountBalances(**drawn),
            taxable_income=taxable_income,
            shortfall=max(0.0, remaining),
        )

    def _draw(self, need: float, ledger: AccountLedger, taxable_income: float, drawn: Dict[str, float]) -> float:
        raise NotImplementedError

    @staticmethod
    def _withdraw_in_order(order: Sequence[str], remaining: float, ledger: AccountLedger,
                           drawn: Dict[str, float]) -> float:
        """Drains pools in `order` until `remaining` is met; returns what is still unmet."""
        for pool in order:
            if remaining <= 0:
                break
            take = ledger.withdraw(pool, remaining)
            drawn[pool] += take
            remaining -= take
        return remaining


class TaxableFirstStrategy(WithdrawalStrategy):
    name = "taxable-first"
    order = ("taxable", "traditional", "roth")

    def _draw(self, need, ledger, taxable_income, drawn):
        return self._withdraw_in_order(self.order, need, ledger, drawn)


class BracketFillerStrategy(WithdrawalStrategy):
    """
    Fills taxable income up to `target_income` from traditional accounts,
    then falls back to taxable, Roth and (last) traditional.
    """
    name = "bracket-filler"
    fallback_order = ("taxable", "roth", "traditional")

    def __init__(self, target_income: float = BRACKET_FILLER_TARGET_INCOME):
        self.target_income = target_income

    def _draw(self, need, ledger, taxable_income, drawn):
        room = remaining_room(self.target_income, taxable_income)
        take = ledger.withdraw("traditional", min(room, need))
        drawn["traditional"] += take
        remaining = need - take

        return self._withdraw_in_order(self.fallback_order, remaining, ledger, drawn)


class ProportionalStrategy(WithdrawalStrategy):
    name = "proportional"

    def _draw(self, need, ledger, taxable_income, drawn):
        total = ledger.total
        if total <= 0 or need <= 0:
            return need

        # Shares are fixed from balances before any pool is touched
        shares = {pool: ledger.balance(pool) / total for pool in POOLS}
        for pool in POOLS:
            drawn[pool] += ledger.withdraw(pool, need * shares[pool])

        return need - sum(drawn.values())


STRATEGY_CLASSES: Dict[str, Type[WithdrawalStrategy]] = {
    cls.name: cls for cls in (TaxableFirstStrategy, BracketFillerStrategy, ProportionalStrategy)
}


def get_strategy(name: str, **kwargs) -> WithdrawalStrategy:
    try:
        strategy_cls = STRATEGY_CLASSES[name]
    except KeyError:
        raise ValueError(
            f"Unknown withdrawal strategy '{name}'. Expected one of: {', '.join(STRATEGY_CLASSES)}"
        ) from None
    return strategy_cls(**kwargs)

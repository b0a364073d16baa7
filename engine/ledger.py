# engine/ledger.py

from typing import Dict

from models import POOLS, AccountBalances


class AccountLedger:
    """
    Mutable per-run balances for the three tax pools (taxable, traditional, roth).
    Balances never go below zero: a withdrawal larger than the balance is
    filled partially and the caller tracks whatever is left unmet.
    """
    def __init__(self, taxable: float = 0.0, traditional: float = 0.0, roth: float = 0.0):
        self.balances: Dict[str, float] = {
            "taxable": max(0.0, float(taxable)),
            "traditional": max(0.0, float(traditional)),
            "roth": max(0.0, float(roth)),
        }

    @classmethod
    def from_balances(cls, balances: AccountBalances) -> "AccountLedger":
        return cls(balances.taxable, balances.traditional, balances.roth)

    def _check_pool(self, pool: str):
        if pool not in self.balances:
            raise KeyError(f"Unknown account pool '{pool}'. Expected one of: {', '.join(POOLS)}")

    def balance(self, pool: str) -> float:
        self._check_pool(pool)
        return self.balances[pool]

    @property
    def total(self) -> float:
        return sum(self.balances.values())

    def withdraw(self, pool: str, amount: float) -> float:
        """Takes up to `amount` from `pool`; returns what was actually taken."""
        self._check_pool(pool)
        if amount <= 0:
            return 0.0
        actual = min(self.balances[pool], amount)
        self.balances[pool] -= actual
        return actual

    def deposit(self, pool: str, amount: float):
        self._check_pool(pool)
        self.balances[pool] += amount

    def transfer(self, source: str, target: str, amount: float) -> float:
        moved = self.withdraw(source, amount)
        self.deposit(target, moved)
        return moved

    def grow(self, rate: float):
        for pool in self.balances:
            self.balances[pool] = max(0.0, self.balances[pool] * (1 + rate))

    def snapshot(self) -> AccountBalances:
        return AccountBalances(**self.balances)

    def __repr__(self):
        return f"AccountLedger({', '.join(f'{k}={v:,.2f}' for k, v in self.balances.items())})"

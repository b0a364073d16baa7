# engine/rmd_tables.py

"""
Required Minimum Distribution lookup.

- Divisors come from the IRS Uniform Lifetime Table (config/tax_assumptions.py)
- Ages past the end of the table use the last (smallest) divisor
- Ages missing inside the table use the nearest lower age
"""

from typing import Dict, Mapping, Optional

from config.tax_assumptions import RMD_START_AGE, UNIFORM_LIFETIME_TABLE


class RMDTable:
    def __init__(self, divisors: Optional[Mapping[int, float]] = None, start_age: int = RMD_START_AGE):
        table = dict(UNIFORM_LIFETIME_TABLE if divisors is None else divisors)
        if not table:
            raise ValueError("RMD table needs at least one age.")
        for age, divisor in table.items():
            if divisor <= 0:
                raise ValueError(f"RMD divisor for age {age} must be positive, got {divisor}.")

        self.divisors: Dict[int, float] = {int(age): float(d) for age, d in sorted(table.items())}
        self.start_age = start_age
        self._ages = list(self.divisors)

    def divisor_for(self, age: int) -> float:
        """
        Returns the life-expectancy divisor for `age`.

        Never fails: ages above the table use the last entry, ages below it
        use the first entry.
        """
        if age in self.divisors:
            return self.divisors[age]
        if age >= self._ages[-1]:
            return self.divisors[self._ages[-1]]

        # Nearest defined lower age
        lower = [a for a in self._ages if a < age]
        if not lower:
            return self.divisors[self._ages[0]]
        return self.divisors[lower[-1]]

    def required_withdrawal(self, traditional_balance: float, age: int) -> float:
        if age < self.start_age or traditional_balance <= 0:
            return 0.0
        return traditional_balance / self.divisor_for(age)


DEFAULT_RMD_TABLE = RMDTable()


__all__ = ["RMDTable", "DEFAULT_RMD_TABLE"]

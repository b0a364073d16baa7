# engine/comparison.py
#
# Side-by-side runs of the engine: every withdrawal strategy, and a Roth
# ladder against the same plan with no conversions.
#

import dataclasses
import logging
import multiprocessing as mp
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import pandas as pd

from engine.simulator import simulate
from models import STRATEGIES, SimulationConfig, SimulationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LadderComparison:
    ladder: SimulationResult
    baseline: SimulationResult

    @property
    def tax_savings(self) -> float:
        return self.baseline.summary.total_tax - self.ladder.summary.total_tax

    @property
    def legacy_delta(self) -> float:
        return self.ladder.summary.estate_value - self.baseline.summary.estate_value


def _run_strategy(args) -> SimulationResult:
    config, strategy = args
    return simulate(dataclasses.replace(config, strategy=strategy))


def compare_strategies(
    config: SimulationConfig,
    strategies: Optional[Iterable[str]] = None,
    processes: Optional[int] = None,
) -> Dict[str, SimulationResult]:
    """
    Runs `config` once per withdrawal strategy.

    Runs are independent, so with `processes` > 1 they are spread over a
    process pool.
    """
    names = list(strategies or STRATEGIES)
    jobs = [(config, name) for name in names]

    if processes and processes > 1 and len(jobs) > 1:
        with mp.Pool(min(processes, len(jobs))) as pool:
            results = pool.map(_run_strategy, jobs)
    else:
        results = [_run_strategy(job) for job in jobs]

    return dict(zip(names, results))


def compare_conversion_ladder(config: SimulationConfig) -> LadderComparison:
    """Runs the plan as configured and again with every conversion switched off."""
    baseline_config = dataclasses.replace(
        config, conversion_amount=0.0, auto_optimize=False,
        conversion_start_age=0, conversion_end_age=-1,
    )
    comparison = LadderComparison(ladder=simulate(config), baseline=simulate(baseline_config))
    logger.info(
        "Roth ladder: tax savings %.0f, legacy delta %.0f",
        comparison.tax_savings, comparison.legacy_delta,
    )
    return comparison


def strategy_table(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    """One row of headline statistics per strategy."""
    rows = []
    for name, result in results.items():
        s = result.summary
        rows.append({
            "Strategy": name,
            "Total Tax": s.total_tax,
            "Depletion Age": s.depletion_age,
            "Estate Value": s.estate_value,
            "Conversion Years": len(s.conversion_plan),
        })
    return pd.DataFrame(rows, columns=["Strategy", "Total Tax", "Depletion Age", "Estate Value",
                                       "Conversion Years"]).set_index("Strategy")

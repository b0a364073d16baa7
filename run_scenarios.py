# run_scenarios.py
#
# Runs one scenario under every withdrawal strategy and prints the headline
# numbers.  Usage:
#   python run_scenarios.py [setup.xml] [--strategy bracket-filler] [--stress-test]
#
import argparse
import logging
import multiprocessing as mp

from engine.comparison import compare_conversion_ladder, compare_strategies, strategy_table
from models import STRATEGIES
from utils.currency import format_currency_output, format_percent_output
from utils.input_adapter import get_simulation_config
from utils.xml_loader import parse_setup_xml

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Retirement drawdown and Roth conversion strategy comparison.")
    parser.add_argument("setup", nargs="?", help="Scenario setup XML (defaults to config/default_setup.xml)")
    parser.add_argument("--strategy", action="append", choices=STRATEGIES,
                        help="Strategy to run (repeatable; default: all)")
    parser.add_argument("--stress-test", action="store_true", help="Force -12%% returns for the first three years")
    parser.add_argument("--processes", type=int, default=max(1, mp.cpu_count() - 1),
                        help="Worker processes for the strategy runs")
    parser.add_argument("--csv", help="Write the year-by-year table of each strategy to <CSV>_<strategy>.csv")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    setup = parse_setup_xml(args.setup) if args.setup else None
    overrides = {"stress_test": True} if args.stress_test else {}
    config = get_simulation_config(setup, **overrides)
    logger.debug("Running %s", config)

    results = compare_strategies(config, strategies=args.strategy, processes=args.processes)
    table = strategy_table(results)

    print(f"\nAges {config.current_age}-{config.retirement_end_age}, "
          f"spending {format_currency_output(config.annual_spending)}/yr, "
          f"return {format_percent_output(config.avg_return)}, "
          f"portfolio {format_currency_output(config.balances.total)}")
    for name, row in table.iterrows():
        depletion = "never" if results[name].summary.depletion_age is None else int(row["Depletion Age"])
        print(f"{name:>15}: lifetime tax {format_currency_output(row['Total Tax'])}"
              f" | estate {format_currency_output(row['Estate Value'])}"
              f" | depleted at {depletion}")

    ladder = compare_conversion_ladder(config)
    print(f"\nRoth ladder ({config.strategy}): tax savings {format_currency_output(ladder.tax_savings)}, "
          f"legacy gain {format_currency_output(ladder.legacy_delta)}")

    if args.csv:
        for name, result in results.items():
            path = f"{args.csv}_{name}.csv"
            result.to_frame().to_csv(path, index=False)
            print(f"Wrote {path}")


if __name__ == "__main__":
    main()

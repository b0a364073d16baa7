import dataclasses

import pytest

from engine.comparison import compare_conversion_ladder, compare_strategies, strategy_table
from engine.simulator import simulate
from models import STRATEGIES


def test_compare_strategies_runs_each_strategy(default_like_config):
    results = compare_strategies(default_like_config)
    assert list(results) == list(STRATEGIES)
    for name, result in results.items():
        expected = simulate(dataclasses.replace(default_like_config, strategy=name))
        assert result == expected


def test_compare_strategies_in_process_pool(default_like_config):
    serial = compare_strategies(default_like_config, processes=1)
    parallel = compare_strategies(default_like_config, processes=2)
    assert parallel == serial


def test_compare_subset(default_like_config):
    results = compare_strategies(default_like_config, strategies=["proportional"])
    assert list(results) == ["proportional"]


def test_strategies_differ_in_tax(default_like_config):
    results = compare_strategies(default_like_config)
    taxes = {name: r.summary.total_tax for name, r in results.items()}
    assert len(set(round(t, 2) for t in taxes.values())) > 1


def test_conversion_ladder_against_baseline(default_like_config):
    comparison = compare_conversion_ladder(default_like_config)

    assert len(comparison.ladder.summary.conversion_plan) == 11   # ages 62-72
    assert comparison.baseline.summary.conversion_plan == ()
    assert comparison.tax_savings == pytest.approx(
        comparison.baseline.summary.total_tax - comparison.ladder.summary.total_tax
    )
    assert comparison.legacy_delta == pytest.approx(
        comparison.ladder.summary.estate_value - comparison.baseline.summary.estate_value
    )


def test_strategy_table(default_like_config):
    table = strategy_table(compare_strategies(default_like_config))
    assert list(table.index) == list(STRATEGIES)
    assert list(table.columns) == ["Total Tax", "Depletion Age", "Estate Value", "Conversion Years"]
    assert (table["Conversion Years"] == 11).all()

import pytest

from models import AccountBalances, SimulationConfig


def build_config(taxable=0.0, traditional=0.0, roth=0.0, **overrides) -> SimulationConfig:
    """Single-year, zero-growth, no-income scenario unless overridden."""
    params = dict(
        current_age=65,
        target_retirement_age=65,
        retirement_end_age=65,
        annual_spending=0.0,
        inflation_rate=0.0,
        avg_return=0.0,
        ss_amount=0.0,
        ss_start_age=67,
        start_year=2026,
        balances=AccountBalances(taxable=taxable, traditional=traditional, roth=roth),
    )
    params.update(overrides)
    return SimulationConfig(**params)


@pytest.fixture
def make_config():
    return build_config


@pytest.fixture
def default_like_config():
    """The reference calculator's default household."""
    return build_config(
        taxable=350_000, traditional=1_500_000, roth=200_000,
        current_age=62, target_retirement_age=62, retirement_end_age=95,
        annual_spending=85_000, inflation_rate=0.03, avg_return=0.065,
        ss_amount=35_000, ss_start_age=67,
        conversion_amount=40_000, conversion_start_age=62, conversion_end_age=72,
    )

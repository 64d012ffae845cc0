from __future__ import annotations

from typing import Callable

import pytest

from rent_vs_buy.schemas import Scenario

# $500K home, 20% down, $3K/mo rent budget, 10 years, index-fund investor
BASE_ANSWERS = dict(
    annual_income=125000,
    monthly_budget=3000,
    down_payment=100000,
    home_price=500000,
    investment_style=0.07,
    years_to_stay=10,
    big_expenses=0,
    location="90210",
    total_savings=137500,
    household="single",
)


@pytest.fixture
def make_scenario() -> Callable[..., Scenario]:
    def _make(**changes) -> Scenario:
        return Scenario(**{**BASE_ANSWERS, **changes})

    return _make


@pytest.fixture
def base_scenario(make_scenario) -> Scenario:
    return make_scenario()

from __future__ import annotations

import pytest

from rent_vs_buy.mortgage import interest_paid_in_year, monthly_payment, remaining_balance


def test_monthly_payment_for_6_percent_30_year_loan():
    assert monthly_payment(400000, 0.06, 30) == pytest.approx(2398.20, abs=0.01)


def test_zero_rate_amortizes_linearly():
    assert monthly_payment(360000, 0.0, 30) == pytest.approx(1000.0)
    assert remaining_balance(360000, 0.0, 30, 12) == pytest.approx(348000.0)
    assert interest_paid_in_year(360000, 0.0, 30, 5) == 0.0


def test_zero_principal_costs_nothing():
    assert monthly_payment(0, 0.06, 30) == 0.0
    assert remaining_balance(0, 0.06, 30, 60) == 0.0
    assert interest_paid_in_year(0, 0.06, 30, 1) == 0.0


def test_balance_is_paid_off_at_end_of_term():
    assert remaining_balance(400000, 0.06, 30, 0) == pytest.approx(400000)
    assert remaining_balance(400000, 0.06, 30, 360) == pytest.approx(0.0, abs=1e-6)


def test_balance_decreases_every_year():
    balances = [remaining_balance(400000, 0.06, 30, year * 12) for year in range(31)]
    assert all(later < earlier for earlier, later in zip(balances, balances[1:]))


def test_yearly_interest_matches_payments_less_principal():
    payment = monthly_payment(400000, 0.06, 30)
    for year in (1, 10, 30):
        principal_paid = remaining_balance(
            400000, 0.06, 30, (year - 1) * 12
        ) - remaining_balance(400000, 0.06, 30, year * 12)
        assert interest_paid_in_year(400000, 0.06, 30, year) == pytest.approx(
            payment * 12 - principal_paid, rel=1e-9
        )


def test_interest_over_full_term():
    payment = monthly_payment(250000, 0.045, 15)
    total = sum(interest_paid_in_year(250000, 0.045, 15, year) for year in range(1, 16))
    assert total == pytest.approx(payment * 180 - 250000, rel=1e-9)


def test_interest_declines_as_loan_matures():
    first = interest_paid_in_year(400000, 0.06, 30, 1)
    tenth = interest_paid_in_year(400000, 0.06, 30, 10)
    assert 23000 < first < 24000
    assert tenth < first

from __future__ import annotations

import math
from typing import List, Mapping, Optional

from .assumptions import MORTGAGE_TERM_YEARS, merge_overrides
from .locations import get_location_data
from .log import get_logger
from .mortgage import interest_paid_in_year, monthly_payment, remaining_balance
from .schemas import ProjectionResult, Scenario, YearProjection
from .taxes import itemized_tax_benefit

logger = get_logger(__name__)

EARLY_BREAKEVEN_YEARS = 3
STRONG_RENT_DIFFERENCE = 100_000


def calculate_projections(
    scenario: Scenario,
    overrides: Optional[Mapping[str, Optional[float]]] = None,
) -> ProjectionResult:
    """
    Project buying versus renting-and-investing over ``scenario.years_to_stay``.

    Big expenses come out of the down payment first. The renter starts with
    the cash the buyer would have spent up front (effective down payment
    plus closing costs) and each year invests whatever buying would have
    cost beyond rent, added once at year end after growth.
    """
    assumptions = merge_overrides(overrides)
    rates = get_location_data(scenario.location)
    married = scenario.household.is_married

    effective_down_payment = max(0.0, scenario.down_payment - scenario.big_expenses)
    loan_amount = max(0.0, scenario.home_price - effective_down_payment)
    closing_costs = scenario.home_price * assumptions.closing_costs_buy
    monthly_mortgage = monthly_payment(
        loan_amount, assumptions.mortgage_rate, MORTGAGE_TERM_YEARS
    )

    projections: List[YearProjection] = []
    cumulative_rent_cost = 0.0
    cumulative_buy_cost = 0.0
    renter_balance = effective_down_payment + closing_costs
    total_interest_paid = 0.0
    breakeven_year: Optional[int] = None

    for year in range(1, scenario.years_to_stay + 1):
        monthly_rent = scenario.monthly_budget * (1 + assumptions.rent_appreciation) ** (
            year - 1
        )
        annual_rent_cost = monthly_rent * 12
        cumulative_rent_cost += annual_rent_cost

        home_value = scenario.home_price * (1 + assumptions.home_appreciation) ** year
        property_tax = home_value * rates.property_tax_rate
        insurance = home_value * rates.insurance_rate
        maintenance = home_value * assumptions.maintenance
        # The loan is paid off once the term ends.
        in_term = year <= MORTGAGE_TERM_YEARS
        payment_this_year = monthly_mortgage if in_term else 0.0
        interest = (
            interest_paid_in_year(
                loan_amount, assumptions.mortgage_rate, MORTGAGE_TERM_YEARS, year
            )
            if in_term
            else 0.0
        )
        total_interest_paid += interest
        tax_benefit = itemized_tax_benefit(
            interest, property_tax, scenario.annual_income, married
        )

        annual_buy_cost = (
            payment_this_year * 12 + property_tax + insurance + maintenance - tax_benefit
        )
        if year == 1:
            annual_buy_cost += closing_costs
        cumulative_buy_cost += annual_buy_cost

        monthly_savings = max(0.0, annual_buy_cost / 12 - monthly_rent)
        renter_balance *= 1 + scenario.investment_style
        renter_balance += monthly_savings * 12

        mortgage_left = max(
            0.0,
            remaining_balance(
                loan_amount,
                assumptions.mortgage_rate,
                MORTGAGE_TERM_YEARS,
                min(year, MORTGAGE_TERM_YEARS) * 12,
            ),
        )
        equity = home_value - mortgage_left
        buyer_wealth = equity - home_value * assumptions.selling_costs
        renter_wealth = renter_balance

        if breakeven_year is None and buyer_wealth >= renter_wealth:
            breakeven_year = year

        buyer_wealth_rounded = round_currency(buyer_wealth)
        renter_wealth_rounded = round_currency(renter_wealth)
        projections.append(
            YearProjection(
                year=year,
                monthly_rent=round_currency(monthly_rent),
                annual_rent_cost=round_currency(annual_rent_cost),
                cumulative_rent_cost=round_currency(cumulative_rent_cost),
                renter_investment_balance=round_currency(renter_balance),
                renter_net_wealth=renter_wealth_rounded,
                monthly_mortgage=round_currency(payment_this_year),
                annual_buy_cost=round_currency(annual_buy_cost),
                cumulative_buy_cost=round_currency(cumulative_buy_cost),
                home_value=round_currency(home_value),
                remaining_mortgage=round_currency(mortgage_left),
                equity_built=round_currency(equity),
                buyer_net_wealth=buyer_wealth_rounded,
                monthly_savings_if_renting=round_currency(monthly_savings),
                buy_advantage=buyer_wealth_rounded - renter_wealth_rounded,
            )
        )

    last = projections[-1]
    wealth_difference = last.buyer_net_wealth - last.renter_net_wealth
    recommendation = "buy" if wealth_difference > 0 else "rent"
    summary = build_summary(
        recommendation, wealth_difference, breakeven_year, scenario.years_to_stay
    )
    logger.debug(
        "Projected %d years for %s: %s by %s (breakeven %s)",
        scenario.years_to_stay,
        scenario.location,
        recommendation,
        wealth_difference,
        breakeven_year,
    )

    return ProjectionResult(
        recommendation=recommendation,
        breakeven_year=breakeven_year,
        total_buy_cost=last.cumulative_buy_cost,
        total_rent_cost=last.cumulative_rent_cost,
        final_buyer_wealth=last.buyer_net_wealth,
        final_renter_wealth=last.renter_net_wealth,
        wealth_difference=wealth_difference,
        monthly_mortgage_payment=round_currency(monthly_mortgage),
        total_interest_paid=round_currency(total_interest_paid),
        summary=summary,
        assumptions=assumptions,
        location_rates=rates,
        projections=projections,
    )


def build_summary(
    recommendation: str,
    wealth_difference: int,
    breakeven_year: Optional[int],
    years: int,
) -> str:
    amount = format_currency(abs(wealth_difference))
    if recommendation == "buy":
        if breakeven_year and breakeven_year <= EARLY_BREAKEVEN_YEARS:
            plural = "s" if breakeven_year > 1 else ""
            return (
                f"Buying is the clear winner. You'd build {amount} more wealth over "
                f"{years} years, and it pays off in just {breakeven_year} year{plural}."
            )
        if breakeven_year:
            return (
                f"Buying wins over {years} years, building {amount} more wealth, "
                f"but it takes {breakeven_year} years to break even vs. renting."
            )
        return f"Buying edges out renting over {years} years, with {amount} more in net wealth."

    if abs(wealth_difference) > STRONG_RENT_DIFFERENCE:
        return (
            f"Renting and investing saves you {amount} over {years} years. "
            "The math strongly favors renting in your situation."
        )
    return (
        f"Renting and investing comes out {amount} ahead over {years} years. "
        "It's close, and lifestyle factors may tip the balance."
    )


def round_currency(amount: float) -> int:
    """Round to the nearest whole unit, halves rounding up."""
    return math.floor(amount + 0.5)


def format_currency(amount: float) -> str:
    return f"${round_currency(amount):,}"

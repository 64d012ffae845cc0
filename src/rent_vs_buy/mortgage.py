from __future__ import annotations


def monthly_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """
    Level monthly payment on a fixed-rate loan.

    M = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate and n the
    number of payments. A zero rate amortizes linearly.
    """
    monthly_rate = annual_rate / 12
    num_payments = term_years * 12
    if monthly_rate == 0:
        return principal / num_payments
    growth = (1 + monthly_rate) ** num_payments
    return principal * monthly_rate * growth / (growth - 1)


def remaining_balance(
    principal: float, annual_rate: float, term_years: int, months_elapsed: int
) -> float:
    """Outstanding balance after ``months_elapsed`` level payments."""
    monthly_rate = annual_rate / 12
    num_payments = term_years * 12
    if monthly_rate == 0:
        return principal * (1 - months_elapsed / num_payments)
    payment = monthly_payment(principal, annual_rate, term_years)
    growth = (1 + monthly_rate) ** months_elapsed
    return principal * growth - payment * (growth - 1) / monthly_rate


def interest_paid_in_year(
    principal: float, annual_rate: float, term_years: int, year: int
) -> float:
    """Interest paid during the 1-indexed loan ``year``, walked month by month."""
    monthly_rate = annual_rate / 12
    payment = monthly_payment(principal, annual_rate, term_years)
    balance = remaining_balance(principal, annual_rate, term_years, (year - 1) * 12)
    total_interest = 0.0
    for _ in range(12):
        interest = balance * monthly_rate
        total_interest += interest
        balance -= payment - interest
    return total_interest

"""
Simplified federal income tax treatment of homeownership.

Only the marginal rate matters here: the benefit of owning is the
mortgage interest and property tax that exceed the standard deduction,
taxed at the household's top bracket. No phase-outs, state tax or AMT.
"""

from __future__ import annotations

from typing import List, Tuple

from .assumptions import STANDARD_DEDUCTION_MARRIED, STANDARD_DEDUCTION_SINGLE

# 2024 brackets as (inclusive upper bound of taxable income, marginal rate).
SINGLE_BRACKETS: List[Tuple[float, float]] = [
    (11600, 0.10),
    (47150, 0.12),
    (100525, 0.22),
    (191950, 0.24),
    (243725, 0.32),
    (609350, 0.35),
]
MARRIED_BRACKETS: List[Tuple[float, float]] = [
    (23200, 0.10),
    (94300, 0.12),
    (201050, 0.22),
    (383900, 0.24),
    (487450, 0.32),
    (731200, 0.35),
]
TOP_RATE = 0.37


def marginal_rate(income: float, is_married: bool) -> float:
    brackets = MARRIED_BRACKETS if is_married else SINGLE_BRACKETS
    for upper_bound, rate in brackets:
        if income <= upper_bound:
            return rate
    return TOP_RATE


def standard_deduction(is_married: bool) -> float:
    return STANDARD_DEDUCTION_MARRIED if is_married else STANDARD_DEDUCTION_SINGLE


def itemized_tax_benefit(
    mortgage_interest: float,
    property_tax: float,
    income: float,
    is_married: bool,
) -> float:
    """Tax saved by itemizing instead of taking the standard deduction."""
    itemized = mortgage_interest + property_tax
    deduction = standard_deduction(is_married)
    if itemized <= deduction:
        return 0.0
    return (itemized - deduction) * marginal_rate(income, is_married)

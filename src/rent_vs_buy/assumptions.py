from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional

# Loan term and standard deductions are fixed; only Assumptions fields can be overridden.
MORTGAGE_TERM_YEARS = 30
STANDARD_DEDUCTION_SINGLE = 14600.0
STANDARD_DEDUCTION_MARRIED = 29200.0


@dataclass(frozen=True)
class Assumptions:
    """Market-rate knobs for a projection. All rates are annual decimals."""

    mortgage_rate: float = 0.06  # 30-year fixed
    home_appreciation: float = 0.02
    rent_appreciation: float = 0.03
    maintenance: float = 0.01  # share of home value per year
    closing_costs_buy: float = 0.03  # share of purchase price
    selling_costs: float = 0.06  # share of home value at sale


DEFAULT_ASSUMPTIONS = Assumptions()

OVERRIDABLE_KEYS = frozenset(f.name for f in fields(Assumptions))


def merge_overrides(
    overrides: Optional[Mapping[str, Optional[float]]] = None,
    base: Assumptions = DEFAULT_ASSUMPTIONS,
) -> Assumptions:
    """
    Apply a partial set of overrides on top of ``base``.

    Keys mapped to ``None`` are treated as absent. Unknown keys and
    non-finite values raise ``ValueError``.
    """
    if not overrides:
        return base

    unknown = sorted(set(overrides) - OVERRIDABLE_KEYS)
    if unknown:
        raise ValueError(f"unknown assumption override(s): {', '.join(unknown)}")

    changes: Dict[str, float] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"assumption override {key} must be a finite number")
        changes[key] = value
    return replace(base, **changes)


def clean_overrides(
    overrides: Optional[Mapping[str, Optional[float]]],
) -> Dict[str, float]:
    """Validated copy of ``overrides`` with ``None`` entries dropped."""
    if not overrides:
        return {}
    merge_overrides(overrides)
    return {key: float(value) for key, value in overrides.items() if value is not None}

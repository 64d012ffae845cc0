from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .assumptions import Assumptions

_CURRENCY_FIELDS = (
    "annual_income",
    "monthly_budget",
    "down_payment",
    "home_price",
    "big_expenses",
    "total_savings",
)


class Household(str, Enum):
    SINGLE = "single"
    COUPLE = "couple"
    FAMILY = "family"
    PLANNING = "planning"  # planning to start a family
    RETIRED = "retired"

    @property
    def is_married(self) -> bool:
        """Households assumed to file jointly."""
        return self in (Household.COUPLE, Household.FAMILY, Household.PLANNING)


@dataclass(frozen=True)
class Scenario:
    """A household's answers, validated at construction."""

    annual_income: float
    monthly_budget: float  # affordable monthly rent / housing spend
    down_payment: float
    home_price: float
    investment_style: float  # expected annual return if renting, e.g. 0.07
    years_to_stay: int
    big_expenses: float  # near-term spend that eats into the down payment
    location: str  # zip code, 2-letter state code, or legacy region key
    total_savings: float  # informational, not used by the projection
    household: Household

    def __post_init__(self) -> None:
        try:
            household = Household(self.household)
        except ValueError as exc:
            raise ValueError(f"unknown household {self.household!r}") from exc
        object.__setattr__(self, "household", household)

        for name in _CURRENCY_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
            if value < 0:
                raise ValueError(f"{name} must not be negative")

        if not math.isfinite(self.investment_style) or self.investment_style <= -1:
            raise ValueError("investment_style must be greater than -100%")

        years = self.years_to_stay
        if isinstance(years, bool) or not math.isfinite(years) or int(years) != years:
            raise ValueError("years_to_stay must be a whole number of years")
        if years < 1:
            raise ValueError("years_to_stay must be at least 1")
        object.__setattr__(self, "years_to_stay", int(years))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["household"] = self.household.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Scenario":
        missing = [f.name for f in fields(cls) if f.name not in data]
        if missing:
            raise ValueError(f"scenario is missing field(s): {', '.join(missing)}")
        return cls(**{f.name: data[f.name] for f in fields(cls)})


@dataclass(frozen=True)
class LocationRates:
    property_tax_rate: float  # annual share of home value
    insurance_rate: float  # annual share of home value


@dataclass(frozen=True)
class YearProjection:
    year: int
    # rent scenario
    monthly_rent: int
    annual_rent_cost: int
    cumulative_rent_cost: int
    renter_investment_balance: int
    renter_net_wealth: int
    # buy scenario
    monthly_mortgage: int
    annual_buy_cost: int
    cumulative_buy_cost: int
    home_value: int
    remaining_mortgage: int
    equity_built: int
    buyer_net_wealth: int  # equity less selling costs
    # deltas
    monthly_savings_if_renting: int
    buy_advantage: int  # positive means buying is ahead


@dataclass(frozen=True)
class ProjectionResult:
    recommendation: str  # "buy" or "rent"
    breakeven_year: Optional[int]
    total_buy_cost: int
    total_rent_cost: int
    final_buyer_wealth: int
    final_renter_wealth: int
    wealth_difference: int  # positive means buying builds more wealth
    monthly_mortgage_payment: int
    total_interest_paid: int
    summary: str
    assumptions: Assumptions
    location_rates: LocationRates
    projections: List[YearProjection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectionResult":
        values = dict(data)
        values["assumptions"] = Assumptions(**values["assumptions"])
        values["location_rates"] = LocationRates(**values["location_rates"])
        values["projections"] = [
            YearProjection(**row) for row in values.get("projections", [])
        ]
        return cls(**values)


@dataclass(frozen=True)
class SavedResult:
    """A persisted scenario together with the projection computed for it."""

    id: str
    saved_at: int  # epoch milliseconds
    label: str
    scenario: Scenario
    result: ProjectionResult
    assumption_overrides: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "saved_at": self.saved_at,
            "label": self.label,
            "scenario": self.scenario.to_dict(),
            "result": self.result.to_dict(),
            "assumption_overrides": dict(self.assumption_overrides),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SavedResult":
        return cls(
            id=data["id"],
            saved_at=data["saved_at"],
            label=data["label"],
            scenario=Scenario.from_dict(data["scenario"]),
            result=ProjectionResult.from_dict(data["result"]),
            assumption_overrides=dict(data.get("assumption_overrides") or {}),
        )

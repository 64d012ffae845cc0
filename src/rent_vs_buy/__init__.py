"""
Rent vs. Buy comparison toolkit.

Projects a household's wealth year by year for buying a home versus
renting and investing the difference, using state-level property tax and
insurance rates, fixed-rate amortization and a simplified federal
mortgage-interest deduction, then recommends one or the other.
"""

from .assumptions import DEFAULT_ASSUMPTIONS, Assumptions, merge_overrides
from .locations import get_location_data, is_valid_zip, zip_to_state
from .model import calculate_projections
from .schemas import (
    Household,
    LocationRates,
    ProjectionResult,
    SavedResult,
    Scenario,
    YearProjection,
)
from .storage import ResultStore, generate_result_label

__all__ = [
    "Assumptions",
    "DEFAULT_ASSUMPTIONS",
    "Household",
    "LocationRates",
    "ProjectionResult",
    "ResultStore",
    "SavedResult",
    "Scenario",
    "YearProjection",
    "calculate_projections",
    "generate_result_label",
    "get_location_data",
    "is_valid_zip",
    "merge_overrides",
    "zip_to_state",
]

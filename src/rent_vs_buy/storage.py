from __future__ import annotations

import json
import time
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from .assumptions import clean_overrides
from .locations import zip_to_state
from .log import get_logger
from .model import calculate_projections, round_currency
from .schemas import SavedResult, Scenario

logger = get_logger(__name__)

# Region keys used by older saved scenarios, before zip-code locations.
LEGACY_LOCATION_LABELS: Dict[str, str] = {
    "northeast": "Northeast",
    "westCoast": "West Coast",
    "southeast": "Southeast",
    "midwest": "Midwest",
    "mountain": "Mountain",
    "other": "Other",
}


def format_compact(amount: float) -> str:
    if amount >= 1_000_000:
        return f"${round_currency(amount / 100_000) / 10:.1f}M"
    if amount >= 1_000:
        return f"${round_currency(amount / 1_000)}K"
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount}"


def location_label(location: str) -> str:
    if location in LEGACY_LOCATION_LABELS:
        return LEGACY_LOCATION_LABELS[location]
    state = zip_to_state(location)
    return state if state is not None else location


def generate_result_label(scenario: Scenario) -> str:
    """Short description such as ``$500K home · CA · 10yr``."""
    price = format_compact(scenario.home_price)
    return f"{price} home · {location_label(scenario.location)} · {scenario.years_to_stay}yr"


class ResultStore:
    """
    Saved scenarios and their projections in a single JSON file, newest first.

    Every mutation re-reads the file and writes the whole list back.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> List[SavedResult]:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable saved results in %s", self.path)
            return []
        if not isinstance(payload, list):
            logger.warning("Ignoring saved results in %s: expected a list", self.path)
            return []
        try:
            return [SavedResult.from_dict(item) for item in payload]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed saved results in %s: %s", self.path, exc)
            return []

    def save(self, results: List[SavedResult]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [saved.to_dict() for saved in results]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def add(
        self,
        scenario: Scenario,
        overrides: Optional[Mapping[str, Optional[float]]] = None,
    ) -> SavedResult:
        cleaned = clean_overrides(overrides)
        saved = SavedResult(
            id=uuid.uuid4().hex,
            saved_at=int(time.time() * 1000),
            label=generate_result_label(scenario),
            scenario=scenario,
            result=calculate_projections(scenario, cleaned),
            assumption_overrides=cleaned,
        )
        self.save([saved] + self.load())
        logger.info("Saved result %s (%s)", saved.id, saved.label)
        return saved

    def get(self, result_id: str) -> Optional[SavedResult]:
        for saved in self.load():
            if saved.id == result_id:
                return saved
        return None

    def update(
        self,
        result_id: str,
        scenario: Optional[Scenario] = None,
        overrides: Optional[Mapping[str, Optional[float]]] = None,
    ) -> SavedResult:
        """
        Replace the answers and/or assumptions of a saved result and recompute it.

        ``overrides`` are merged into the saved ones; an empty mapping
        clears them.
        """
        results = self.load()
        for index, saved in enumerate(results):
            if saved.id == result_id:
                break
        else:
            raise KeyError(result_id)

        new_scenario = scenario or saved.scenario
        if overrides is None:
            new_overrides = saved.assumption_overrides
        elif not overrides:
            new_overrides = {}
        else:
            new_overrides = clean_overrides({**saved.assumption_overrides, **overrides})

        updated = replace(
            saved,
            label=generate_result_label(new_scenario),
            scenario=new_scenario,
            result=calculate_projections(new_scenario, new_overrides),
            assumption_overrides=new_overrides,
        )
        results[index] = updated
        self.save(results)
        return updated

    def delete(self, result_id: str) -> bool:
        results = self.load()
        remaining = [saved for saved in results if saved.id != result_id]
        if len(remaining) == len(results):
            return False
        self.save(remaining)
        return True

    def clear(self) -> None:
        self.save([])

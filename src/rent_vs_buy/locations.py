"""
Location-based property tax and homeowner's insurance rates.

Rates are approximate statewide effective rates (2024-2025) for the 50
states plus DC, expressed as annual decimals of home value. Zip codes are
resolved to a state through the USPS three-digit prefix assignments.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

from .log import get_logger
from .schemas import LocationRates

logger = get_logger(__name__)

_ZIP_RE = re.compile(r"^\d{5}$")
_STATE_RE = re.compile(r"^[A-Z]{2}$")


class StateInfo(NamedTuple):
    name: str
    property_tax_rate: float
    insurance_rate: float


STATE_RATES: Mapping[str, StateInfo] = MappingProxyType(
    {
        "AL": StateInfo("Alabama", 0.004, 0.0097),
        "AK": StateInfo("Alaska", 0.0104, 0.006),
        "AZ": StateInfo("Arizona", 0.0062, 0.0066),
        "AR": StateInfo("Arkansas", 0.0062, 0.0126),
        "CA": StateInfo("California", 0.0071, 0.0039),
        "CO": StateInfo("Colorado", 0.0051, 0.0114),
        "CT": StateInfo("Connecticut", 0.0215, 0.0058),
        "DE": StateInfo("Delaware", 0.0057, 0.0044),
        "DC": StateInfo("District of Columbia", 0.0056, 0.0036),
        "FL": StateInfo("Florida", 0.0089, 0.0077),
        "GA": StateInfo("Georgia", 0.0092, 0.0095),
        "HI": StateInfo("Hawaii", 0.0028, 0.0025),
        "ID": StateInfo("Idaho", 0.0063, 0.0073),
        "IL": StateInfo("Illinois", 0.0223, 0.0083),
        "IN": StateInfo("Indiana", 0.0085, 0.0087),
        "IA": StateInfo("Iowa", 0.0157, 0.0092),
        "KS": StateInfo("Kansas", 0.0141, 0.0135),
        "KY": StateInfo("Kentucky", 0.0086, 0.0099),
        "LA": StateInfo("Louisiana", 0.0055, 0.0117),
        "ME": StateInfo("Maine", 0.0136, 0.0062),
        "MD": StateInfo("Maryland", 0.0109, 0.0054),
        "MA": StateInfo("Massachusetts", 0.0123, 0.0057),
        "MI": StateInfo("Michigan", 0.0154, 0.009),
        "MN": StateInfo("Minnesota", 0.0112, 0.0104),
        "MS": StateInfo("Mississippi", 0.0081, 0.0119),
        "MO": StateInfo("Missouri", 0.0097, 0.0112),
        "MT": StateInfo("Montana", 0.0084, 0.0101),
        "NE": StateInfo("Nebraska", 0.0173, 0.013),
        "NV": StateInfo("Nevada", 0.0055, 0.0048),
        "NH": StateInfo("New Hampshire", 0.0218, 0.0052),
        "NJ": StateInfo("New Jersey", 0.0247, 0.0053),
        "NM": StateInfo("New Mexico", 0.008, 0.0072),
        "NY": StateInfo("New York", 0.0172, 0.0056),
        "NC": StateInfo("North Carolina", 0.0084, 0.0078),
        "ND": StateInfo("North Dakota", 0.0098, 0.0102),
        "OH": StateInfo("Ohio", 0.0156, 0.0084),
        "OK": StateInfo("Oklahoma", 0.009, 0.0147),
        "OR": StateInfo("Oregon", 0.0097, 0.0033),
        "PA": StateInfo("Pennsylvania", 0.0158, 0.007),
        "RI": StateInfo("Rhode Island", 0.0163, 0.005),
        "SC": StateInfo("South Carolina", 0.0057, 0.0086),
        "SD": StateInfo("South Dakota", 0.0122, 0.0108),
        "TN": StateInfo("Tennessee", 0.0071, 0.0082),
        "TX": StateInfo("Texas", 0.018, 0.0122),
        "UT": StateInfo("Utah", 0.0058, 0.0038),
        "VT": StateInfo("Vermont", 0.019, 0.0046),
        "VA": StateInfo("Virginia", 0.0082, 0.0064),
        "WA": StateInfo("Washington", 0.0103, 0.0042),
        "WV": StateInfo("West Virginia", 0.0058, 0.0076),
        "WI": StateInfo("Wisconsin", 0.0185, 0.008),
        "WY": StateInfo("Wyoming", 0.0061, 0.0068),
    }
)

NATIONAL_AVERAGE = LocationRates(property_tax_rate=0.011, insurance_rate=0.0075)

# (first prefix, last prefix, state). Gaps are military (090-098, 340-349,
# 962-966), Guam (969) or unassigned and resolve to nothing.
_PREFIX_RANGES: List[Tuple[int, int, str]] = [
    (5, 5, "NY"),  # IRS Holtsville
    (6, 9, "PR"),
    (10, 27, "MA"),
    (28, 29, "RI"),
    (30, 38, "NH"),
    (39, 49, "ME"),
    (50, 59, "VT"),
    (60, 69, "CT"),
    (70, 89, "NJ"),
    (100, 149, "NY"),
    (150, 196, "PA"),
    (197, 199, "DE"),
    (200, 205, "DC"),
    (206, 219, "MD"),
    (220, 246, "VA"),
    (247, 268, "WV"),
    (270, 289, "NC"),
    (290, 299, "SC"),
    (300, 319, "GA"),
    (320, 339, "FL"),
    (350, 369, "AL"),
    (370, 385, "TN"),
    (386, 397, "MS"),
    (398, 399, "GA"),
    (400, 427, "KY"),
    (430, 459, "OH"),
    (460, 479, "IN"),
    (480, 499, "MI"),
    (500, 528, "IA"),
    (530, 549, "WI"),
    (550, 567, "MN"),
    (570, 577, "SD"),
    (580, 588, "ND"),
    (590, 599, "MT"),
    (600, 629, "IL"),
    (630, 658, "MO"),
    (660, 679, "KS"),
    (680, 693, "NE"),
    (700, 714, "LA"),
    (716, 729, "AR"),
    (730, 749, "OK"),
    (750, 799, "TX"),
    (800, 816, "CO"),
    (820, 831, "WY"),
    (832, 838, "ID"),
    (840, 847, "UT"),
    (850, 865, "AZ"),
    (870, 884, "NM"),
    (889, 898, "NV"),
    (900, 961, "CA"),
    (967, 968, "HI"),
    (970, 979, "OR"),
    (980, 994, "WA"),
    (995, 999, "AK"),
]


def _build_prefix_table(ranges: List[Tuple[int, int, str]]) -> Dict[str, str]:
    table: Dict[str, str] = {}
    for start, end, state in ranges:
        for prefix in range(start, end + 1):
            table[f"{prefix:03d}"] = state
    return table


ZIP_PREFIX_TO_STATE: Mapping[str, str] = MappingProxyType(
    _build_prefix_table(_PREFIX_RANGES)
)


def zip_to_state(zip_code: str) -> Optional[str]:
    """
    Resolve a 5-digit zip code to a state code.

    Returns ``None`` for malformed input and for prefixes that are
    unassigned or belong to territories and military addresses.
    """
    if not _ZIP_RE.match(zip_code):
        return None
    state = ZIP_PREFIX_TO_STATE.get(zip_code[:3])
    if state is None or state not in STATE_RATES:
        return None
    return state


def is_valid_zip(zip_code: str) -> bool:
    return zip_to_state(zip_code) is not None


def resolve_state(location: str) -> Optional[str]:
    """State code for a zip code or 2-letter state code, else ``None``."""
    trimmed = location.strip()
    if _ZIP_RE.match(trimmed):
        return zip_to_state(trimmed)
    upper = trimmed.upper()
    if _STATE_RE.match(upper) and upper in STATE_RATES:
        return upper
    return None


def get_location_data(location: str) -> LocationRates:
    """
    Property tax and insurance rates for a zip code or state code.

    Anything unrecognised (territories, legacy region keys such as
    ``westCoast``, empty input) gets the national average.
    """
    state = resolve_state(location)
    if state is None:
        logger.debug("No state rates for location %r; using national average", location)
        return LocationRates(
            property_tax_rate=NATIONAL_AVERAGE.property_tax_rate,
            insurance_rate=NATIONAL_AVERAGE.insurance_rate,
        )
    info = STATE_RATES[state]
    return LocationRates(
        property_tax_rate=info.property_tax_rate,
        insurance_rate=info.insurance_rate,
    )

"""
Flat state income tax estimates.

Where a state has a range of rates (e.g. 2.00 - 4.00) the table holds
a single representative value. Read-only; selection only ever looks
values up.
"""

from types import MappingProxyType
from typing import Mapping


class UnknownStateError(KeyError):
    """Raised when a state name is not in the rate table."""
    pass


US_STATE_TAX_RATES: Mapping[str, float] = MappingProxyType({
    "Alabama": 5.00,
    "Alaska": 0.00,
    "Arizona": 2.50,
    "Arkansas": 4.90,
    "California": 3.00,  # 2.00 - 4.00
    "Colorado": 4.40,
    "Connecticut": 5.00,
    "Delaware": 4.80,
    "District of Columbia": 6.00,
    "Florida": 0.00,
    "Georgia": 5.49,
    "Hawaii": 7.20,
    "Idaho": 5.80,
    "Illinois": 4.95,
    "Indiana": 3.05,
    "Iowa": 4.40,
    "Kansas": 5.25,
    "Kentucky": 4.00,
    "Louisiana": 4.25,
    "Maine": 5.80,
    "Maryland": 4.75,
    "Massachusetts": 5.00,
    "Michigan": 4.25,
    "Minnesota": 5.35,
    "Mississippi": 4.70,
    "Missouri": 4.95,
    "Montana": 4.70,
    "Nebraska": 5.01,
    "Nevada": 0.00,
    "New Hampshire": 0.00,
    "New Jersey": 1.75,
    "New Mexico": 4.90,
    "New York": 4.25,  # 4.00 - 4.50
    "North Carolina": 4.50,
    "North Dakota": 1.50,  # 1.10 - 1.95
    "Ohio": 2.75,
    "Oklahoma": 4.75,
    "Oregon": 8.75,
    "Pennsylvania": 3.07,
    "Rhode Island": 3.75,
    "South Carolina": 6.40,
    "South Dakota": 0.00,
    "Tennessee": 0.00,
    "Texas": 0.00,
    "Utah": 4.55,
    "Vermont": 3.35,
    "Virginia": 5.75,
    "Washington": 0.00,
    "West Virginia": 4.00,
    "Wisconsin": 4.65,
    "Wyoming": 0.00,
})

_BY_FOLDED_NAME = MappingProxyType(
    {name.casefold(): name for name in US_STATE_TAX_RATES}
)


def state_names() -> tuple[str, ...]:
    """State names in display order."""
    return tuple(US_STATE_TAX_RATES)


def canonical_state_name(name: str) -> str:
    """Resolve user text to the table's spelling of a state name."""
    if not isinstance(name, str):
        raise UnknownStateError(name)

    text = name.strip()
    if text in US_STATE_TAX_RATES:
        return text

    try:
        return _BY_FOLDED_NAME[text.casefold()]
    except KeyError:
        raise UnknownStateError(name) from None


def lookup_state_rate(name: str) -> float:
    """Flat rate (percent) for a state; raises UnknownStateError."""
    return US_STATE_TAX_RATES[canonical_state_name(name)]


def format_rate(rate: float) -> str:
    """Render a rate the way it is written into the form (3.0 -> '3')."""
    return format(rate, "g")

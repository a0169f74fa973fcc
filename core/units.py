"""
Area Units - Area and Price Normalisation

Converts area magnitudes and per-area prices between the five supported
measurement units. Square feet is the base unit.

Area and price-per-unit scale with the same factor: 1 acre is 43,560 sqft,
so a price of 100 per sqft is 4,356,000 per acre.

No rounding happens here. Display code rounds.
"""

from __future__ import annotations

import math
import sys
from enum import Enum
from typing import Final, Optional


# =============================================================================
# Units
# =============================================================================


class AreaUnit(Enum):
    """Supported area measurement units."""

    SQFT = "Sqft"
    SQ_YARDS = "Sq Yards"
    SQ_METERS = "Sq Meters"
    ACRES = "Acres"
    HECTARES = "Hectares"

    @property
    def factor(self) -> float:
        """Square feet in one unit."""
        return SQFT_PER_UNIT[self]

    @property
    def label(self) -> str:
        """Short label for display, e.g. '1200 sqft'."""
        return UNIT_LABELS[self]

    @classmethod
    def from_string(cls, value: str) -> Optional["AreaUnit"]:
        """Convert string to AreaUnit, case-insensitive. Accepts aliases."""
        if value is None:
            return None
        normalised = " ".join(str(value).lower().replace("_", " ").replace(".", "").split())
        for member in cls:
            if member.value.lower() == normalised:
                return member
        return _ALIASES.get(normalised)


SQFT_PER_UNIT: Final[dict[AreaUnit, float]] = {
    AreaUnit.SQFT: 1.0,
    AreaUnit.SQ_YARDS: 9.0,
    AreaUnit.SQ_METERS: 10.7639,
    AreaUnit.ACRES: 43560.0,
    AreaUnit.HECTARES: 107639.0,
}

UNIT_LABELS: Final[dict[AreaUnit, str]] = {
    AreaUnit.SQFT: "sqft",
    AreaUnit.SQ_YARDS: "sq yd",
    AreaUnit.SQ_METERS: "sq m",
    AreaUnit.ACRES: "acre",
    AreaUnit.HECTARES: "hectare",
}

_ALIASES: Final[dict[str, AreaUnit]] = {
    "sq ft": AreaUnit.SQFT,
    "square feet": AreaUnit.SQFT,
    "sqyd": AreaUnit.SQ_YARDS,
    "sq yd": AreaUnit.SQ_YARDS,
    "sqyards": AreaUnit.SQ_YARDS,
    "square yards": AreaUnit.SQ_YARDS,
    "sqm": AreaUnit.SQ_METERS,
    "sq m": AreaUnit.SQ_METERS,
    "sqmeters": AreaUnit.SQ_METERS,
    "square meters": AreaUnit.SQ_METERS,
    "acre": AreaUnit.ACRES,
    "ac": AreaUnit.ACRES,
    "hectare": AreaUnit.HECTARES,
    "ha": AreaUnit.HECTARES,
}

# Price per sqft for listings with no usable area. Sorts after every real price.
PRICE_PER_SQFT_UNDEFINED: Final[float] = sys.float_info.max


# =============================================================================
# Conversions
# =============================================================================


def to_square_feet(value: float, unit: AreaUnit) -> float:
    """Convert an area in ``unit`` to square feet."""
    return value * unit.factor


def from_square_feet(value_in_sqft: float, unit: AreaUnit) -> float:
    """Convert an area in square feet to ``unit``."""
    return value_in_sqft / unit.factor


def convert_area(value: float, from_unit: AreaUnit, to_unit: AreaUnit) -> float:
    """Convert an area between two units."""
    if from_unit is to_unit:
        return float(value)
    return from_square_feet(to_square_feet(value, from_unit), to_unit)


def convert_price_per_unit(price_per_sqft: float, target_unit: AreaUnit) -> float:
    """
    Convert a per-sqft price to a price per ``target_unit``.

    Uses the same multiplier as to_square_feet: a larger unit costs
    proportionally more.
    """
    return price_per_sqft * target_unit.factor


def price_per_sqft_from_unit(price_per_unit: float, unit: AreaUnit) -> float:
    """Convert a price per ``unit`` back to a per-sqft price."""
    return price_per_unit / unit.factor


def derived_total(price_per_unit: float, area_in_same_unit: float) -> float:
    """Total price from a per-unit price and an area in that same unit."""
    return price_per_unit * area_in_same_unit


def price_per_sqft(total_price: float, area_in_sqft: float) -> float:
    """
    Price per square foot.

    Returns PRICE_PER_SQFT_UNDEFINED when the area is zero, negative or not
    finite.
    """
    if not math.isfinite(area_in_sqft) or area_in_sqft <= 0:
        return PRICE_PER_SQFT_UNDEFINED
    return total_price / area_in_sqft

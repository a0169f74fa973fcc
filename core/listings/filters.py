"""
Listing Search Filters

Filtering and ordering for listing search. Price and area ranges are entered
in a chosen unit and compared in square feet, so listings priced in acres
and listings priced in sqft are comparable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Iterable, Optional

from core.listings.schema import Listing, ListingFor, PropertyType
from core.units import AreaUnit, price_per_sqft_from_unit, to_square_feet


# =============================================================================
# Constants
# =============================================================================

# "2 BHK" -> 2 rooms; "4+ BHK" means four or more
BHK_ROOMS: Final[dict[str, int]] = {
    "1 BHK": 1,
    "2 BHK": 2,
    "3 BHK": 3,
    "4+ BHK": 4,
}

OPEN_ENDED_BHK: Final[str] = "4+ BHK"

SORT_NEWEST: Final[str] = "newest"
SORT_PRICE_PER_SQFT: Final[str] = "price_per_sqft"
SORT_ORDERS: Final[tuple[str, ...]] = (SORT_NEWEST, SORT_PRICE_PER_SQFT)

_NUMBER = r"\d+(?:\.\d+)?"
_RANGE_REGEX: Final = re.compile(rf"^\s*({_NUMBER})?\s*-\s*({_NUMBER})?\s*$")
_SINGLE_REGEX: Final = re.compile(rf"^\s*({_NUMBER})\s*$")


# =============================================================================
# Range Parsing
# =============================================================================


def parse_range(text: Optional[str]) -> Optional[tuple[Optional[float], Optional[float]]]:
    """
    Parse a "min-max" range.

    "4000-6000" -> (4000.0, 6000.0)
    "4000"      -> (4000.0, 4000.0)
    "-6000"     -> (None, 6000.0)
    "4000-"     -> (4000.0, None)
    "" / None   -> None

    Raises:
        ValueError: If the text is not a range
    """
    if text is None or not text.strip():
        return None

    single = _SINGLE_REGEX.match(text)
    if single:
        value = float(single.group(1))
        return value, value

    match = _RANGE_REGEX.match(text)
    if not match or (match.group(1) is None and match.group(2) is None):
        raise ValueError(f"Invalid range: {text!r}")

    low = float(match.group(1)) if match.group(1) is not None else None
    high = float(match.group(2)) if match.group(2) is not None else None
    if low is not None and high is not None and low > high:
        raise ValueError(f"Range minimum exceeds maximum: {text!r}")
    return low, high


def _within(value: float, bounds: tuple[Optional[float], Optional[float]]) -> bool:
    low, high = bounds
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


# =============================================================================
# Filters
# =============================================================================


@dataclass(frozen=True)
class SearchFilters:
    """
    Listing search parameters.

    ``price_range`` is a price per ``area_unit``; ``area_range`` is an area in
    ``area_unit``. Both are compared against the listing in square feet.
    """

    city: Optional[str] = None
    type_of_property: Optional[PropertyType] = None
    listing_for: Optional[ListingFor] = None
    verified_only: bool = False
    price_range: Optional[tuple[Optional[float], Optional[float]]] = None
    area_range: Optional[tuple[Optional[float], Optional[float]]] = None
    area_unit: AreaUnit = AreaUnit.SQFT
    rooms: Optional[int] = None
    bhk: Optional[str] = None

    def __post_init__(self):
        if self.bhk is not None and self.bhk not in BHK_ROOMS:
            raise ValueError(f"Unknown BHK option: {self.bhk}")
        if self.rooms is not None and self.rooms < 0:
            raise ValueError("rooms must be non-negative")

    @property
    def price_per_sqft_range(self) -> Optional[tuple[Optional[float], Optional[float]]]:
        """Price range normalised to price per sqft."""
        if self.price_range is None:
            return None
        low, high = self.price_range
        return (
            price_per_sqft_from_unit(low, self.area_unit) if low is not None else None,
            price_per_sqft_from_unit(high, self.area_unit) if high is not None else None,
        )

    @property
    def area_sqft_range(self) -> Optional[tuple[Optional[float], Optional[float]]]:
        """Area range normalised to square feet."""
        if self.area_range is None:
            return None
        low, high = self.area_range
        return (
            to_square_feet(low, self.area_unit) if low is not None else None,
            to_square_feet(high, self.area_unit) if high is not None else None,
        )

    def matches(self, listing: Listing) -> bool:
        """Check whether a listing satisfies every set filter."""
        if self.city and self.city.strip().lower() not in listing.city.lower():
            return False
        if self.type_of_property and listing.type_of_property != self.type_of_property:
            return False
        if self.listing_for and listing.listing_for != self.listing_for:
            return False
        if self.verified_only and not listing.verified:
            return False

        if self.rooms is not None and listing.rooms != self.rooms:
            return False
        if self.bhk is not None:
            wanted = BHK_ROOMS[self.bhk]
            if listing.rooms is None:
                return False
            if self.bhk == OPEN_ENDED_BHK:
                if listing.rooms < wanted:
                    return False
            elif listing.rooms != wanted:
                return False

        price_bounds = self.price_per_sqft_range
        if price_bounds is not None and not _within(listing.price_per_sqft, price_bounds):
            return False

        area_bounds = self.area_sqft_range
        if area_bounds is not None and not _within(listing.area_sqft, area_bounds):
            return False

        return True


def filter_listings(listings: Iterable[Listing], filters: SearchFilters) -> list[Listing]:
    """Return listings matching the filters, preserving input order."""
    return [listing for listing in listings if filters.matches(listing)]


def sort_listings(listings: Iterable[Listing], order: str = SORT_NEWEST) -> list[Listing]:
    """
    Order listings.

    ``newest``: most recently created first.
    ``price_per_sqft``: cheapest per sqft first; listings without a usable
    area sort last.
    """
    if order == SORT_NEWEST:
        return sorted(listings, key=lambda l: l.created_at, reverse=True)
    if order == SORT_PRICE_PER_SQFT:
        return sorted(listings, key=lambda l: (l.price_per_sqft, l.listing_id))
    raise ValueError(f"Unknown sort order: {order}")

"""
Listing Schema - Property Listings and Pricing

Defines the canonical listing record produced by the listing form and
stored by the listing repository.

Pricing is one of two variants:
- Per unit: price per measurement unit, with the total derived from area
- Total: a single total price
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Final, Optional, Union

from core.units import (
    AreaUnit,
    PRICE_PER_SQFT_UNDEFINED,
    price_per_sqft,
    to_square_feet,
)


# =============================================================================
# Enums
# =============================================================================


class PropertyType(Enum):
    """Type of property being listed."""

    APARTMENT = "Apartment"
    HOUSE = "House"
    LAND = "Land"
    PLOT = "Plot"
    SHOP = "Shop"

    @classmethod
    def from_string(cls, value: str) -> Optional["PropertyType"]:
        """Convert string to PropertyType, case-insensitive."""
        if not value:
            return None
        normalised = str(value).lower().strip()
        for member in cls:
            if member.value.lower() == normalised:
                return member
        return None

    @property
    def is_residential_building(self) -> bool:
        return self in (PropertyType.APARTMENT, PropertyType.HOUSE)

    @property
    def is_land(self) -> bool:
        return self in (PropertyType.LAND, PropertyType.PLOT)


class Authority(Enum):
    """Who holds or develops the property."""

    GOVERNMENT = "Government"
    PRIVATE = "Private"
    BUILDER = "Builder"


class ListingFor(Enum):
    """Listing purpose."""

    SALE = "Sale"
    RENT = "Rent"


class Category(Enum):
    """Land/plot usage category."""

    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"


class PricingMode(Enum):
    """How the seller entered the price."""

    PER_UNIT = "Per Unit"
    TOTAL = "Total"


# =============================================================================
# Constants
# =============================================================================

AMENITIES: Final[tuple[str, ...]] = (
    "Parking",
    "Lift",
    "Power Backup",
    "Security",
    "Gym",
    "Park",
    "Swimming Pool",
    "24x7 Water",
    "Gas Pipeline",
    "Air Conditioning",
    "Club House",
)

MAX_PHOTOS: Final[int] = 12
MAX_DOCUMENTS: Final[int] = 5


# =============================================================================
# Pricing
# =============================================================================


@dataclass(frozen=True)
class PerUnitPricing:
    """Price per measurement unit with the derived total."""

    price_per_unit: float
    unit: AreaUnit
    computed_total: float

    mode: PricingMode = field(default=PricingMode.PER_UNIT, init=False)

    @property
    def total_price(self) -> float:
        return self.computed_total

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "price_per_unit": self.price_per_unit,
            "unit": self.unit.value,
            "computed_total": self.computed_total,
        }


@dataclass(frozen=True)
class TotalPricing:
    """Single total price."""

    total_price: float

    mode: PricingMode = field(default=PricingMode.TOTAL, init=False)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "total_price": self.total_price,
        }


Pricing = Union[PerUnitPricing, TotalPricing]


def pricing_from_dict(data: dict) -> Pricing:
    """Create a pricing variant from its dictionary form."""
    mode = PricingMode(data["mode"])
    if mode == PricingMode.PER_UNIT:
        return PerUnitPricing(
            price_per_unit=float(data["price_per_unit"]),
            unit=AreaUnit(data["unit"]),
            computed_total=float(data["computed_total"]),
        )
    return TotalPricing(total_price=float(data["total_price"]))


# =============================================================================
# Listing
# =============================================================================


def generate_listing_id() -> str:
    """Generate a unique listing ID."""
    return f"LST-{uuid.uuid4().hex[:12].upper()}"


@dataclass
class Listing:
    """
    A property listing.

    ``area`` is expressed in ``area_unit``. Derived prices are computed on
    demand and never stored.
    """

    # Identity
    listing_id: str
    owner_id: str

    # Classification
    type_of_property: PropertyType
    authority: Authority
    listing_for: ListingFor
    title: str

    # Location
    address: str
    area_locality: str
    city: str
    district: str
    state: str
    pincode: str

    # Area & pricing
    area: float
    area_unit: AreaUnit
    pricing: Pricing

    category: Optional[Category] = None
    description: str = ""
    society: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Layout (apartments and houses)
    floor: Optional[int] = None
    number_of_floors: Optional[int] = None
    rooms: Optional[int] = None
    bathrooms: Optional[int] = None
    balconies: Optional[int] = None
    year_of_construction: Optional[int] = None
    amenities: list[str] = field(default_factory=list)

    photos: list[str] = field(default_factory=list)
    documents: list[str] = field(default_factory=list)

    verified: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    @property
    def area_sqft(self) -> float:
        """Listing area in square feet."""
        return to_square_feet(self.area, self.area_unit)

    @property
    def total_price(self) -> float:
        return self.pricing.total_price

    @property
    def price_per_sqft(self) -> float:
        """Price per square foot, or PRICE_PER_SQFT_UNDEFINED for zero area."""
        return price_per_sqft(self.total_price, self.area_sqft)

    @property
    def has_defined_price(self) -> bool:
        return self.price_per_sqft != PRICE_PER_SQFT_UNDEFINED

    def to_dict(self) -> dict:
        """Convert listing to dictionary for serialisation."""
        return {
            "listing_id": self.listing_id,
            "owner_id": self.owner_id,
            "type_of_property": self.type_of_property.value,
            "authority": self.authority.value,
            "listing_for": self.listing_for.value,
            "category": self.category.value if self.category else None,
            "title": self.title,
            "description": self.description,
            "address": self.address,
            "society": self.society,
            "area_locality": self.area_locality,
            "city": self.city,
            "district": self.district,
            "state": self.state,
            "pincode": self.pincode,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "area": self.area,
            "area_unit": self.area_unit.value,
            "pricing": self.pricing.to_dict(),
            "floor": self.floor,
            "number_of_floors": self.number_of_floors,
            "rooms": self.rooms,
            "bathrooms": self.bathrooms,
            "balconies": self.balconies,
            "year_of_construction": self.year_of_construction,
            "amenities": list(self.amenities),
            "photos": list(self.photos),
            "documents": list(self.documents),
            "verified": self.verified,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Listing":
        """Create listing from dictionary."""
        return cls(
            listing_id=data["listing_id"],
            owner_id=data["owner_id"],
            type_of_property=PropertyType(data["type_of_property"]),
            authority=Authority(data["authority"]),
            listing_for=ListingFor(data["listing_for"]),
            category=Category(data["category"]) if data.get("category") else None,
            title=data["title"],
            description=data.get("description", ""),
            address=data["address"],
            society=data.get("society"),
            area_locality=data["area_locality"],
            city=data["city"],
            district=data["district"],
            state=data["state"],
            pincode=data["pincode"],
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            area=float(data["area"]),
            area_unit=AreaUnit(data["area_unit"]),
            pricing=pricing_from_dict(data["pricing"]),
            floor=data.get("floor"),
            number_of_floors=data.get("number_of_floors"),
            rooms=data.get("rooms"),
            bathrooms=data.get("bathrooms"),
            balconies=data.get("balconies"),
            year_of_construction=data.get("year_of_construction"),
            amenities=list(data.get("amenities") or []),
            photos=list(data.get("photos") or []),
            documents=list(data.get("documents") or []),
            verified=bool(data.get("verified", False)),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=(
                datetime.fromisoformat(data["updated_at"])
                if data.get("updated_at")
                else None
            ),
        )

    def to_form_values(self) -> dict[str, Any]:
        """Listing as listing-form values, for re-validation on update."""
        values: dict[str, Any] = {
            "type_of_property": self.type_of_property.value,
            "authority": self.authority.value,
            "listing_for": self.listing_for.value,
            "category": self.category.value if self.category else None,
            "title": self.title,
            "description": self.description,
            "address": self.address,
            "society": self.society,
            "area_locality": self.area_locality,
            "city": self.city,
            "district": self.district,
            "state": self.state,
            "pincode": self.pincode,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "area_of_property": self.area,
            "area_unit": self.area_unit.value,
            "pricing_mode": self.pricing.mode.value,
            "floor": self.floor,
            "number_of_floors": self.number_of_floors,
            "rooms": self.rooms,
            "bathrooms": self.bathrooms,
            "balconies": self.balconies,
            "year_of_construction": self.year_of_construction,
            "amenities": list(self.amenities),
            "photos": list(self.photos),
            "documents": list(self.documents),
        }
        if isinstance(self.pricing, PerUnitPricing):
            values["price_per_unit"] = self.pricing.price_per_unit
        else:
            values["total_price"] = self.pricing.total_price
        return values

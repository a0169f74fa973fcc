"""
Listing Form Rules - Declarative Rule Sets per Property Group

The listing form shows a different field group for apartments/houses,
land/plots and shops. Each group is a plain rule set evaluated by
core.validation; nothing here runs any checks itself.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final, Mapping, Optional

from core.listings.schema import (
    AMENITIES,
    MAX_DOCUMENTS,
    MAX_PHOTOS,
    Authority,
    Category,
    ListingFor,
    PricingMode,
    PropertyType,
)
from core.units import AreaUnit
from core.validation import CURRENT_YEAR, ValidationRule, check_dependencies


# =============================================================================
# Helpers
# =============================================================================


def one_of(*options: str) -> str:
    """Pattern accepting exactly one of the given options."""
    return "|".join(re.escape(option) for option in options)


def enum_pattern(enum_cls) -> str:
    return one_of(*(member.value for member in enum_cls))


# Numeric fields arrive already coerced; anything still a string is malformed.
NUMBER_PATTERN: Final[str] = r"-?\d+(\.\d+)?"
PINCODE_PATTERN: Final[str] = r"\d{6}"

MIN_CONSTRUCTION_YEAR: Final[int] = 1900

NUMERIC_FIELDS: Final[tuple[str, ...]] = (
    "area_of_property",
    "price_per_unit",
    "total_price",
    "latitude",
    "longitude",
)

INTEGER_FIELDS: Final[tuple[str, ...]] = (
    "floor",
    "number_of_floors",
    "rooms",
    "bathrooms",
    "balconies",
    "year_of_construction",
)

FORM_FIELDS: Final[frozenset[str]] = frozenset({
    "type_of_property", "authority", "listing_for", "category", "title",
    "description", "address", "society", "area_locality", "city", "district",
    "state", "pincode", "latitude", "longitude", "area_of_property",
    "area_unit", "pricing_mode", "price_per_unit", "total_price", "floor",
    "number_of_floors", "rooms", "bathrooms", "balconies",
    "year_of_construction", "amenities", "photos", "documents",
})


# =============================================================================
# Rule Sets
# =============================================================================

BASE_RULES: Final[dict[str, ValidationRule]] = {
    "type_of_property": ValidationRule(required=True, pattern=enum_pattern(PropertyType)),
}

COMMON_RULES: Final[dict[str, ValidationRule]] = {
    **BASE_RULES,
    "authority": ValidationRule(required=True, pattern=enum_pattern(Authority)),
    "listing_for": ValidationRule(required=True, pattern=enum_pattern(ListingFor)),
    "title": ValidationRule(required=True, min_length=5, max_length=80),
    "photos": ValidationRule(max_items=MAX_PHOTOS),
    "address": ValidationRule(required=True),
    "area_locality": ValidationRule(required=True),
    "city": ValidationRule(required=True),
    "district": ValidationRule(required=True),
    "state": ValidationRule(required=True),
    "pincode": ValidationRule(required=True, pattern=PINCODE_PATTERN),
    "description": ValidationRule(max_length=1000),
    "latitude": ValidationRule(min=-90, max=90, pattern=NUMBER_PATTERN),
    "longitude": ValidationRule(min=-180, max=180, pattern=NUMBER_PATTERN),
    "area_of_property": ValidationRule(required=True, min=1, pattern=NUMBER_PATTERN),
    "documents": ValidationRule(max_items=MAX_DOCUMENTS),
}

_BUILDING_TYPES = (PropertyType.APARTMENT.value, PropertyType.HOUSE.value)
_LAND_TYPES = (PropertyType.LAND.value, PropertyType.PLOT.value)

APARTMENT_HOUSE_RULES: Final[dict[str, ValidationRule]] = {
    **COMMON_RULES,
    "type_of_property": ValidationRule(required=True, pattern=one_of(*_BUILDING_TYPES)),
    "floor": ValidationRule(
        required_when={"type_of_property": (PropertyType.APARTMENT.value,)},
        integer=True,
        min=0,
        pattern=NUMBER_PATTERN,
    ),
    "number_of_floors": ValidationRule(
        required_when={"type_of_property": (PropertyType.HOUSE.value,)},
        integer=True,
        min=1,
        pattern=NUMBER_PATTERN,
    ),
    "rooms": ValidationRule(required=True, integer=True, min=1, max=20, pattern=NUMBER_PATTERN),
    "bathrooms": ValidationRule(required=True, integer=True, min=1, max=20, pattern=NUMBER_PATTERN),
    "balconies": ValidationRule(integer=True, min=0, max=10, pattern=NUMBER_PATTERN),
    "amenities": ValidationRule(max_items=len(AMENITIES)),
    "year_of_construction": ValidationRule(
        integer=True,
        min=MIN_CONSTRUCTION_YEAR,
        max=CURRENT_YEAR,
        pattern=NUMBER_PATTERN,
    ),
    "society": ValidationRule(max_length=120),
    "area_unit": ValidationRule(required=True, pattern=enum_pattern(AreaUnit)),
    "price_per_unit": ValidationRule(required=True, min=0, pattern=NUMBER_PATTERN),
}

_PRICED_BY_MODE_RULES: Final[dict[str, ValidationRule]] = {
    "pricing_mode": ValidationRule(required=True, pattern=enum_pattern(PricingMode)),
    "price_per_unit": ValidationRule(
        required_when={"pricing_mode": (PricingMode.PER_UNIT.value,)},
        min=0,
        pattern=NUMBER_PATTERN,
    ),
    "area_unit": ValidationRule(
        required_when={"pricing_mode": (PricingMode.PER_UNIT.value,)},
        pattern=enum_pattern(AreaUnit),
    ),
    "total_price": ValidationRule(
        required_when={"pricing_mode": (PricingMode.TOTAL.value,)},
        min=0,
        pattern=NUMBER_PATTERN,
    ),
}

LAND_PLOT_RULES: Final[dict[str, ValidationRule]] = {
    **COMMON_RULES,
    "type_of_property": ValidationRule(required=True, pattern=one_of(*_LAND_TYPES)),
    "category": ValidationRule(
        required_when={"type_of_property": _LAND_TYPES},
        pattern=enum_pattern(Category),
    ),
    **_PRICED_BY_MODE_RULES,
}

SHOP_RULES: Final[dict[str, ValidationRule]] = {
    **COMMON_RULES,
    "type_of_property": ValidationRule(required=True, pattern=one_of(PropertyType.SHOP.value)),
    **_PRICED_BY_MODE_RULES,
}

RULE_GROUPS: Final[Mapping[str, Mapping[str, ValidationRule]]] = MappingProxyType({
    "apartment_house": MappingProxyType(APARTMENT_HOUSE_RULES),
    "land_plot": MappingProxyType(LAND_PLOT_RULES),
    "shop": MappingProxyType(SHOP_RULES),
})

for _rules in (BASE_RULES, *RULE_GROUPS.values()):
    check_dependencies(_rules, FORM_FIELDS)


def group_for(property_type: Optional[PropertyType]) -> Optional[str]:
    """Name of the form group shown for a property type."""
    if property_type is None:
        return None
    if property_type.is_residential_building:
        return "apartment_house"
    if property_type.is_land:
        return "land_plot"
    return "shop"


def rules_for(type_of_property) -> Mapping[str, ValidationRule]:
    """
    Rule set for the form group matching ``type_of_property``.

    Unknown or missing types get BASE_RULES, so the type field itself is
    the one reported.
    """
    if isinstance(type_of_property, PropertyType):
        property_type = type_of_property
    else:
        property_type = PropertyType.from_string(type_of_property)
    group = group_for(property_type)
    if group is None:
        return MappingProxyType(BASE_RULES)
    return RULE_GROUPS[group]

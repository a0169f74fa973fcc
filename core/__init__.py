"""
PropGo Listings - Core Business Logic

This package provides:
1. Validation (declarative field rules and the engine that evaluates them)
2. Units (area and price normalisation across five measurement units)
3. Listings (schema, form rule sets, search and storage)
4. Geo (nearby city lookup)
"""

from .validation import (
    CURRENT_YEAR,
    RuleDefinitionError,
    ValidationMessages,
    ValidationRule,
    validate_values,
)
from .units import (
    AreaUnit,
    PRICE_PER_SQFT_UNDEFINED,
    convert_area,
    convert_price_per_unit,
    derived_total,
    from_square_feet,
    price_per_sqft,
    to_square_feet,
)
from .listings import (
    Listing,
    ListingRepository,
    PropertyType,
    SearchFilters,
    create_listing,
    validate_listing_data,
)
from .geo import nearby_cities, nearest_city

__all__ = [
    # Validation
    "CURRENT_YEAR",
    "RuleDefinitionError",
    "ValidationMessages",
    "ValidationRule",
    "validate_values",
    # Units
    "AreaUnit",
    "PRICE_PER_SQFT_UNDEFINED",
    "convert_area",
    "convert_price_per_unit",
    "derived_total",
    "from_square_feet",
    "price_per_sqft",
    "to_square_feet",
    # Listings
    "Listing",
    "ListingRepository",
    "PropertyType",
    "SearchFilters",
    "create_listing",
    "validate_listing_data",
    # Geo
    "nearby_cities",
    "nearest_city",
]

"""
PropGo - Property Listings

Listing schema, form rule sets, validation, search and storage.
"""

from core.listings.schema import (
    AMENITIES,
    Authority,
    Category,
    Listing,
    ListingFor,
    PerUnitPricing,
    PricingMode,
    PropertyType,
    TotalPricing,
)
from core.listings.rules import RULE_GROUPS, rules_for
from core.listings.validation import (
    ListingValidationResult,
    apply_listing_update,
    create_listing,
    normalise_form_values,
    validate_listing_data,
)
from core.listings.filters import (
    SearchFilters,
    filter_listings,
    parse_range,
    sort_listings,
)
from core.listings.repository import (
    ListingPage,
    ListingRepository,
    get_listing_repository,
    reset_listing_repository,
)

__all__ = [
    # Schema
    "AMENITIES",
    "Authority",
    "Category",
    "Listing",
    "ListingFor",
    "PerUnitPricing",
    "PricingMode",
    "PropertyType",
    "TotalPricing",
    # Rules
    "RULE_GROUPS",
    "rules_for",
    # Validation
    "ListingValidationResult",
    "apply_listing_update",
    "create_listing",
    "normalise_form_values",
    "validate_listing_data",
    # Search
    "SearchFilters",
    "filter_listings",
    "parse_range",
    "sort_listings",
    # Storage
    "ListingPage",
    "ListingRepository",
    "get_listing_repository",
    "reset_listing_repository",
]

"""
Listing Validation - Form Values to Listings

Normalises raw listing-form values, validates them against the rule set for
the property group and builds Listing records.

Validation failures are returned as data; nothing here raises for bad input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from core.listings.rules import INTEGER_FIELDS, NUMERIC_FIELDS, rules_for
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
    generate_listing_id,
)
from core.units import AreaUnit, derived_total
from core.validation import DEFAULT_MESSAGES, ValidationMessages, is_empty, validate_values

logger = logging.getLogger(__name__)


# =============================================================================
# Validation Result
# =============================================================================


@dataclass(frozen=True)
class ListingValidationResult:
    """Outcome of validating listing-form values."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[tuple[str, str]]:
        """First failing field and its message, for a blocking alert."""
        for name, message in self.errors.items():
            return name, message
        return None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": dict(self.errors),
        }


# =============================================================================
# Normalisation
# =============================================================================


def _coerce_number(value: Any, integer: bool) -> Any:
    # Anything that is not text or a finite number becomes text, so the
    # number pattern reports it
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if not isinstance(value, str):
        return value
    text = value.strip().replace(",", "")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return value
    if not math.isfinite(number):
        return value
    if integer and number.is_integer():
        return int(number)
    return number


_ENUM_FIELDS = {
    "type_of_property": PropertyType,
    "authority": Authority,
    "listing_for": ListingFor,
    "category": Category,
    "pricing_mode": PricingMode,
}


def _canonical_enum(value: Any, enum_cls) -> Any:
    if value is None:
        return None
    if not isinstance(value, str):
        return str(value)
    normalised = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == normalised:
            return member.value
    return value.strip()


_AMENITY_LOOKUP = {amenity.lower(): amenity for amenity in AMENITIES}


def _canonical_amenity(item: Any) -> Any:
    if not isinstance(item, str):
        return item
    return _AMENITY_LOOKUP.get(item.strip().lower(), item.strip())


def normalise_form_values(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalise raw form values before validation.

    - Strings are stripped
    - Numeric strings in numeric fields become numbers ("1,200" -> 1200.0)
    - Choice fields are matched case-insensitively to their canonical value
    - Amenity names are matched case-insensitively to AMENITIES
    - Non-finite numbers and non-scalar values in numeric fields become text

    Values that cannot be coerced are left as-is so the rule set reports them.
    """
    values: dict[str, Any] = {}
    for name, value in data.items():
        if isinstance(value, str):
            value = value.strip()
        if name in NUMERIC_FIELDS:
            value = _coerce_number(value, integer=False)
        elif name in INTEGER_FIELDS:
            value = _coerce_number(value, integer=True)
        elif name in _ENUM_FIELDS:
            value = _canonical_enum(value, _ENUM_FIELDS[name])
        elif name == "area_unit" and value is not None and value != "":
            unit = AreaUnit.from_string(value) if isinstance(value, str) else None
            value = unit.value if unit else str(value)
        elif name == "amenities" and isinstance(value, (list, tuple)):
            value = [_canonical_amenity(item) for item in value]
        values[name] = value
    return values


# =============================================================================
# Validation Functions
# =============================================================================


def _check_amenities(value: Any, messages: ValidationMessages) -> Optional[str]:
    """Every amenity must come from AMENITIES."""
    if is_empty(value):
        return None
    if not isinstance(value, (list, tuple)):
        return messages.pattern
    if any(item not in AMENITIES for item in value):
        return messages.pattern
    return None


def _validate(
    values: Mapping[str, Any],
    today: Optional[date] = None,
    messages: Optional[ValidationMessages] = None,
) -> ListingValidationResult:
    messages = messages or DEFAULT_MESSAGES
    rules = rules_for(values.get("type_of_property"))
    errors = validate_values(values, rules, messages=messages, today=today)
    if "amenities" in rules and "amenities" not in errors:
        error = _check_amenities(values.get("amenities"), messages)
        if error is not None:
            errors["amenities"] = error
    return ListingValidationResult(errors=errors)


def validate_listing_data(
    data: Mapping[str, Any],
    today: Optional[date] = None,
    messages: Optional[ValidationMessages] = None,
) -> ListingValidationResult:
    """
    Validate raw listing-form values.

    Args:
        data: Raw form values
        today: Date used for the construction-year bound
        messages: Optional message overrides

    Returns:
        ListingValidationResult with the field error map
    """
    return _validate(normalise_form_values(data), today, messages)


def _pricing_mode(values: Mapping[str, Any], property_type: PropertyType) -> PricingMode:
    # Apartments and houses are always priced per unit
    if property_type.is_residential_building:
        return PricingMode.PER_UNIT
    return PricingMode(values["pricing_mode"])


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_text(value: Any) -> Optional[str]:
    return value or None


def build_listing(
    values: Mapping[str, Any],
    owner_id: str,
    listing_id: Optional[str] = None,
) -> Listing:
    """
    Build a Listing from normalised, already-valid form values.

    In per-unit mode the total is derived from the price per unit and the
    area (both in the listing's unit).
    """
    property_type = PropertyType(values["type_of_property"])
    mode = _pricing_mode(values, property_type)
    area = float(values["area_of_property"])
    area_unit = AreaUnit(values.get("area_unit") or AreaUnit.SQFT.value)

    if mode == PricingMode.PER_UNIT:
        per_unit = float(values["price_per_unit"])
        pricing = PerUnitPricing(
            price_per_unit=per_unit,
            unit=area_unit,
            computed_total=derived_total(per_unit, area),
        )
    else:
        pricing = TotalPricing(total_price=float(values["total_price"]))

    building = property_type.is_residential_building
    category = values.get("category") if property_type.is_land else None

    return Listing(
        listing_id=listing_id or generate_listing_id(),
        owner_id=owner_id,
        type_of_property=property_type,
        authority=Authority(values["authority"]),
        listing_for=ListingFor(values["listing_for"]),
        category=Category(category) if category else None,
        title=values["title"],
        description=values.get("description") or "",
        address=values["address"],
        society=_optional_text(values.get("society")) if building else None,
        area_locality=values["area_locality"],
        city=values["city"],
        district=values["district"],
        state=values["state"],
        pincode=values["pincode"],
        latitude=values.get("latitude"),
        longitude=values.get("longitude"),
        area=area,
        area_unit=area_unit,
        pricing=pricing,
        floor=_optional_int(values.get("floor")) if property_type == PropertyType.APARTMENT else None,
        number_of_floors=(
            _optional_int(values.get("number_of_floors"))
            if property_type == PropertyType.HOUSE
            else None
        ),
        rooms=_optional_int(values.get("rooms")) if building else None,
        bathrooms=_optional_int(values.get("bathrooms")) if building else None,
        balconies=_optional_int(values.get("balconies")) if building else None,
        year_of_construction=(
            _optional_int(values.get("year_of_construction")) if building else None
        ),
        amenities=list(values.get("amenities") or []) if building else [],
        photos=list(values.get("photos") or []),
        documents=list(values.get("documents") or []),
    )


# =============================================================================
# Listing Creation
# =============================================================================


def create_listing(
    data: Mapping[str, Any],
    owner_id: str,
    today: Optional[date] = None,
) -> tuple[Optional[Listing], ListingValidationResult]:
    """
    Validate form values and create a Listing.

    Args:
        data: Raw form values
        owner_id: ID of the user creating the listing
        today: Date used for the construction-year bound

    Returns:
        Tuple of (Listing or None, ListingValidationResult)
    """
    values = normalise_form_values(data)
    result = _validate(values, today)
    if not result.valid:
        logger.debug("Listing rejected for %s: %s", owner_id, sorted(result.errors))
        return None, result

    return build_listing(values, owner_id), result


def apply_listing_update(
    listing: Listing,
    changes: Mapping[str, Any],
    today: Optional[date] = None,
) -> tuple[Optional[Listing], ListingValidationResult]:
    """
    Merge changed form values into a listing and re-validate.

    Identity, ownership, verification and creation time are preserved.

    Returns:
        Tuple of (updated Listing or None, ListingValidationResult)
    """
    merged = listing.to_form_values()
    merged.update(changes)
    values = normalise_form_values(merged)
    result = _validate(values, today)
    if not result.valid:
        return None, result

    rebuilt = build_listing(values, listing.owner_id, listing_id=listing.listing_id)
    updated = replace(
        rebuilt,
        verified=listing.verified,
        created_at=listing.created_at,
        updated_at=datetime.utcnow(),
    )
    return updated, result

"""
Listing Routes - REST API for Property Listings

Public:
- Search and browse listings
- View a listing, optionally converted to another area unit
- Validate listing-form values without saving

Owner only (identity from the X-User-Id header set by the auth gateway):
- Create, update and delete listings
- List the caller's own listings
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Query

from core.listings import (
    Listing,
    ListingFor,
    ListingRepository,
    PropertyType,
    SearchFilters,
    apply_listing_update,
    create_listing,
    get_listing_repository,
    parse_range,
    validate_listing_data,
)
from core.listings.filters import SORT_NEWEST, SORT_ORDERS
from core.units import AreaUnit, convert_area, convert_price_per_unit
from utils.config import get_config
from utils.formatting import format_area, format_inr

logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/listings", tags=["listings"])


# =============================================================================
# Dependencies
# =============================================================================


def listing_repository() -> ListingRepository:
    """Repository dependency."""
    return get_listing_repository()


def require_user(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Caller identity from the X-User-Id header.

    Raises:
        HTTPException(401) if the header is missing
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id.strip()


def _get_or_404(repo: ListingRepository, listing_id: str) -> Listing:
    listing = repo.get(listing_id)
    if listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


def _require_owner(listing: Listing, user_id: str, action: str) -> None:
    if listing.owner_id != user_id:
        raise HTTPException(
            status_code=403,
            detail=f"You don't have permission to {action} this listing",
        )


def _parse_enum(enum_cls, value: Optional[str], name: str):
    if value is None or not value.strip():
        return None
    normalised = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == normalised:
            return member
    raise HTTPException(status_code=400, detail=f"Invalid {name}: {value}")


def _parse_unit(value: str) -> AreaUnit:
    unit = AreaUnit.from_string(value)
    if unit is None:
        raise HTTPException(status_code=400, detail=f"Invalid area unit: {value}")
    return unit


def _parse_range_or_400(value: Optional[str], name: str):
    try:
        return parse_range(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid {name}: {e}")


# =============================================================================
# Search
# =============================================================================


@router.get("")
async def search_listings(
    city: Optional[str] = Query(None),
    type_of_property: Optional[str] = Query(None),
    listing_for: Optional[str] = Query(None),
    verified: bool = Query(False, description="Only verified listings"),
    price: Optional[str] = Query(None, description="Price per area_unit, e.g. 4000-6000"),
    area: Optional[str] = Query(None, description="Area in area_unit, e.g. 1000-2000"),
    area_unit: str = Query(AreaUnit.SQFT.value),
    rooms: Optional[int] = Query(None, ge=0),
    bhk: Optional[str] = Query(None, description="1 BHK, 2 BHK, 3 BHK or 4+ BHK"),
    sort: str = Query(SORT_NEWEST),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    repo: ListingRepository = Depends(listing_repository),
):
    """Search listings with filters and pagination."""
    config = get_config()
    if sort not in SORT_ORDERS:
        raise HTTPException(status_code=400, detail=f"Invalid sort: {sort}")

    try:
        filters = SearchFilters(
            city=city,
            type_of_property=_parse_enum(PropertyType, type_of_property, "type_of_property"),
            listing_for=_parse_enum(ListingFor, listing_for, "listing_for"),
            verified_only=verified,
            price_range=_parse_range_or_400(price, "price"),
            area_range=_parse_range_or_400(area, "area"),
            area_unit=_parse_unit(area_unit),
            rooms=rooms,
            bhk=bhk or None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    page_size = min(limit or config.default_page_size, config.max_page_size)
    result = repo.search(filters, page=page, limit=page_size, order=sort)
    return result.to_dict()


@router.get("/user/my-listings")
async def my_listings(
    user_id: str = Depends(require_user),
    repo: ListingRepository = Depends(listing_repository),
):
    """Listings owned by the caller."""
    listings = repo.list_by_owner(user_id)
    return {"listings": [listing.to_dict() for listing in listings]}


# =============================================================================
# Validation
# =============================================================================


@router.post("/validate")
async def validate_listing(payload: dict[str, Any] = Body(...)):
    """Validate listing-form values without saving anything."""
    result = validate_listing_data(payload)
    return result.to_dict()


# =============================================================================
# Single Listing
# =============================================================================


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    repo: ListingRepository = Depends(listing_repository),
):
    """Get a single listing."""
    return {"listing": _get_or_404(repo, listing_id).to_dict()}


@router.get("/{listing_id}/display")
async def display_listing(
    listing_id: str,
    unit: Optional[str] = Query(None, description="Target area unit"),
    repo: ListingRepository = Depends(listing_repository),
):
    """
    Area and price of a listing expressed in a target unit.

    Raw numbers are unrounded; the formatted strings are rounded for display.
    """
    listing = _get_or_404(repo, listing_id)
    target = _parse_unit(unit) if unit else listing.area_unit

    area_in_target = convert_area(listing.area, listing.area_unit, target)
    response: dict[str, Any] = {
        "listing_id": listing.listing_id,
        "unit": target.value,
        "area": area_in_target,
        "total_price": listing.total_price,
        "price_per_unit": None,
        "formatted": {
            "area": format_area(area_in_target, target),
            "total_price": format_inr(listing.total_price),
            "price_per_unit": None,
        },
    }
    if listing.has_defined_price:
        per_unit = convert_price_per_unit(listing.price_per_sqft, target)
        response["price_per_unit"] = per_unit
        response["formatted"]["price_per_unit"] = f"{format_inr(per_unit)} per {target.label}"
    return response


@router.post("", status_code=201)
async def create_listing_endpoint(
    payload: dict[str, Any] = Body(...),
    user_id: str = Depends(require_user),
    repo: ListingRepository = Depends(listing_repository),
):
    """Create a listing. Responds 400 with the field error map if invalid."""
    listing, result = create_listing(payload, owner_id=user_id)
    if listing is None:
        raise HTTPException(
            status_code=400,
            detail={"message": "Validation failed", "errors": result.errors},
        )

    repo.create(listing)
    return {"message": "Listing created successfully", "listing": listing.to_dict()}


@router.put("/{listing_id}")
async def update_listing(
    listing_id: str,
    payload: dict[str, Any] = Body(...),
    user_id: str = Depends(require_user),
    repo: ListingRepository = Depends(listing_repository),
):
    """Update a listing owned by the caller."""
    existing = _get_or_404(repo, listing_id)
    _require_owner(existing, user_id, "update")

    updated, result = apply_listing_update(existing, payload)
    if updated is None:
        raise HTTPException(
            status_code=400,
            detail={"message": "Validation failed", "errors": result.errors},
        )

    repo.update(updated)
    return {"message": "Listing updated successfully", "listing": updated.to_dict()}


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: str,
    user_id: str = Depends(require_user),
    repo: ListingRepository = Depends(listing_repository),
):
    """Delete a listing owned by the caller."""
    existing = _get_or_404(repo, listing_id)
    _require_owner(existing, user_id, "delete")

    repo.delete(listing_id)
    return {"message": "Listing deleted successfully"}

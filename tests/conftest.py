"""
Shared fixtures for listing tests.
"""

from datetime import date, datetime

import pytest

from core.listings import (
    Authority,
    Listing,
    ListingFor,
    ListingRepository,
    PerUnitPricing,
    PropertyType,
    TotalPricing,
    reset_listing_repository,
)
from core.units import AreaUnit, derived_total


TODAY = date(2026, 10, 19)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def apartment_form():
    """Complete apartment listing-form values."""
    return {
        "type_of_property": "Apartment",
        "authority": "Builder",
        "listing_for": "Sale",
        "title": "2BHK in Sector 62",
        "address": "Tower B, Flat 1204",
        "area_locality": "Sector 62",
        "city": "Noida",
        "district": "Gautam Buddh Nagar",
        "state": "Uttar Pradesh",
        "pincode": "201301",
        "area_of_property": 1200,
        "area_unit": "Sqft",
        "price_per_unit": 4000,
        "floor": 12,
        "rooms": 2,
        "bathrooms": 2,
        "balconies": 1,
        "year_of_construction": 2018,
        "amenities": ["Parking", "Lift"],
    }


@pytest.fixture
def plot_form():
    """Complete plot listing-form values priced per acre."""
    return {
        "type_of_property": "Plot",
        "authority": "Private",
        "listing_for": "Sale",
        "category": "Residential",
        "title": "Residential plot near highway",
        "address": "Plot 17, NH-48",
        "area_locality": "Manesar block",
        "city": "Gurugram",
        "district": "Gurugram",
        "state": "Haryana",
        "pincode": "122050",
        "area_of_property": 2,
        "pricing_mode": "Per Unit",
        "area_unit": "Acres",
        "price_per_unit": 8_000_000,
    }


@pytest.fixture
def shop_form():
    """Complete shop listing-form values with a total price."""
    return {
        "type_of_property": "Shop",
        "authority": "Government",
        "listing_for": "Rent",
        "title": "Commercial shop near market",
        "address": "Shop 4, Main Bazaar",
        "area_locality": "Old City",
        "city": "Pune",
        "district": "Pune",
        "state": "Maharashtra",
        "pincode": "411002",
        "area_of_property": 300,
        "pricing_mode": "Total",
        "total_price": 45000,
    }


def make_listing(
    listing_id,
    owner_id="user-1",
    type_of_property=PropertyType.APARTMENT,
    city="Noida",
    area=1000.0,
    area_unit=AreaUnit.SQFT,
    price_per_unit=None,
    total_price=None,
    rooms=None,
    verified=False,
    listing_for=ListingFor.SALE,
    created_at=None,
):
    """Build a Listing directly, bypassing form validation."""
    if total_price is not None:
        pricing = TotalPricing(total_price=total_price)
    else:
        per_unit = price_per_unit if price_per_unit is not None else 5000.0
        pricing = PerUnitPricing(
            price_per_unit=per_unit,
            unit=area_unit,
            computed_total=derived_total(per_unit, area),
        )
    return Listing(
        listing_id=listing_id,
        owner_id=owner_id,
        type_of_property=type_of_property,
        authority=Authority.PRIVATE,
        listing_for=listing_for,
        title=f"Listing {listing_id}",
        address="Somewhere",
        area_locality="Locality",
        city=city,
        district=city,
        state="State",
        pincode="110001",
        area=area,
        area_unit=area_unit,
        pricing=pricing,
        rooms=rooms,
        verified=verified,
        created_at=created_at or datetime(2026, 1, 1),
    )


@pytest.fixture
def repository():
    """Fresh in-memory repository installed as the singleton."""
    repo = ListingRepository()
    reset_listing_repository(repo)
    yield repo
    reset_listing_repository()


@pytest.fixture
def listing_factory():
    """Factory for Listing records."""
    return make_listing

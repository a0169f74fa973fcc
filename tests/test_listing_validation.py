"""
Tests for Listing Form Validation

Tests cover:
- Rule group selection by property type
- Conditional requirements (category, floor, pricing mode)
- Normalisation of raw form values
- Listing creation and derived totals
- Re-validation on update
"""

import pytest

from core.listings import (
    Category,
    Listing,
    PerUnitPricing,
    PricingMode,
    PropertyType,
    TotalPricing,
    apply_listing_update,
    create_listing,
    normalise_form_values,
    rules_for,
    validate_listing_data,
)
from core.listings.rules import APARTMENT_HOUSE_RULES, BASE_RULES, LAND_PLOT_RULES, SHOP_RULES
from core.units import AreaUnit
from core.validation import DEFAULT_MESSAGES


# =============================================================================
# Rule Groups
# =============================================================================


class TestRuleGroups:

    @pytest.mark.parametrize(
        "type_of_property,expected",
        [
            ("Apartment", APARTMENT_HOUSE_RULES),
            ("House", APARTMENT_HOUSE_RULES),
            ("Land", LAND_PLOT_RULES),
            ("Plot", LAND_PLOT_RULES),
            ("Shop", SHOP_RULES),
            (PropertyType.SHOP, SHOP_RULES),
        ],
    )
    def test_group_selected_by_type(self, type_of_property, expected):
        assert dict(rules_for(type_of_property)) == expected

    @pytest.mark.parametrize("type_of_property", [None, "", "Castle"])
    def test_unknown_type_gets_base_rules(self, type_of_property):
        assert dict(rules_for(type_of_property)) == BASE_RULES

    def test_unknown_type_reported(self):
        result = validate_listing_data({"type_of_property": "Castle"})

        assert result.errors == {"type_of_property": DEFAULT_MESSAGES.pattern}

    def test_missing_type_reported(self):
        result = validate_listing_data({})

        assert result.errors == {"type_of_property": DEFAULT_MESSAGES.required}


# =============================================================================
# Validation
# =============================================================================


class TestValidateListingData:

    def test_complete_apartment_valid(self, apartment_form, today):
        result = validate_listing_data(apartment_form, today=today)

        assert result.valid
        assert result.errors == {}
        assert result.first_error is None

    def test_complete_plot_valid(self, plot_form, today):
        assert validate_listing_data(plot_form, today=today).valid

    def test_complete_shop_valid(self, shop_form, today):
        assert validate_listing_data(shop_form, today=today).valid

    def test_category_required_for_land(self, plot_form, today):
        plot_form["type_of_property"] = "Land"
        plot_form["category"] = ""

        result = validate_listing_data(plot_form, today=today)

        assert result.errors == {"category": DEFAULT_MESSAGES.required}

    def test_floor_required_for_apartment_only(self, apartment_form, today):
        del apartment_form["floor"]

        result = validate_listing_data(apartment_form, today=today)
        assert result.errors == {"floor": DEFAULT_MESSAGES.required}

        apartment_form["type_of_property"] = "House"
        apartment_form["number_of_floors"] = 2
        assert validate_listing_data(apartment_form, today=today).valid

    def test_total_price_required_in_total_mode(self, shop_form, today):
        del shop_form["total_price"]

        result = validate_listing_data(shop_form, today=today)

        assert result.errors == {"total_price": DEFAULT_MESSAGES.required}

    def test_per_unit_mode_requires_price_and_unit(self, shop_form, today):
        shop_form["pricing_mode"] = "Per Unit"

        result = validate_listing_data(shop_form, today=today)

        assert result.errors == {
            "price_per_unit": DEFAULT_MESSAGES.required,
            "area_unit": DEFAULT_MESSAGES.required,
        }

    def test_pincode_must_be_six_digits(self, apartment_form, today):
        apartment_form["pincode"] = "20130"

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"pincode": DEFAULT_MESSAGES.pattern}

    def test_title_too_short(self, apartment_form, today):
        apartment_form["title"] = "2BHK"

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"title": DEFAULT_MESSAGES.min_length}

    def test_rooms_out_of_range(self, apartment_form, today):
        apartment_form["rooms"] = 21
        apartment_form["bathrooms"] = 0

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {
            "rooms": DEFAULT_MESSAGES.max,
            "bathrooms": DEFAULT_MESSAGES.min,
        }

    def test_fractional_rooms(self, apartment_form, today):
        apartment_form["rooms"] = "2.5"

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"rooms": DEFAULT_MESSAGES.integer}

    def test_construction_year_in_future(self, apartment_form, today):
        apartment_form["year_of_construction"] = today.year + 1

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"year_of_construction": DEFAULT_MESSAGES.max}

    def test_construction_year_before_1900(self, apartment_form, today):
        apartment_form["year_of_construction"] = 1850

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"year_of_construction": DEFAULT_MESSAGES.min}

    def test_too_many_photos(self, apartment_form, today):
        apartment_form["photos"] = [f"photo_{i}.jpg" for i in range(13)]

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"photos": DEFAULT_MESSAGES.max_items}

    def test_non_numeric_area(self, apartment_form, today):
        apartment_form["area_of_property"] = "large"

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"area_of_property": DEFAULT_MESSAGES.pattern}

    def test_area_below_minimum(self, plot_form, today):
        plot_form["area_of_property"] = 0.5

        result = validate_listing_data(plot_form, today=today)

        assert result.errors == {"area_of_property": DEFAULT_MESSAGES.min}

    def test_result_to_dict(self, apartment_form, today):
        apartment_form["pincode"] = ""

        data = validate_listing_data(apartment_form, today=today).to_dict()

        assert data == {"valid": False, "errors": {"pincode": DEFAULT_MESSAGES.required}}


# =============================================================================
# Normalisation
# =============================================================================


class TestNormaliseFormValues:

    def test_numeric_strings_coerced(self):
        values = normalise_form_values({
            "area_of_property": "1,200",
            "rooms": "3",
            "price_per_unit": " 4500.50 ",
        })

        assert values == {"area_of_property": 1200.0, "rooms": 3, "price_per_unit": 4500.5}
        assert isinstance(values["rooms"], int)

    def test_blank_numeric_becomes_none(self):
        assert normalise_form_values({"balconies": "  "}) == {"balconies": None}

    def test_unparseable_numbers_left_as_text(self):
        assert normalise_form_values({"rooms": "two"}) == {"rooms": "two"}

    def test_choices_canonicalised(self):
        values = normalise_form_values({
            "type_of_property": "apartment",
            "pricing_mode": "per unit",
            "area_unit": "sq_yards",
        })

        assert values == {
            "type_of_property": "Apartment",
            "pricing_mode": "Per Unit",
            "area_unit": "Sq Yards",
        }

    def test_input_not_mutated(self):
        data = {"title": "  Plot  "}

        values = normalise_form_values(data)

        assert values == {"title": "Plot"}
        assert data == {"title": "  Plot  "}


# =============================================================================
# Creation
# =============================================================================


class TestCreateListing:

    def test_apartment_per_unit_total(self, apartment_form, today):
        listing, result = create_listing(apartment_form, owner_id="user-1", today=today)

        assert result.valid
        assert isinstance(listing, Listing)
        assert isinstance(listing.pricing, PerUnitPricing)
        assert listing.pricing.computed_total == 4_800_000
        assert listing.total_price == 4_800_000
        assert listing.price_per_sqft == 4000
        assert listing.owner_id == "user-1"
        assert listing.floor == 12
        assert listing.number_of_floors is None
        assert listing.listing_id.startswith("LST-")

    def test_apartment_ignores_pricing_mode(self, apartment_form, today):
        apartment_form["pricing_mode"] = "Total"

        listing, _ = create_listing(apartment_form, owner_id="user-1", today=today)

        assert listing.pricing.mode == PricingMode.PER_UNIT

    def test_plot_priced_per_acre(self, plot_form, today):
        listing, _ = create_listing(plot_form, owner_id="user-2", today=today)

        assert listing.area_unit == AreaUnit.ACRES
        assert listing.pricing.computed_total == 16_000_000
        assert listing.area_sqft == 87_120
        assert listing.category == Category.RESIDENTIAL
        assert listing.rooms is None

    def test_shop_total_pricing_defaults_to_sqft(self, shop_form, today):
        listing, _ = create_listing(shop_form, owner_id="user-3", today=today)

        assert isinstance(listing.pricing, TotalPricing)
        assert listing.total_price == 45000
        assert listing.area_unit == AreaUnit.SQFT
        assert listing.price_per_sqft == 150

    def test_invalid_form_returns_errors(self, plot_form, today):
        plot_form["category"] = None

        listing, result = create_listing(plot_form, owner_id="user-2", today=today)

        assert listing is None
        assert result.first_error == ("category", DEFAULT_MESSAGES.required)

    def test_layout_fields_dropped_for_land(self, plot_form, today):
        plot_form["rooms"] = 3
        plot_form["amenities"] = ["Parking"]

        listing, _ = create_listing(plot_form, owner_id="user-2", today=today)

        assert listing.rooms is None
        assert listing.amenities == []

    def test_listing_dict_round_trip(self, plot_form, today):
        listing, _ = create_listing(plot_form, owner_id="user-2", today=today)

        assert Listing.from_dict(listing.to_dict()) == listing


class TestApplyListingUpdate:

    def test_update_recomputes_total(self, apartment_form, today):
        listing, _ = create_listing(apartment_form, owner_id="user-1", today=today)

        updated, result = apply_listing_update(listing, {"price_per_unit": 5000}, today=today)

        assert result.valid
        assert updated.total_price == 6_000_000
        assert updated.listing_id == listing.listing_id
        assert updated.created_at == listing.created_at
        assert updated.updated_at is not None

    def test_switch_to_total_pricing(self, shop_form, today):
        shop_form["pricing_mode"] = "Per Unit"
        shop_form["price_per_unit"] = 200
        shop_form["area_unit"] = "Sqft"
        listing, _ = create_listing(shop_form, owner_id="user-3", today=today)

        updated, _ = apply_listing_update(
            listing, {"pricing_mode": "Total", "total_price": 90000}, today=today
        )

        assert isinstance(updated.pricing, TotalPricing)
        assert updated.total_price == 90000

    def test_invalid_update_rejected(self, apartment_form, today):
        listing, _ = create_listing(apartment_form, owner_id="user-1", today=today)

        updated, result = apply_listing_update(listing, {"pincode": "abc"}, today=today)

        assert updated is None
        assert result.errors == {"pincode": DEFAULT_MESSAGES.pattern}


# =============================================================================
# Malformed Numbers and Amenities
# =============================================================================


class TestMalformedInput:

    @pytest.mark.parametrize("text", ["NaN", "nan", "inf", "-Infinity"])
    def test_non_finite_area_rejected(self, plot_form, today, text):
        plot_form["area_of_property"] = text

        listing, result = create_listing(plot_form, owner_id="user-2", today=today)

        assert listing is None
        assert result.errors == {"area_of_property": DEFAULT_MESSAGES.pattern}

    def test_non_finite_total_price_rejected(self, shop_form, today):
        shop_form["total_price"] = "inf"

        result = validate_listing_data(shop_form, today=today)

        assert result.errors == {"total_price": DEFAULT_MESSAGES.pattern}

    def test_non_finite_float_rejected(self, apartment_form, today):
        apartment_form["price_per_unit"] = float("nan")

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"price_per_unit": DEFAULT_MESSAGES.pattern}

    @pytest.mark.parametrize("value", [[5], {"value": 5}, True])
    def test_non_scalar_number_rejected(self, plot_form, today, value):
        plot_form["area_of_property"] = value

        listing, result = create_listing(plot_form, owner_id="user-2", today=today)

        assert listing is None
        assert result.errors == {"area_of_property": DEFAULT_MESSAGES.pattern}

    def test_non_text_choice_rejected(self, shop_form, today):
        shop_form["listing_for"] = ["Sale"]

        listing, result = create_listing(shop_form, owner_id="user-3", today=today)

        assert listing is None
        assert result.errors == {"listing_for": DEFAULT_MESSAGES.pattern}

    def test_unknown_amenity_rejected(self, apartment_form, today):
        apartment_form["amenities"] = ["Parking", "Helipad"]

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"amenities": DEFAULT_MESSAGES.pattern}

    def test_amenity_case_canonicalised(self, apartment_form, today):
        apartment_form["amenities"] = ["parking", " swimming pool "]

        listing, result = create_listing(apartment_form, owner_id="user-1", today=today)

        assert result.valid
        assert listing.amenities == ["Parking", "Swimming Pool"]

    def test_amenities_must_be_a_list(self, apartment_form, today):
        apartment_form["amenities"] = "Parking"

        result = validate_listing_data(apartment_form, today=today)

        assert result.errors == {"amenities": DEFAULT_MESSAGES.pattern}

    def test_update_with_unknown_amenity_rejected(self, apartment_form, today):
        listing, _ = create_listing(apartment_form, owner_id="user-1", today=today)

        updated, result = apply_listing_update(listing, {"amenities": ["Moat"]}, today=today)

        assert updated is None
        assert result.errors == {"amenities": DEFAULT_MESSAGES.pattern}

"""
Tests for listing models and listing construction.
"""
import pytest
from datetime import datetime, timedelta, timezone

from listing_catalog.catalog.builder import build_listing, types_for, validate_category_type
from listing_catalog.errors import ValidationError
from listing_catalog.models.listing import (
    ExperienceListing,
    ExperienceType,
    ListingCategory,
    PeopleListing,
    PeopleType,
    PlaceListing,
    PlaceType,
)


CATEGORY_ENUMS = {
    "places": PlaceType,
    "people": PeopleType,
    "experiences": ExperienceType,
}


class TestCategoryTypeConsistency:
    """Every category accepts its own types and rejects the others."""

    @pytest.mark.parametrize("category", list(CATEGORY_ENUMS))
    def test_every_own_type_is_accepted(self, category, full_payload):
        """Test that all values of the category's enum build a listing."""
        for member in CATEGORY_ENUMS[category]:
            listing = build_listing(full_payload(category, type=member.value))
            assert listing.type == member
            assert listing.category == category

    @pytest.mark.parametrize("category", list(CATEGORY_ENUMS))
    def test_foreign_types_are_rejected(self, category, full_payload):
        """Test that types from other categories fail with a ValidationError on type."""
        foreign = [
            member
            for other, enum_cls in CATEGORY_ENUMS.items()
            if other != category
            for member in enum_cls
        ]
        for member in foreign:
            with pytest.raises(ValidationError) as exc_info:
                build_listing(full_payload(category, type=member.value))
            assert exc_info.value.field == "type"

    def test_error_message_names_type_and_category(self, full_payload):
        """Test the wording of the mismatch error."""
        with pytest.raises(ValidationError) as exc_info:
            build_listing(full_payload("places", type="restaurant"))

        assert exc_info.value.message == "type 'restaurant' is not valid for category 'places'"

    def test_validate_category_type_returns_enum_member(self):
        """Test that a valid pair returns the typed enum value."""
        assert validate_category_type("people", "specialist") is PeopleType.SPECIALIST
        assert validate_category_type(ListingCategory.PLACES, PlaceType.HOSTEL) is PlaceType.HOSTEL

    def test_unknown_category(self, full_payload):
        """Test that an unknown category is a ValidationError on category."""
        payload = full_payload("places")
        payload["category"] = "vehicles"

        with pytest.raises(ValidationError) as exc_info:
            build_listing(payload)
        assert exc_info.value.field == "category"

    def test_types_for(self):
        """Test listing the valid types of a category."""
        assert "hotel" in types_for("places")
        assert "hotel" not in types_for(ListingCategory.EXPERIENCES)
        assert len(types_for("people")) == 5


class TestVariantModels:
    """Tests for variant-specific fields."""

    def test_build_returns_matching_variant(self, full_payload):
        """Test that each category produces its own model class."""
        assert isinstance(build_listing(full_payload("places")), PlaceListing)
        assert isinstance(build_listing(full_payload("people")), PeopleListing)
        assert isinstance(build_listing(full_payload("experiences")), ExperienceListing)

    def test_people_listing_requires_availability(self, full_payload):
        """Test that people listings without weekly availability are rejected."""
        payload = full_payload("people")
        del payload["availability"]

        with pytest.raises(ValidationError) as exc_info:
            build_listing(payload)

        assert exc_info.value.field == "availability"
        assert exc_info.value.message == "field required"

    def test_people_availability_uses_weekly_form(self, full_payload):
        """Test that a date-range availability is not accepted for people."""
        payload = full_payload(
            "people",
            availability={
                "start_date": "2024-06-01T00:00:00Z",
                "end_date": "2024-06-30T00:00:00Z",
            },
        )
        with pytest.raises(ValidationError) as exc_info:
            build_listing(payload)
        assert exc_info.value.field.startswith("availability")

    def test_place_listing_date_range_availability(self, full_payload):
        """Test optional date-range availability on places."""
        listing = build_listing(
            full_payload(
                "places",
                availability={
                    "start_date": "2024-06-01T00:00:00Z",
                    "end_date": "2024-06-30T00:00:00Z",
                    "schedule": "weekends only",
                },
            )
        )
        assert listing.availability.schedule == "weekends only"

    def test_place_listing_requires_capacity(self, full_payload):
        """Test that capacity is mandatory for places."""
        payload = full_payload("places")
        del payload["capacity"]

        with pytest.raises(ValidationError) as exc_info:
            build_listing(payload)
        assert exc_info.value.field == "capacity"

    def test_group_size_bounds(self, full_payload):
        """Test that group_size.max below min is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            build_listing(full_payload("experiences", group_size={"min": 10, "max": 2}))
        assert exc_info.value.field == "group_size.max"

    def test_age_restriction_open_ended(self, full_payload):
        """Test age restriction with only a minimum."""
        listing = build_listing(full_payload("experiences", age_restriction={"min": 18}))
        assert listing.age_restriction.min == 18
        assert listing.age_restriction.max is None


class TestListingInvariants:
    """Tests for base listing invariants."""

    def test_tags_are_deduplicated(self, full_payload):
        """Test that tags behave as a set but keep first-seen order."""
        listing = build_listing(full_payload("places", tags=["wifi", "pool", "wifi", " ", "pool"]))
        assert listing.tags == ["wifi", "pool"]

    def test_verified_listing_cannot_be_pending(self, full_payload):
        """Test the verified implies not pending rule."""
        with pytest.raises(ValidationError) as exc_info:
            build_listing(full_payload("places", verified=True, status="pending"))
        assert exc_info.value.field == "status"

    def test_updated_at_not_before_created_at(self, full_payload):
        """Test timestamp ordering."""
        created = datetime(2024, 1, 2, tzinfo=timezone.utc)
        with pytest.raises(ValidationError) as exc_info:
            build_listing(
                full_payload(
                    "places",
                    created_at=created,
                    updated_at=created - timedelta(seconds=1),
                )
            )
        assert exc_info.value.field == "updated_at"

    def test_naive_timestamps_are_utc(self, full_payload):
        """Test that naive timestamps compare against aware ones as UTC."""
        listing = build_listing(
            full_payload(
                "places",
                created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                updated_at=datetime(2024, 1, 1, 12),
            )
        )
        assert listing.updated_at == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

        with pytest.raises(ValidationError) as exc_info:
            build_listing(
                full_payload(
                    "places",
                    created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
                    updated_at=datetime(2024, 1, 1),
                )
            )
        assert exc_info.value.field == "updated_at"

    def test_currency_is_normalized(self, full_payload):
        """Test that currency codes are upper-cased."""
        listing = build_listing(full_payload("places", pricing={"amount": 10, "currency": "eur"}))
        assert listing.pricing.currency == "EUR"

    def test_negative_price_rejected(self, full_payload):
        """Test that pricing amounts cannot be negative."""
        with pytest.raises(ValidationError) as exc_info:
            build_listing(full_payload("places", pricing={"amount": -1, "currency": "EUR"}))
        assert exc_info.value.field == "pricing.amount"

    def test_coordinates_range(self, full_payload):
        """Test latitude bounds on location coordinates."""
        location = {
            "city": "Dublin",
            "country": "Ireland",
            "coordinates": {"lat": 123.0, "lng": -6.26},
        }
        with pytest.raises(ValidationError) as exc_info:
            build_listing(full_payload("places", location=location))
        assert exc_info.value.field == "location.coordinates.lat"

    def test_listing_is_frozen(self, full_payload):
        """Test that stored listings cannot be mutated in place."""
        listing = build_listing(full_payload("places"))
        with pytest.raises(Exception):
            listing.title = "Changed"

    def test_searchable_text(self, full_payload):
        """Test that searchable text covers title, description and location."""
        listing = build_listing(full_payload("places"))
        text = listing.searchable_text()
        assert "harbour view" in text
        assert "quay" in text
        assert "dublin" in text

"""
Pydantic models for the listing catalog.
All data contracts are defined here for strict validation.
"""

from .listing import (
    AgeRestriction,
    BaseListing,
    Coordinates,
    DateRangeAvailability,
    ExperienceListing,
    ExperienceType,
    GroupSize,
    Listing,
    ListingCategory,
    ListingStatus,
    Location,
    PeopleListing,
    PeopleType,
    PlaceListing,
    PlaceType,
    Pricing,
    WeeklyAvailability,
)
from .filters import PriceRange, SearchFilters
from .summary import CatalogSummary, PriceStats
from .export import CatalogSnapshot, SnapshotMetadata

__all__ = [
    # Listing
    "AgeRestriction",
    "BaseListing",
    "Coordinates",
    "DateRangeAvailability",
    "ExperienceListing",
    "ExperienceType",
    "GroupSize",
    "Listing",
    "ListingCategory",
    "ListingStatus",
    "Location",
    "PeopleListing",
    "PeopleType",
    "PlaceListing",
    "PlaceType",
    "Pricing",
    "WeeklyAvailability",
    # Filters
    "PriceRange",
    "SearchFilters",
    # Summary
    "CatalogSummary",
    "PriceStats",
    # Export
    "CatalogSnapshot",
    "SnapshotMetadata",
]

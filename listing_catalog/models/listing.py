"""
Listing models - the three listing variants and their shared value objects.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ListingCategory(str, Enum):
    PLACES = "places"
    PEOPLE = "people"
    EXPERIENCES = "experiences"


class PlaceType(str, Enum):
    HOSTEL = "hostel"
    HOTEL = "hotel"
    AIRBNB = "airbnb"
    SHORT_TERM_RENTAL = "short_term_rental"
    VENUE_SPACE = "venue_space"
    WORKSPACE = "workspace"
    LANDMARK = "landmark"
    ATTRACTION = "attraction"
    TICKETED_VENUE = "ticketed_venue"


class PeopleType(str, Enum):
    PROFESSIONAL = "professional"
    SERVICE_PROVIDER = "service_provider"
    COMPANY = "company"
    ORGANIZATION = "organization"
    SPECIALIST = "specialist"


class ExperienceType(str, Enum):
    TOUR = "tour"
    EVENT = "event"
    FESTIVAL = "festival"
    CONCERT = "concert"
    ART_GALLERY = "art_gallery"
    MUSEUM = "museum"
    RESTAURANT = "restaurant"
    ADVENTURE_PARK = "adventure_park"
    CULTURAL_VENUE = "cultural_venue"


# Valid sub-classification per category
CATEGORY_TYPES: dict[ListingCategory, type[Enum]] = {
    ListingCategory.PLACES: PlaceType,
    ListingCategory.PEOPLE: PeopleType,
    ListingCategory.EXPERIENCES: ExperienceType,
}

ListingStatus = Literal["pending", "active", "inactive", "suspended"]
BillingPeriod = Literal["hourly", "daily", "weekly", "monthly"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coordinates(_Frozen):
    lat: float
    lng: float

    @field_validator("lat")
    @classmethod
    def validate_lat(cls, v: float) -> float:
        if v < -90.0 or v > 90.0:
            raise ValueError("lat must be between -90 and 90")
        return v

    @field_validator("lng")
    @classmethod
    def validate_lng(cls, v: float) -> float:
        if v < -180.0 or v > 180.0:
            raise ValueError("lng must be between -180 and 180")
        return v


class Location(_Frozen):
    address: str = ""
    city: str
    country: str
    coordinates: Optional[Coordinates] = None


class Pricing(_Frozen):
    amount: float = Field(ge=0)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    period: Optional[BillingPeriod] = None

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()


class DateRangeAvailability(_Frozen):
    """Bookable window for places and experiences."""
    start_date: datetime
    end_date: datetime
    schedule: Optional[str] = None

    @field_validator("end_date")
    @classmethod
    def validate_range(cls, v: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class WeeklyAvailability(_Frozen):
    """Working days and hours for people listings, e.g. days=["mon", "tue"], hours="9-17"."""
    days: list[str] = Field(min_length=1)
    hours: str = Field(min_length=1)


class GroupSize(_Frozen):
    min: int = Field(ge=1)
    max: int = Field(ge=1)

    @field_validator("max")
    @classmethod
    def validate_bounds(cls, v: int, info: ValidationInfo) -> int:
        low = info.data.get("min")
        if low is not None and v < low:
            raise ValueError("max must be greater than or equal to min")
        return v


class AgeRestriction(_Frozen):
    min: int = Field(ge=0)
    max: Optional[int] = Field(default=None, ge=0)

    @field_validator("max")
    @classmethod
    def validate_bounds(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        low = info.data.get("min")
        if v is not None and low is not None and v < low:
            raise ValueError("max must be greater than or equal to min")
        return v


class BaseListing(_Frozen):
    """
    Fields shared by every listing variant.
    Never built directly: use PlaceListing, PeopleListing or ExperienceListing.
    """
    id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    category: ListingCategory
    type: str
    owner_id: str = Field(min_length=1)
    images: list[str] = Field(default_factory=list)
    location: Optional[Location] = None
    pricing: Optional[Pricing] = None
    availability: Optional[DateRangeAvailability] = None
    tags: list[str] = Field(default_factory=list)
    verified: bool = False
    rating: float = Field(default=0.0, ge=0)
    review_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime
    status: ListingStatus = "pending"

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str]) -> list[str]:
        """Tags behave as a set; keep first-seen order for display."""
        seen: dict[str, None] = {}
        for tag in v:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime, info: ValidationInfo) -> datetime:
        """Naive timestamps are taken as UTC."""
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        created = info.data.get("created_at")
        if info.field_name == "updated_at" and created is not None and v < created:
            raise ValueError("updated_at must not be before created_at")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str, info: ValidationInfo) -> str:
        if info.data.get("verified") and v == "pending":
            raise ValueError("a verified listing cannot be pending")
        return v

    def price_amount(self) -> Optional[float]:
        return self.pricing.amount if self.pricing else None

    def searchable_text(self) -> str:
        """Lowercased title, description and location used by free-text search."""
        parts = [self.title, self.description]
        if self.location:
            parts.extend([self.location.city, self.location.country])
        return " ".join(p for p in parts if p).lower()


class PlaceListing(BaseListing):
    category: Literal["places"] = "places"
    type: PlaceType
    amenities: list[str] = Field(default_factory=list)
    capacity: int = Field(ge=0)
    rules: Optional[list[str]] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None


class PeopleListing(BaseListing):
    category: Literal["people"] = "people"
    type: PeopleType
    skills: list[str] = Field(default_factory=list)
    experience: str
    certifications: Optional[list[str]] = None
    portfolio: Optional[list[str]] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    # People are booked by weekday and hours, not by date range
    availability: WeeklyAvailability


class ExperienceListing(BaseListing):
    category: Literal["experiences"] = "experiences"
    type: ExperienceType
    duration: str = Field(min_length=1)
    group_size: GroupSize
    includes: list[str] = Field(default_factory=list)
    requirements: Optional[list[str]] = None
    age_restriction: Optional[AgeRestriction] = None


Listing = Annotated[
    Union[PlaceListing, PeopleListing, ExperienceListing],
    Field(discriminator="category"),
]

LISTING_MODELS: dict[ListingCategory, type[BaseListing]] = {
    ListingCategory.PLACES: PlaceListing,
    ListingCategory.PEOPLE: PeopleListing,
    ListingCategory.EXPERIENCES: ExperienceListing,
}

# Fields the catalog owns; callers cannot set them through create or update
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "status", "verified"})


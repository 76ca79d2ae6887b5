"""
Search filter models - the criteria accepted by catalog search.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..config import get_config
from .listing import ListingCategory, ListingStatus


class PriceRange(BaseModel):
    """
    Inclusive price bounds.
    Only applied when both bounds are given; a single bound is ignored.
    """
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.min is not None and self.max is not None


class SearchFilters(BaseModel):
    """
    Search specification. Every field is optional; absent means no constraint.
    """
    category: Optional[ListingCategory] = None
    type: Optional[str] = Field(
        default=None,
        description="Exact match on the listing type, not checked against category",
    )
    location: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of city or country",
    )
    price_range: Optional[PriceRange] = None
    tags: list[str] = Field(
        default_factory=list,
        description="Listing matches if it shares at least one tag",
    )
    verified: Optional[bool] = None
    status: Optional[ListingStatus] = None
    owner_id: Optional[str] = None
    query: Optional[str] = Field(
        default=None,
        description="Free text matched against title, description and location",
    )

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        """Same normalization listings apply to their own tags."""
        return [tag.strip() for tag in v if tag.strip()]

    # Pagination
    limit: int = Field(default_factory=lambda: get_config().search.default_limit, ge=0)
    offset: int = Field(default=0, ge=0)

"""
Summary models - price statistics and catalog-wide counts.
"""
from typing import Optional

from pydantic import BaseModel, Field


class PriceStats(BaseModel):
    """Price statistics for listings sharing one currency."""
    currency: str
    median: float = Field(description="Median price in the group")
    q1: float = Field(description="25th percentile")
    q3: float = Field(description="75th percentile")
    min_price: float
    max_price: float
    n: int = Field(description="Number of priced listings in the group")


class CatalogSummary(BaseModel):
    """Aggregate view over the whole catalog."""
    total: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    by_status: dict[str, int] = Field(default_factory=dict)
    verified: int = 0

    average_rating: Optional[float] = Field(
        default=None,
        description="Mean rating over listings with at least one review",
    )
    prices: dict[str, PriceStats] = Field(
        default_factory=dict,
        description="Price statistics keyed by currency code",
    )

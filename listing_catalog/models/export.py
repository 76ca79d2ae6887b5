"""
Export models - snapshot metadata and full catalog dump.
"""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .listing import Listing


class SnapshotMetadata(BaseModel):
    """Metadata for a catalog snapshot."""
    snapshot_id: str = Field(description="Unique snapshot identifier")
    exported_at: datetime
    listing_count: int = 0

    # Schema version
    schema_version: str = "1.0.0"


class CatalogSnapshot(BaseModel):
    """
    Complete export of the catalog.
    Listings are stored in search rank order (rating, then newest first).
    """
    metadata: SnapshotMetadata
    listings: list[Listing] = Field(default_factory=list)

    def to_minimal_export(self) -> dict[str, Any]:
        """Export minimal version without variant-specific fields."""
        return {
            "metadata": {
                "snapshot_id": self.metadata.snapshot_id,
                "exported_at": self.metadata.exported_at.isoformat(),
                "listing_count": self.metadata.listing_count,
            },
            "listings": [
                {
                    "id": listing.id,
                    "title": listing.title,
                    "category": listing.category,
                    "type": listing.type.value,
                    "status": listing.status,
                    "price": listing.price_amount(),
                    "currency": listing.pricing.currency if listing.pricing else None,
                }
                for listing in self.listings
            ],
        }

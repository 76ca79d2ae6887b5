"""
Listing search - predicate filtering, ranking and pagination over a catalog snapshot.
"""
import logging
from typing import Iterable, Optional

from .builder import AnyListing
from ..models.filters import SearchFilters
from ..models.listing import ListingCategory


logger = logging.getLogger(__name__)


def rank_key(listing: AnyListing) -> tuple:
    """Sort key: highest rating first, newest first on ties (use with reverse=True)."""
    return (listing.rating, listing.created_at)


def rank(listings: Iterable[AnyListing]) -> list[AnyListing]:
    return sorted(listings, key=rank_key, reverse=True)


class ListingSearch:
    """
    Filters listings with AND across supplied criteria, then ranks
    by rating and recency and returns one page.
    Full linear scan; fine for a single-process catalog.
    """

    def search(
        self,
        listings: Iterable[AnyListing],
        filters: SearchFilters,
    ) -> list[AnyListing]:
        """
        Run a search over a snapshot of listings.

        Args:
            listings: Catalog snapshot
            filters: Search criteria and pagination

        Returns:
            The requested page of ranked listings (possibly empty)
        """
        if filters.limit == 0:
            return []

        matched = [listing for listing in listings if self.matches(listing, filters)]
        ranked = rank(matched)
        page = ranked[filters.offset: filters.offset + filters.limit]

        logger.info(
            f"Search matched {len(matched)} listings, returning {len(page)} "
            f"(offset={filters.offset}, limit={filters.limit})"
        )
        return page

    def featured(
        self,
        listings: Iterable[AnyListing],
        category: Optional[ListingCategory] = None,
        limit: int = 10,
    ) -> list[AnyListing]:
        """Active, verified listings ranked the same way as search."""
        if limit <= 0:
            return []
        results = [
            listing for listing in listings
            if listing.status == "active" and listing.verified
        ]
        if category is not None:
            results = [listing for listing in results if listing.category == category]
        return rank(results)[:limit]

    def matches(self, listing: AnyListing, filters: SearchFilters) -> bool:
        """Check a single listing against every supplied criterion."""
        if filters.category is not None and listing.category != filters.category:
            return False

        if filters.type and listing.type != filters.type:
            return False

        if filters.owner_id and listing.owner_id != filters.owner_id:
            return False

        if filters.location and not self._matches_location(listing, filters.location):
            return False

        if filters.price_range and filters.price_range.is_complete:
            if not self._matches_price(listing, filters.price_range.min, filters.price_range.max):
                return False

        if filters.tags and not self._matches_tags(listing, filters.tags):
            return False

        if filters.verified is not None and listing.verified != filters.verified:
            return False

        if filters.status and listing.status != filters.status:
            return False

        if filters.query and filters.query.strip().lower() not in listing.searchable_text():
            return False

        return True

    def _matches_location(self, listing: AnyListing, location: str) -> bool:
        """Case-insensitive substring match against city or country."""
        if listing.location is None:
            return False
        needle = location.lower()
        return (
            needle in listing.location.city.lower()
            or needle in listing.location.country.lower()
        )

    def _matches_price(self, listing: AnyListing, low: float, high: float) -> bool:
        """Inclusive range check; listings without pricing never match."""
        amount = listing.price_amount()
        if amount is None:
            return False
        return low <= amount <= high

    def _matches_tags(self, listing: AnyListing, tags: list[str]) -> bool:
        """At least one tag in common."""
        return not set(listing.tags).isdisjoint(tags)

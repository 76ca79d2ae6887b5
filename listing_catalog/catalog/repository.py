"""
Listing repositories - keyed storage behind the catalog store.
"""
import threading
from typing import Iterator, Optional, Protocol

from .builder import AnyListing


class ListingRepository(Protocol):
    """Storage contract the catalog store relies on."""

    def get(self, listing_id: str) -> Optional[AnyListing]: ...

    def put(self, listing: AnyListing) -> None: ...

    def remove(self, listing_id: str) -> bool: ...

    def values(self) -> list[AnyListing]: ...

    def __contains__(self, listing_id: object) -> bool: ...

    def __len__(self) -> int: ...


class InMemoryListingRepository:
    """
    Dict-backed repository.
    Each mutation is a single assignment or removal, so readers always see
    either the old or the new listing value.
    """

    def __init__(self):
        self._listings: dict[str, AnyListing] = {}
        self._lock = threading.Lock()

    def get(self, listing_id: str) -> Optional[AnyListing]:
        return self._listings.get(listing_id)

    def put(self, listing: AnyListing) -> None:
        with self._lock:
            self._listings[listing.id] = listing

    def remove(self, listing_id: str) -> bool:
        with self._lock:
            return self._listings.pop(listing_id, None) is not None

    def values(self) -> list[AnyListing]:
        """Snapshot of all listings in insertion order."""
        with self._lock:
            return list(self._listings.values())

    def __contains__(self, listing_id: object) -> bool:
        return listing_id in self._listings

    def __len__(self) -> int:
        return len(self._listings)

    def __iter__(self) -> Iterator[AnyListing]:
        return iter(self.values())

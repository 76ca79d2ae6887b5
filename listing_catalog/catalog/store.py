"""
Catalog store - owns the listing collection and its lifecycle.
"""
import logging
import threading
import time
import uuid
from concurrent.futures import Future
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..config import Config, get_config
from ..errors import NotFoundError, ValidationError, from_pydantic
from ..models.export import CatalogSnapshot, SnapshotMetadata
from ..models.filters import SearchFilters
from ..models.listing import PROTECTED_FIELDS, ListingCategory, ListingStatus
from ..models.summary import CatalogSummary
from .builder import AnyListing, build_listing, parse_category
from .repository import InMemoryListingRepository, ListingRepository
from .search import ListingSearch, rank
from .summary import CatalogSummarizer
from .verification import VerificationWorkflow


logger = logging.getLogger(__name__)

# Statuses an administrator may set; pending is only ever the creation state
ADMIN_STATUSES = ("active", "inactive", "suspended")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogStore:
    """
    Listing catalog with create/update/delete, lookups, search and featured listings.

    Writes (create, update, delete, status changes, verification promotion)
    go through one lock. Listings are frozen models replaced by a single
    repository assignment, so readers never see a half-applied change.
    """

    def __init__(
        self,
        repository: Optional[ListingRepository] = None,
        workflow: Optional[VerificationWorkflow] = None,
        clock: Optional[Callable[[], datetime]] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or get_config()
        self.repository = repository if repository is not None else InMemoryListingRepository()
        self.workflow = workflow or VerificationWorkflow(
            delay=self.config.verification.delay_seconds
        )
        self.clock = clock or utcnow

        self.searcher = ListingSearch()
        self.summarizer = CatalogSummarizer()
        self._write_lock = threading.RLock()

    def create(self, data: Mapping[str, Any]) -> AnyListing:
        """
        Validate and store a new listing, then schedule its verification.

        Caller-supplied id, timestamps, status and verified flag are ignored.
        The listing is returned as pending; re-fetch it to see verification.

        Raises:
            ValidationError: if the payload is not a well-formed listing
            RuntimeError: if the store is closed
        """
        payload = {k: v for k, v in dict(data).items() if k not in PROTECTED_FIELDS}
        verify = self.config.verification.enabled

        with self._write_lock:
            if verify and self.workflow.closed:
                raise RuntimeError("catalog is closed, new listings cannot be verified")
            now = self.clock()
            payload.update(
                id=self._new_id(),
                created_at=now,
                updated_at=now,
                status="pending",
                verified=False,
            )
            listing = build_listing(payload)
            self.repository.put(listing)

        logger.info(f"Created {listing.category} listing {listing.id} for owner {listing.owner_id}")

        if verify:
            try:
                self._schedule_verification(listing.id)
            except RuntimeError:
                # closed between the check and scheduling
                with self._write_lock:
                    self.repository.remove(listing.id)
                raise
        return listing

    def update(self, listing_id: str, fields: Mapping[str, Any]) -> AnyListing:
        """
        Merge fields into an existing listing.

        id, created_at, updated_at, status and verified in the payload are ignored.

        Raises:
            NotFoundError: if the listing does not exist
            ValidationError: if the merged listing is invalid or the category changes
        """
        changes = {k: v for k, v in dict(fields).items() if k not in PROTECTED_FIELDS}

        with self._write_lock:
            existing = self.repository.get(listing_id)
            if existing is None:
                raise NotFoundError(listing_id)

            if "category" in changes and parse_category(changes["category"]) != existing.category:
                raise ValidationError(
                    "category",
                    f"category is fixed for the listing's lifetime (currently '{existing.category}')",
                )

            merged = existing.model_dump()
            merged.update(changes)
            merged["updated_at"] = self._touch(existing)

            updated = build_listing(merged)
            self.repository.put(updated)

        logger.info(f"Updated listing {listing_id}: {sorted(changes)}")
        return updated

    def get(self, listing_id: str) -> Optional[AnyListing]:
        """Return the listing, or None if it does not exist."""
        return self.repository.get(listing_id)

    def delete(self, listing_id: str) -> bool:
        """Remove a listing. Returns False if there was nothing to remove."""
        with self._write_lock:
            removed = self.repository.remove(listing_id)

        if removed:
            logger.info(f"Deleted listing {listing_id}")
        return removed

    def set_status(self, listing_id: str, status: ListingStatus) -> AnyListing:
        """
        Administrative status change (active, inactive or suspended).

        Raises:
            NotFoundError: if the listing does not exist
            ValidationError: for pending or unknown statuses
        """
        if status not in ADMIN_STATUSES:
            raise ValidationError(
                "status", f"status '{status}' cannot be set, use one of: {', '.join(ADMIN_STATUSES)}"
            )

        with self._write_lock:
            existing = self.repository.get(listing_id)
            if existing is None:
                raise NotFoundError(listing_id)

            updated = existing.model_copy(
                update={"status": status, "updated_at": self._touch(existing)}
            )
            self.repository.put(updated)

        logger.info(f"Listing {listing_id} status {existing.status} -> {status}")
        return updated

    def retry_verification(self, listing_id: str) -> Future:
        """
        Submit a still-pending listing to verification again.

        Raises:
            NotFoundError: if the listing does not exist
            ValidationError: if the listing is no longer pending
        """
        listing = self.repository.get(listing_id)
        if listing is None:
            raise NotFoundError(listing_id)
        if listing.status != "pending":
            raise ValidationError(
                "status", f"listing is '{listing.status}', only pending listings can be verified"
            )
        return self._schedule_verification(listing_id)

    def wait_for_verifications(self, timeout: Optional[float] = None) -> bool:
        """Block until in-flight verifications finish. Returns False on timeout."""
        return self.workflow.wait_all(timeout=timeout)

    def _schedule_verification(self, listing_id: str) -> Future:
        return self.workflow.schedule(listing_id, self.get, self._promote)

    def _promote(self, listing_id: str) -> bool:
        """Mark a pending listing active and verified, if it still exists."""
        with self._write_lock:
            listing = self.repository.get(listing_id)
            if listing is None or listing.status != "pending":
                return False

            self.repository.put(
                listing.model_copy(
                    update={
                        "status": "active",
                        "verified": True,
                        "updated_at": self._touch(listing),
                    }
                )
            )
            return True

    def list_by_owner(self, owner_id: str) -> list[AnyListing]:
        """All listings of one owner, in no particular order."""
        return [listing for listing in self.repository.values() if listing.owner_id == owner_id]

    def featured(
        self,
        category: Optional[Union[ListingCategory, str]] = None,
        limit: Optional[int] = None,
    ) -> list[AnyListing]:
        """Best-rated active and verified listings, newest first on ties."""
        if category is not None:
            category = parse_category(category)
        if limit is None:
            limit = self.config.search.featured_limit
        return self.searcher.featured(self.repository.values(), category=category, limit=limit)

    def search(
        self,
        filters: Optional[Union[SearchFilters, Mapping[str, Any]]] = None,
        **criteria: Any,
    ) -> list[AnyListing]:
        """
        Search the catalog.

        Accepts a SearchFilters, a mapping of filter fields, or keyword criteria.
        Without an explicit limit the store's configured page size applies.

        Raises:
            ValidationError: if the criteria are invalid
        """
        if filters is not None and criteria:
            raise TypeError("pass either filters or keyword criteria, not both")

        default_limit = self.config.search.default_limit
        if isinstance(filters, SearchFilters):
            if "limit" not in filters.model_fields_set:
                filters = filters.model_copy(update={"limit": default_limit})
        else:
            data = dict(filters if filters is not None else criteria)
            data.setdefault("limit", default_limit)
            try:
                filters = SearchFilters.model_validate(data)
            except PydanticValidationError as e:
                raise from_pydantic(e) from e

        return self.searcher.search(self.repository.values(), filters)

    def summary(self) -> CatalogSummary:
        return self.summarizer.summarize(self.repository.values())

    def export_snapshot(self) -> CatalogSnapshot:
        """Dump every listing, in search rank order."""
        listings = rank(self.repository.values())
        snapshot = CatalogSnapshot(
            metadata=SnapshotMetadata(
                snapshot_id=uuid.uuid4().hex[:8],
                exported_at=self.clock(),
                listing_count=len(listings),
            ),
            listings=listings,
        )
        logger.info(f"Exported snapshot {snapshot.metadata.snapshot_id} with {len(listings)} listings")
        return snapshot

    def import_snapshot(
        self,
        snapshot: Union[CatalogSnapshot, Mapping[str, Any]],
        replace: bool = False,
    ) -> int:
        """
        Load listings from a snapshot, keeping their ids, timestamps and status.

        Imported listings are not scheduled for verification.

        Returns:
            Number of listings loaded

        Raises:
            ValidationError: if the snapshot is malformed, repeats an id, or
                an id already exists and replace is False
        """
        if not isinstance(snapshot, CatalogSnapshot):
            try:
                snapshot = CatalogSnapshot.model_validate(snapshot)
            except PydanticValidationError as e:
                raise from_pydantic(e) from e

        seen: set[str] = set()
        for listing in snapshot.listings:
            if listing.id in seen:
                raise ValidationError("listings", f"listing '{listing.id}' appears more than once")
            seen.add(listing.id)

        with self._write_lock:
            if not replace:
                for listing in snapshot.listings:
                    if listing.id in self.repository:
                        raise ValidationError("id", f"listing '{listing.id}' already exists")
            for listing in snapshot.listings:
                self.repository.put(listing)

        logger.info(f"Imported {len(snapshot.listings)} listings from snapshot {snapshot.metadata.snapshot_id}")
        return len(snapshot.listings)

    def close(self) -> None:
        """Cancel verifications that have not started."""
        self.workflow.close()

    def __enter__(self) -> "CatalogStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self.repository)

    def _new_id(self) -> str:
        """Time component plus randomness; regenerated on the off chance of a clash."""
        while True:
            listing_id = f"{self.config.id_prefix}_{time.time_ns()}_{uuid.uuid4().hex[:9]}"
            if listing_id not in self.repository:
                return listing_id

    def _touch(self, listing: AnyListing) -> datetime:
        """New updated_at that never goes backwards."""
        return max(self.clock(), listing.updated_at)

"""Catalog components: construction, storage, verification and search."""

from .builder import build_listing, types_for, validate_category_type
from .repository import InMemoryListingRepository, ListingRepository
from .search import ListingSearch
from .store import CatalogStore
from .summary import CatalogSummarizer
from .verification import VerificationOutcome, VerificationWorkflow, always_verify

__all__ = [
    "build_listing",
    "types_for",
    "validate_category_type",
    "InMemoryListingRepository",
    "ListingRepository",
    "ListingSearch",
    "CatalogStore",
    "CatalogSummarizer",
    "VerificationOutcome",
    "VerificationWorkflow",
    "always_verify",
]

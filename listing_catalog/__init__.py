"""
Unified listing catalog for places, people and experiences.
"""

from .catalog import CatalogStore, VerificationWorkflow, build_listing
from .errors import CatalogError, NotFoundError, ValidationError
from .models import ListingCategory, SearchFilters

__all__ = [
    "CatalogStore",
    "VerificationWorkflow",
    "build_listing",
    "CatalogError",
    "NotFoundError",
    "ValidationError",
    "ListingCategory",
    "SearchFilters",
]

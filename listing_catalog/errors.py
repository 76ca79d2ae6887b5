"""
Error types raised by the listing catalog.
"""
from typing import Optional

from pydantic import ValidationError as PydanticValidationError


class CatalogError(Exception):
    """Base class for catalog errors."""


class ValidationError(CatalogError, ValueError):
    """A listing or filter payload failed validation."""

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}" if field else message)


class NotFoundError(CatalogError, LookupError):
    """An operation referenced a listing id that does not exist."""

    def __init__(self, listing_id: str):
        self.listing_id = listing_id
        super().__init__(f"listing '{listing_id}' not found")


def from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Translate a pydantic error into a ValidationError naming the first bad field."""
    errors = exc.errors()
    if not errors:
        return ValidationError(None, str(exc))

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if first.get("type") == "missing":
        message = "field required"
    return ValidationError(field, message)

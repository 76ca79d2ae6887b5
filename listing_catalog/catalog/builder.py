"""
Listing construction - turns a raw payload into a validated listing variant.
"""
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError, from_pydantic
from ..models.listing import (
    CATEGORY_TYPES,
    LISTING_MODELS,
    ExperienceListing,
    ListingCategory,
    PeopleListing,
    PlaceListing,
)


AnyListing = Union[PlaceListing, PeopleListing, ExperienceListing]


def parse_category(value: Any) -> ListingCategory:
    """Coerce a category value, raising ValidationError for unknown categories."""
    if isinstance(value, ListingCategory):
        return value
    if value is None:
        raise ValidationError("category", "field required")
    try:
        return ListingCategory(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(c.value for c in ListingCategory)
        raise ValidationError("category", f"category '{value}' is not one of: {valid}") from None


def types_for(category: Union[ListingCategory, str]) -> list[str]:
    """All valid type values for a category."""
    enum_cls = CATEGORY_TYPES[parse_category(category)]
    return [member.value for member in enum_cls]


def validate_category_type(category: Any, type_: Any) -> Enum:
    """
    Check that a type belongs to the category's sub-classification.

    Returns:
        The type as a member of the category's type enum
    """
    category = parse_category(category)
    if type_ is None:
        raise ValidationError("type", "field required")

    enum_cls = CATEGORY_TYPES[category]
    raw = type_.value if isinstance(type_, Enum) else str(type_)
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError(
            "type", f"type '{raw}' is not valid for category '{category.value}'"
        ) from None


def build_listing(data: Mapping[str, Any]) -> AnyListing:
    """
    Build a listing variant from a complete payload.

    Pure function: no ids or timestamps are generated here, the payload must
    already carry them.

    Raises:
        ValidationError: naming the first offending field
    """
    category = parse_category(data.get("category"))
    type_ = validate_category_type(category, data.get("type"))

    payload = dict(data)
    payload["category"] = category.value
    payload["type"] = type_

    model = LISTING_MODELS[category]
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise from_pydantic(e) from e

"""
Listing payload validation.

`validate_listing` is the single entry point for turning a raw request
body (or form payload) into one of the post-type variants.
"""
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from app.errors import ListingValidationError, format_validation_errors
from app.models.listing import PostType
from app.schemas.listing import ListingCreate, ListingBase, POST_TYPE_TAGS

_listing_adapter = TypeAdapter(ListingCreate)

POST_TYPE_MESSAGE = "Input should be 'job', 'auction', 'tender' or 'announcement'"


def validate_listing(raw: Any, post_type: Optional[Union[PostType, str]] = None) -> ListingBase:
    """
    Validate a listing payload against the schema of its post type.

    Args:
        raw: Request body / form payload (camelCase or snake_case keys)
        post_type: Overrides the payload's own `postType` when given

    Returns:
        The validated variant (JobListingCreate, AuctionListingCreate, ...)

    Raises:
        ListingValidationError: with every (field, message) pair; nothing is
            partially applied.
    """
    if not isinstance(raw, dict):
        raise ListingValidationError([("body", "Expected a JSON object")])

    data = dict(raw)
    if post_type is not None:
        data.pop("post_type", None)
        data["postType"] = post_type.value if isinstance(post_type, PostType) else post_type
    elif "postType" not in data and "post_type" in data:
        data["postType"] = data.pop("post_type")

    if data.get("postType") not in POST_TYPE_TAGS:
        raise ListingValidationError([("postType", POST_TYPE_MESSAGE)])

    try:
        return _listing_adapter.validate_python(data)
    except ValidationError as exc:
        raise ListingValidationError(format_validation_errors(exc.errors(), POST_TYPE_TAGS)) from exc

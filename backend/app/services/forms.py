"""
Create/edit form logic for listings.

Server-side copy of the rules the post forms apply while the user types:
which field groups are shown for a post type / owner type selection, how
a stored listing pre-fills the edit form, and how form values become the
flat payload POSTed to the API. Everything here is a pure function of its
inputs.
"""
from datetime import datetime, time
from typing import Any, Optional

from app.errors import ListingValidationError
from app.models.listing import Listing, OwnerType, PostType
from app.schemas.listing import LISTING_VARIANTS

COMMON_FIELDS = [
    "title",
    "location",
    "description",
    "category",
    "requirements",
    "deadline",
]

OWNER_FIELDS = {
    OwnerType.COMPANY: ["companyId"],
    OwnerType.INDIVIDUAL: ["individualName", "individualContact"],
}

# Fields the user must fill for each post type (owner fields come on top)
REQUIRED_FIELDS = {
    PostType.JOB: ["title", "location", "description", "category", "requirements", "type", "experienceLevel"],
    PostType.AUCTION: ["title", "location", "description", "category"],
    PostType.TENDER: ["title", "location", "description", "category", "requirements"],
    PostType.ANNOUNCEMENT: ["title", "location", "description", "category"],
}

OWNER_REQUIRED = {
    OwnerType.COMPANY: ["companyId"],
    OwnerType.INDIVIDUAL: ["individualName"],
}

# Textareas that hold one entry per line in the form and a list in storage
MULTILINE_LIST_FIELDS = {"auctionItems"}


def variant_field_names(post_type: PostType) -> list[str]:
    """API names of the fields that belong to one post type only."""
    variant = LISTING_VARIANTS[PostType(post_type)]
    names = []
    for field_name in variant.variant_fields:
        field = variant.model_fields[field_name]
        names.append(field.alias or field_name)
    return names


def visible_fields(post_type: PostType, owner_type: OwnerType) -> list[str]:
    """Fields rendered for the current selection, in form order."""
    post_type = PostType(post_type)
    owner_type = OwnerType(owner_type)
    return COMMON_FIELDS + OWNER_FIELDS[owner_type] + variant_field_names(post_type)


def required_fields(post_type: PostType, owner_type: OwnerType) -> list[str]:
    return REQUIRED_FIELDS[PostType(post_type)] + OWNER_REQUIRED[OwnerType(owner_type)]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _deadline_value(deadline: Optional[datetime]) -> str:
    """Date-only for midnight deadlines (date inputs), full timestamp otherwise."""
    if deadline is None:
        return ""
    if deadline.time() == time.min:
        return deadline.date().isoformat()
    return deadline.isoformat()


def form_values_from_listing(listing: Listing) -> dict[str, Any]:
    """
    Values that pre-fill the edit form for a stored listing.

    List fields are joined back into one line per entry, so
    "A\\nB\\nC" -> ["A", "B", "C"] -> "A\\nB\\nC".
    """
    owner_type = listing.owner_type
    values: dict[str, Any] = {
        "postType": listing.post_type.value,
        "ownerType": owner_type.value,
        "title": listing.title or "",
        "location": listing.location or "",
        "description": listing.description or "",
        "category": listing.category or "",
        "requirements": listing.requirements or "",
        "deadline": _deadline_value(listing.deadline),
    }

    if owner_type == OwnerType.COMPANY:
        values["companyId"] = listing.company_id
    else:
        values["individualName"] = listing.individual_name or ""
        values["individualContact"] = listing.individual_contact or ""

    stored = listing.additional_data or {}
    for name in variant_field_names(listing.post_type):
        value = stored.get(name)
        if name in MULTILINE_LIST_FIELDS:
            values[name] = "\n".join(value) if isinstance(value, list) else (value or "")
        else:
            values[name] = "" if value is None else value
    return values


def build_listing_payload(values: dict[str, Any]) -> dict[str, Any]:
    """
    Build the flat API payload from raw form values.

    Only fields visible for the selected post type and owner type are
    kept, blank strings become None, and `ownerType` is always set
    (inferred from `companyId` when the form did not send one).

    Raises:
        ListingValidationError: if `postType` or `ownerType` is not a known value
    """
    try:
        post_type = PostType(values.get("postType") or PostType.JOB.value)
    except ValueError:
        raise ListingValidationError([("postType", f"Unknown post type: {values.get('postType')}")])

    owner_value: Optional[str] = values.get("ownerType")
    if owner_value:
        try:
            owner_type = OwnerType(owner_value)
        except ValueError:
            raise ListingValidationError([("ownerType", f"Unknown owner type: {owner_value}")])
    else:
        owner_type = OwnerType.INDIVIDUAL if _blank(values.get("companyId")) else OwnerType.COMPANY

    payload: dict[str, Any] = {
        "postType": post_type.value,
        "ownerType": owner_type.value,
    }
    for name in visible_fields(post_type, owner_type):
        value = values.get(name)
        payload[name] = None if _blank(value) else value
    return payload

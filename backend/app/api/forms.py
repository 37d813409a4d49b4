"""Listing form helpers: which fields to show, and the payload a form submits."""
from typing import Any

from fastapi import APIRouter, Body, Query

from app.models.listing import OwnerType, PostType
from app.schemas.browse import ListingFieldsResponse, ListingPayloadResponse
from app.services.forms import build_listing_payload, required_fields, visible_fields
from app.services.validation import validate_listing

router = APIRouter()


@router.get("/listing-fields", response_model=ListingFieldsResponse)
async def listing_fields(
    post_type: PostType = Query(PostType.JOB, alias="postType"),
    owner_type: OwnerType = Query(OwnerType.COMPANY, alias="ownerType"),
):
    return ListingFieldsResponse(
        post_type=post_type,
        owner_type=owner_type,
        fields=visible_fields(post_type, owner_type),
        required=required_fields(post_type, owner_type),
    )


@router.post("/listing-payload", response_model=ListingPayloadResponse)
async def listing_payload(values: dict[str, Any] = Body(...)):
    """
    Build and validate the payload for raw form values.

    Returns:
        200: The flat payload, ready for POST /api/jobs
        400: Unknown post/owner type, or the payload fails validation
    """
    payload = build_listing_payload(values)
    validate_listing(payload)
    return ListingPayloadResponse(
        payload=payload,
        post_type=payload["postType"],
        owner_type=payload["ownerType"],
    )

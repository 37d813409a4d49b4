"""Browse page and form helper schemas."""
from typing import Optional

from app.models.listing import OwnerType, PostType
from app.schemas.base import CamelModel
from app.schemas.listing import ListingResponse


class ListingPage(CamelModel):
    """One page of an already filtered, already sorted result set."""
    items: list[ListingResponse]
    page: int
    page_size: int
    total: int
    total_pages: int


class ListingFieldsResponse(CamelModel):
    """Form fields to render for a post type / owner type selection."""
    post_type: PostType
    owner_type: OwnerType
    fields: list[str]
    required: list[str]


class ListingPayloadResponse(CamelModel):
    """Flat payload built from form values, ready for POST /jobs."""
    payload: dict
    post_type: PostType
    owner_type: Optional[OwnerType] = None

"""
Browse page endpoint.

Filtering and sorting happen on the server; the page is an arithmetic
slice of the filtered result.
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.listing import PostType
from app.schemas.browse import ListingPage
from app.schemas.listing import ListingResponse
from app.services.listings import search_listings
from app.services.pagination import paginate, total_pages

router = APIRouter()


@router.get("/opportunities", response_model=ListingPage)
async def browse_opportunities(
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    category: Optional[str] = None,
    job_type: Optional[str] = Query(None, alias="jobType"),
    experience_level: Optional[str] = Query(None, alias="experienceLevel"),
    post_type: Optional[PostType] = Query(None, alias="postType"),
    sort: Literal["newest", "oldest"] = "newest",
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """One page of visible listings; a page past the end has no items."""
    listings = await search_listings(
        db,
        keyword=keyword,
        location=location,
        category=category,
        job_type=job_type,
        experience_level=experience_level,
        post_type=post_type,
    )
    if sort == "oldest":
        listings.reverse()

    page_size = page_size or settings.browse_page_size
    return ListingPage(
        items=[ListingResponse.model_validate(listing) for listing in paginate(listings, page, page_size)],
        page=page,
        page_size=page_size,
        total=len(listings),
        total_pages=total_pages(len(listings), page_size),
    )

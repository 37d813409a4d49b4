"""
Jobs API endpoints.

"Jobs" covers all four post types (job, auction, tender, announcement).
Public reads only ever see visible listings; writes go through the
post-type schema in app.services.validation.
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.api.auth import require_employer, require_job_seeker
from app.errors import CompanyNotFoundError, ConflictError, ListingNotFoundError
from app.models.listing import Listing, OwnerType, PostType
from app.models.user import User
from app.schemas.application import ApplicationResponse, ApplyRequest, InterestRequest, ProposalRequest
from app.schemas.listing import ListingResponse
from app.services import applications as application_service
from app.services.companies import get_company
from app.services.listings import create_listing, get_featured_listings, get_listing, search_listings
from app.services.validation import validate_listing

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_visible_listing(listing_id: int, db: AsyncSession, label: str = "Job") -> Listing:
    """Fetch a listing for a public endpoint; hidden or deleted listings are 404."""
    try:
        listing = await get_listing(db, listing_id)
    except ListingNotFoundError:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    if not listing.is_visible():
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return listing


# ============================================================
# READ
# ============================================================

@router.get("", response_model=List[ListingResponse])
async def list_jobs(
    keyword: Optional[str] = Query(None, description="Substring of title, description or requirements"),
    location: Optional[str] = Query(None, description="Substring of location"),
    category: Optional[str] = Query(None, description="Exact category name"),
    job_type: Optional[str] = Query(None, alias="jobType"),
    experience_level: Optional[str] = Query(None, alias="experienceLevel"),
    post_type: Optional[PostType] = Query(None, alias="postType"),
    db: AsyncSession = Depends(get_db)
):
    """Search visible listings, newest first."""
    return await search_listings(
        db,
        keyword=keyword,
        location=location,
        category=category,
        job_type=job_type,
        experience_level=experience_level,
        post_type=post_type,
    )


@router.get("/featured", response_model=List[ListingResponse])
async def featured_jobs(db: AsyncSession = Depends(get_db)):
    return await get_featured_listings(db)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_job(listing_id: int, db: AsyncSession = Depends(get_db)):
    return await get_visible_listing(listing_id, db)


# ============================================================
# WRITE
# ============================================================

@router.post("", response_model=ListingResponse, status_code=201)
async def create_job(
    payload: dict[str, Any] = Body(...),
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Post a listing for the employer's own company.

    The listing starts as `pending` whatever the body says.

    Returns:
        201: Created listing
        400: Body fails the post-type schema
        403: Company missing or owned by someone else
    """
    data = validate_listing(payload)

    company = None
    if data.owner_type == OwnerType.COMPANY:
        try:
            company = await get_company(db, data.company_id)
        except CompanyNotFoundError:
            company = None
    if company is None or company.user_id != current_user.id:
        logger.warning(f"{current_user.email} tried to post for company {data.company_id}")
        raise HTTPException(status_code=403, detail="You can only post jobs for your own company")

    return await create_listing(db, data, submitted_by=current_user)


@router.post("/{listing_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    listing_id: int,
    request: Optional[ApplyRequest] = None,
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    """
    Returns:
        201: Application created
        400: Already applied
        404: Listing not found
    """
    listing = await get_visible_listing(listing_id, db)
    try:
        return await application_service.apply_to_listing(db, listing, current_user, request or ApplyRequest())
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{listing_id}/interest", response_model=ApplicationResponse, status_code=201)
async def register_interest(
    listing_id: int,
    request: Optional[InterestRequest] = None,
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    """Register interest in an announcement or auction."""
    listing = await get_visible_listing(listing_id, db, label="Opportunity")
    return await application_service.register_interest(db, listing, current_user, request or InterestRequest())


@router.post("/{listing_id}/proposal", response_model=ApplicationResponse, status_code=201)
async def submit_proposal(
    listing_id: int,
    request: ProposalRequest,
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    """
    Returns:
        201: Proposal stored
        400: Listing is not a tender
        404: Tender not found
    """
    listing = await get_visible_listing(listing_id, db, label="Tender")
    try:
        return await application_service.submit_proposal(db, listing, current_user, request)
    except application_service.NotATenderError as e:
        raise HTTPException(status_code=400, detail=str(e))

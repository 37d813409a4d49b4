"""
Employer dashboard endpoints.

Everything here is scoped to the company owned by the current employer.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import require_employer
from app.database import get_db
from app.errors import ApplicationNotFoundError
from app.models.listing import Listing
from app.models.user import User
from app.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from app.schemas.company import CompanyResponse
from app.schemas.listing import ListingResponse
from app.services import applications as application_service
from app.services.companies import get_company_by_owner
from app.services.listings import get_listings_by_company

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/company", response_model=CompanyResponse)
async def my_company(
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    company = await get_company_by_owner(db, current_user.id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/jobs", response_model=List[ListingResponse])
async def my_jobs(
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """All of the company's listings in any moderation state; empty without a company."""
    company = await get_company_by_owner(db, current_user.id)
    if company is None:
        return []
    return await get_listings_by_company(db, company.id)


@router.get("/applications", response_model=List[ApplicationResponse])
async def my_applications(
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    company = await get_company_by_owner(db, current_user.id)
    if company is None:
        return []
    return await application_service.list_applications_by_company(db, company.id)


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    request: ApplicationStatusUpdate,
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Move an application to any status.

    Returns:
        200: Updated application
        404: Unknown application, or one for another company's listing
    """
    try:
        application = await application_service.get_application(db, application_id)
    except ApplicationNotFoundError:
        raise HTTPException(status_code=404, detail="Application not found")

    company = await get_company_by_owner(db, current_user.id)
    listing = await db.get(Listing, application.job_id)
    if company is None or listing is None or listing.company_id != company.id:
        logger.warning(f"{current_user.email} tried to update application {application_id} of another company")
        raise HTTPException(status_code=404, detail="Application not found")

    return await application_service.update_application_status(db, application, request.status)

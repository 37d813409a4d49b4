"""Job seeker dashboard endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import require_job_seeker
from app.database import get_db
from app.models.user import User
from app.schemas.application import ApplicationResponse
from app.schemas.listing import ListingResponse
from app.schemas.profile import JobSeekerProfileResponse, JobSeekerProfileUpsert
from app.services.applications import list_applications_by_user
from app.services.listings import get_recommended_listings
from app.services.profile import get_profile, upsert_profile

router = APIRouter()


@router.get("/profile", response_model=JobSeekerProfileResponse)
async def my_profile(
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    profile = await get_profile(db, current_user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/profile", response_model=JobSeekerProfileResponse, status_code=201)
async def save_profile(
    request: JobSeekerProfileUpsert,
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    return await upsert_profile(db, current_user.id, request)


@router.get("/applications", response_model=List[ApplicationResponse])
async def my_applications(
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    return await list_applications_by_user(db, current_user.id)


@router.get("/recommended-jobs", response_model=List[ListingResponse])
async def recommended_jobs(
    current_user: User = Depends(require_job_seeker),
    db: AsyncSession = Depends(get_db)
):
    """Listings whose titles share a word with the profile title (featured listings otherwise)."""
    return await get_recommended_listings(db, current_user.id)

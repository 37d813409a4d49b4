"""Job seeker profile business logic."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_seeker_profile import JobSeekerProfile
from app.schemas.profile import JobSeekerProfileUpsert

logger = logging.getLogger(__name__)


async def get_profile(db: AsyncSession, user_id: int) -> Optional[JobSeekerProfile]:
    result = await db.execute(select(JobSeekerProfile).where(JobSeekerProfile.user_id == user_id))
    return result.scalar_one_or_none()


async def upsert_profile(db: AsyncSession, user_id: int, data: JobSeekerProfileUpsert) -> JobSeekerProfile:
    """Create the user's profile, or update the fields present in the body."""
    profile = await get_profile(db, user_id)
    if profile is None:
        profile = JobSeekerProfile(user_id=user_id, skills=[])
        db.add(profile)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)

    await db.commit()
    await db.refresh(profile)
    logger.info(f"Saved job seeker profile {profile.id} for user {user_id}")
    return profile

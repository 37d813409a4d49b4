"""Job seeker profile schemas."""
from typing import Optional

from app.schemas.base import CamelModel


class JobSeekerProfileUpsert(CamelModel):
    """Request body for creating/updating a job seeker profile (partial)."""
    title: Optional[str] = None
    skills: Optional[list[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter_url: Optional[str] = None


class JobSeekerProfileResponse(JobSeekerProfileUpsert):
    id: int
    user_id: int

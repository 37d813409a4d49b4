"""Application, interest and proposal schemas."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import Field

from app.models.application import ApplicationStatus
from app.schemas.base import CamelModel


class ApplyRequest(CamelModel):
    """Request body for applying to a job."""
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None


class InterestRequest(CamelModel):
    """Interest registration for announcements and auctions."""
    message: Optional[str] = None
    contact_preference: Literal["email", "phone"] = "email"
    notify_updates: bool = True
    documents_url: Optional[str] = None


class ProposalRequest(CamelModel):
    """Bid submitted against a tender."""
    proposal_title: str = Field(min_length=1)
    proposal_description: str = Field(min_length=1)
    cover_letter: Optional[str] = None
    documents_url: Optional[str] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationResponse(CamelModel):
    id: int
    job_id: int
    user_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime

"""
Applications, interest registrations and tender proposals.

All three are stored as `Application` rows; interest and proposals use
the cover letter to carry their message.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ApplicationNotFoundError, ConflictError
from app.models.application import Application, ApplicationStatus
from app.models.listing import Listing, PostType
from app.models.user import User
from app.schemas.application import ApplyRequest, InterestRequest, ProposalRequest

logger = logging.getLogger(__name__)


class NotATenderError(ValueError):
    """Raised when a proposal targets a listing that is not a tender."""
    pass


async def get_application_for(db: AsyncSession, user_id: int, listing_id: int) -> Optional[Application]:
    result = await db.execute(
        select(Application).where(
            and_(Application.user_id == user_id, Application.job_id == listing_id)
        )
    )
    return result.scalars().first()


async def _store(
    db: AsyncSession,
    listing: Listing,
    user: User,
    cover_letter: Optional[str],
    resume_url: Optional[str],
) -> Application:
    application = Application(
        job_id=listing.id,
        user_id=user.id,
        cover_letter=cover_letter,
        resume_url=resume_url,
        status=ApplicationStatus.APPLIED,
    )
    db.add(application)
    await db.commit()
    await db.refresh(application)
    return application


async def apply_to_listing(db: AsyncSession, listing: Listing, user: User, data: ApplyRequest) -> Application:
    """
    Apply to a listing.

    Raises:
        ConflictError: if the user already applied to it
    """
    if await get_application_for(db, user.id, listing.id):
        logger.warning(f"Duplicate application from {user.email} to listing {listing.id}")
        raise ConflictError("You have already applied for this job")

    application = await _store(db, listing, user, data.cover_letter, data.resume_url)
    logger.info(f"{user.email} applied to listing {listing.id} (application {application.id})")
    return application


async def register_interest(db: AsyncSession, listing: Listing, user: User, data: InterestRequest) -> Application:
    """Register interest in an announcement or auction."""
    message = data.message or f"Interest registered for {listing.post_type.value}"
    application = await _store(db, listing, user, message, data.documents_url)
    logger.info(
        f"{user.email} registered interest in listing {listing.id} "
        f"(contact={data.contact_preference}, notify={data.notify_updates})"
    )
    return application


def proposal_text(data: ProposalRequest) -> str:
    return f"{data.proposal_title}\n\n{data.proposal_description}\n\n{data.cover_letter or ''}"


async def submit_proposal(db: AsyncSession, listing: Listing, user: User, data: ProposalRequest) -> Application:
    """
    Submit a bid against a tender.

    Raises:
        NotATenderError: if the listing is not a tender
    """
    if listing.post_type != PostType.TENDER:
        raise NotATenderError("This endpoint is only for tender proposals")

    application = await _store(db, listing, user, proposal_text(data), data.documents_url)
    logger.info(f"{user.email} submitted a proposal for tender {listing.id}")
    return application


async def list_applications_by_user(db: AsyncSession, user_id: int) -> list[Application]:
    result = await db.execute(
        select(Application)
        .where(Application.user_id == user_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
    )
    return list(result.scalars().all())


async def list_applications_by_company(db: AsyncSession, company_id: int) -> list[Application]:
    """Applications to any listing owned by the company."""
    result = await db.execute(
        select(Application)
        .join(Listing, Application.job_id == Listing.id)
        .where(Listing.company_id == company_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
    )
    return list(result.scalars().all())


async def list_recent_applications(db: AsyncSession, limit: int = 5) -> list[Application]:
    result = await db.execute(
        select(Application).order_by(Application.applied_at.desc(), Application.id.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def get_application(db: AsyncSession, application_id: int) -> Application:
    application = await db.get(Application, application_id)
    if application is None:
        raise ApplicationNotFoundError(application_id)
    return application


async def update_application_status(
    db: AsyncSession, application: Application, status: ApplicationStatus
) -> Application:
    """Set any status; there is no enforced transition order."""
    previous = application.status
    application.status = status
    application.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(application)
    logger.info(f"Application {application.id}: {previous.value} -> {status.value}")
    return application

"""
Listing storage and query logic.

All listing reads and writes go through this module. "Visible" means
`is_active` and not soft-deleted; only visible listings are returned by
the public search, featured and recommendation queries.
"""
import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import CompanyNotFoundError, ListingNotFoundError
from app.models.company import Company
from app.models.job_seeker_profile import JobSeekerProfile
from app.models.listing import Listing, ListingStatus, PostType
from app.models.user import User
from app.schemas.listing import AdminListingUpdate, ListingBase, ListingResponse
from app.services import site_content

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"
DELETED_NOTE = "Marked as deleted by admin"


def visible_clause():
    """SQL predicate for listings shown to the public."""
    return and_(Listing.is_active.is_(True), Listing.deleted_at.is_(None))


def newest_first(query):
    return query.order_by(Listing.created_at.desc(), Listing.id.desc())


async def search_listings(
    db: AsyncSession,
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    category: Optional[str] = None,
    job_type: Optional[str] = None,
    experience_level: Optional[str] = None,
    post_type: Optional[PostType] = None,
) -> list[Listing]:
    """
    Search visible listings.

    - keyword: substring of title, description or requirements (OR)
    - location: substring of location
    - category, job_type, experience_level, post_type: exact match

    All given predicates are AND-combined. No predicate returns every
    visible listing. Results are newest first.
    """
    filters = [visible_clause()]

    if keyword:
        filters.append(
            or_(
                Listing.title.icontains(keyword, autoescape=True),
                Listing.description.icontains(keyword, autoescape=True),
                Listing.requirements.icontains(keyword, autoescape=True),
            )
        )
    if location:
        filters.append(Listing.location.icontains(location, autoescape=True))
    if category:
        filters.append(Listing.category == category)
    if job_type:
        filters.append(Listing.additional_data["type"].as_string() == job_type)
    if experience_level:
        filters.append(Listing.additional_data["experienceLevel"].as_string() == experience_level)
    if post_type:
        filters.append(Listing.post_type == PostType(post_type))

    result = await db.execute(newest_first(select(Listing).where(and_(*filters))))
    listings = list(result.scalars().all())

    logger.info(
        f"Listing search returned {len(listings)} rows "
        f"(keyword={keyword}, location={location}, category={category}, "
        f"job_type={job_type}, experience_level={experience_level}, post_type={post_type})"
    )
    return listings


async def get_featured_listings(db: AsyncSession, limit: Optional[int] = None) -> list[Listing]:
    """
    Featured listings for the homepage.

    Uses the admin-configured `featuredJobs` ids (in that order, hidden or
    unknown ids skipped) when the list is non-empty. Otherwise flagged
    listings (`is_featured`) come first and the rest of the slots are
    filled with the most recent visible listings.
    """
    limit = limit or settings.featured_listings_limit

    sections = await site_content.get_featured_sections(db)
    if sections.featured_jobs:
        result = await db.execute(
            select(Listing).where(and_(visible_clause(), Listing.id.in_(sections.featured_jobs)))
        )
        by_id = {listing.id: listing for listing in result.scalars().all()}
        return [by_id[listing_id] for listing_id in sections.featured_jobs if listing_id in by_id][:limit]

    result = await db.execute(
        select(Listing)
        .where(visible_clause())
        .order_by(Listing.is_featured.desc(), Listing.created_at.desc(), Listing.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_recommended_listings(db: AsyncSession, user_id: int) -> list[Listing]:
    """
    Recommend listings whose title shares a word with the user's profile title.

    Falls back to featured listings when the user has no profile or no title.
    """
    result = await db.execute(
        select(JobSeekerProfile).where(JobSeekerProfile.user_id == user_id)
    )
    profile = result.scalar_one_or_none()

    keywords = profile.title.split() if profile and profile.title else []
    if not keywords:
        return await get_featured_listings(db)

    result = await db.execute(
        newest_first(
            select(Listing).where(
                and_(
                    visible_clause(),
                    or_(*[Listing.title.icontains(keyword, autoescape=True) for keyword in keywords]),
                )
            )
        ).limit(settings.recommended_listings_limit)
    )
    return list(result.scalars().all())


async def get_listing(db: AsyncSession, listing_id: int, include_deleted: bool = False) -> Listing:
    """
    Fetch a listing by id.

    Raises:
        ListingNotFoundError: if missing (or soft-deleted, unless include_deleted)
    """
    listing = await db.get(Listing, listing_id)
    if listing is None or (listing.deleted_at is not None and not include_deleted):
        raise ListingNotFoundError(listing_id)
    return listing


async def get_listings_by_company(db: AsyncSession, company_id: int) -> list[Listing]:
    """All non-deleted listings of a company, any status, newest first."""
    result = await db.execute(
        newest_first(
            select(Listing).where(
                and_(Listing.company_id == company_id, Listing.deleted_at.is_(None))
            )
        )
    )
    return list(result.scalars().all())


async def list_listings_for_admin(
    db: AsyncSession,
    status: Optional[ListingStatus] = None,
    post_type: Optional[PostType] = None,
    include_deleted: bool = False,
    limit: Optional[int] = None,
) -> list[ListingResponse]:
    """Every listing regardless of visibility, with fresh company names."""
    query = select(Listing, Company.name).outerjoin(Company, Listing.company_id == Company.id)

    filters = []
    if status:
        filters.append(Listing.status == status)
    if post_type:
        filters.append(Listing.post_type == post_type)
    if not include_deleted:
        filters.append(Listing.deleted_at.is_(None))
    if filters:
        query = query.where(and_(*filters))

    query = newest_first(query)
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    return [with_company_name(listing, name) for listing, name in result.all()]


def with_company_name(listing: Listing, company_name: Optional[str]) -> ListingResponse:
    """Response view of a listing with the owning company's current name."""
    response = ListingResponse.model_validate(listing)
    if listing.company_id is not None:
        response.company_name = company_name or UNKNOWN_COMPANY
    return response


async def _company_name_for(db: AsyncSession, company_id: Optional[int]) -> Optional[str]:
    if company_id is None:
        return None
    company = await db.get(Company, company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company.name


async def create_listing(db: AsyncSession, data: ListingBase, submitted_by: User) -> Listing:
    """
    Persist a validated listing.

    The listing always starts as `pending` whatever the payload said.
    The company name is denormalized from a fresh lookup; admin
    submissions are stamped with an audit note.

    Raises:
        CompanyNotFoundError: if the payload names a company that does not exist
    """
    company_name = await _company_name_for(db, data.company_id)

    listing = Listing(
        **data.common_data(),
        company_name=company_name,
        additional_data=data.variant_data(),
        status=ListingStatus.PENDING,
        is_active=True,
        is_featured=False,
    )
    if submitted_by.is_admin():
        listing.admin_notes = f"Created by admin {submitted_by.email}"

    db.add(listing)
    await db.commit()
    await db.refresh(listing)

    logger.info(f"Created {listing.post_type.value} listing {listing.id}: {listing.title} (by {submitted_by.email})")
    return listing


async def replace_listing(db: AsyncSession, listing_id: int, data: ListingBase) -> Listing:
    """
    Replace every content field of a listing (full replace by id).

    Moderation fields (status, flags, notes) and timestamps are kept.
    Changing the post type re-labels the row and replaces its variant data.
    """
    listing = await get_listing(db, listing_id)
    company_name = await _company_name_for(db, data.company_id)

    for field, value in data.common_data().items():
        setattr(listing, field, value)
    listing.company_name = company_name
    listing.additional_data = data.variant_data()
    listing.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(listing)

    logger.info(f"Replaced content of listing {listing.id} ({listing.post_type.value})")
    return listing


async def moderate_listing(db: AsyncSession, listing_id: int, update: AdminListingUpdate) -> Listing:
    """
    Apply admin moderation changes.

    `is_active` also moves the status: true -> approved, false -> rejected.
    An explicit `status` in the same update wins over that mapping.
    """
    listing = await get_listing(db, listing_id)

    if update.is_active is not None:
        listing.is_active = update.is_active
        listing.status = ListingStatus.APPROVED if update.is_active else ListingStatus.REJECTED
    if update.status is not None:
        listing.status = update.status
    if update.is_featured is not None:
        listing.is_featured = update.is_featured
    if update.admin_notes:
        listing.admin_notes = update.admin_notes
    listing.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(listing)

    logger.info(
        f"Moderated listing {listing.id}: status={listing.status.value}, "
        f"active={listing.is_active}, featured={listing.is_featured}"
    )
    return listing


async def soft_delete_listing(db: AsyncSession, listing_id: int) -> Listing:
    """
    Remove a listing from every public view without deleting the row.

    Sets status to rejected, stamps `deleted_at` and appends an audit note.
    Content fields are left untouched.
    """
    listing = await get_listing(db, listing_id)

    listing.status = ListingStatus.REJECTED
    listing.deleted_at = datetime.utcnow()
    listing.admin_notes = f"{listing.admin_notes} | {DELETED_NOTE}" if listing.admin_notes else DELETED_NOTE

    await db.commit()
    await db.refresh(listing)

    logger.info(f"Soft-deleted listing {listing.id}")
    return listing


async def count_visible_by_category(db: AsyncSession, names: Sequence[str]) -> dict[str, int]:
    """Number of visible listings per category name (computed, never stored)."""
    if not names:
        return {}
    result = await db.execute(
        select(Listing.category, func.count(Listing.id))
        .where(and_(visible_clause(), Listing.category.in_(list(names))))
        .group_by(Listing.category)
    )
    return {category: count for category, count in result.all()}

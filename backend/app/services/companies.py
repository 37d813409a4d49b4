"""Company profiles: lookups, the employer upsert and the featured strip."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import CompanyNotFoundError
from app.models.company import Company
from app.schemas.company import CompanyUpsert, CompanyWithListingsResponse, CompanyResponse
from app.schemas.listing import ListingResponse
from app.services import site_content
from app.services.listings import get_listings_by_company

logger = logging.getLogger(__name__)


async def get_company(db: AsyncSession, company_id: int) -> Company:
    company = await db.get(Company, company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return company


async def get_company_with_listings(db: AsyncSession, company_id: int) -> CompanyWithListingsResponse:
    """A company together with its non-deleted listings, newest first."""
    company = await get_company(db, company_id)
    listings = await get_listings_by_company(db, company.id)
    response = CompanyWithListingsResponse.model_validate(company)
    response.jobs = [ListingResponse.model_validate(listing) for listing in listings]
    return response


async def get_company_by_owner(db: AsyncSession, user_id: int) -> Optional[Company]:
    # Oldest row wins if an older database still holds duplicates
    result = await db.execute(
        select(Company).where(Company.user_id == user_id).order_by(Company.id).limit(1)
    )
    return result.scalar_one_or_none()


async def upsert_company_for_owner(db: AsyncSession, user_id: int, data: CompanyUpsert) -> tuple[Company, bool]:
    """
    Create the employer's company, or update it when one already exists.

    Returns:
        (company, created)
    """
    company = await get_company_by_owner(db, user_id)
    created = company is None
    if created:
        company = Company(user_id=user_id)
        db.add(company)

    for field, value in data.model_dump().items():
        setattr(company, field, value)

    await db.commit()
    await db.refresh(company)

    logger.info(f"{'Created' if created else 'Updated'} company {company.id} ({company.name}) for user {user_id}")
    return company, created


async def list_companies(db: AsyncSession) -> list[Company]:
    result = await db.execute(select(Company).order_by(Company.name, Company.id))
    return list(result.scalars().all())


async def get_featured_companies(db: AsyncSession) -> list[CompanyResponse]:
    """
    Companies for the homepage strip.

    Uses the admin-configured `featuredCompanies` ids (in that order,
    unknown ids skipped) when the list is non-empty, otherwise the first
    companies by id.
    """
    sections = await site_content.get_featured_sections(db)
    company_ids = sections.featured_companies

    if company_ids:
        result = await db.execute(select(Company).where(Company.id.in_(company_ids)))
        by_id = {company.id: company for company in result.scalars().all()}
        companies = [by_id[company_id] for company_id in company_ids if company_id in by_id]
    else:
        result = await db.execute(
            select(Company).order_by(Company.id).limit(settings.featured_companies_limit)
        )
        companies = list(result.scalars().all())

    return [CompanyResponse.model_validate(company) for company in companies]

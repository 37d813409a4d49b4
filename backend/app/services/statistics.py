"""Admin dashboard statistics."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.application import Application
from app.models.company import Company
from app.models.listing import Listing
from app.models.user import User
from app.schemas.admin import RoleCount, StatisticsResponse
from app.schemas.application import ApplicationResponse
from app.services.applications import list_recent_applications
from app.services.listings import list_listings_for_admin
from app.services.users import count_users_by_role

RECENT_LIMIT = 5


async def _count(db: AsyncSession, column) -> int:
    result = await db.execute(select(func.count(column)))
    return result.scalar_one()


async def get_statistics(db: AsyncSession) -> StatisticsResponse:
    """Totals over every row (soft-deleted listings included) plus recent activity."""
    by_role = await count_users_by_role(db)
    recent_jobs = await list_listings_for_admin(db, limit=RECENT_LIMIT)
    recent_applications = await list_recent_applications(db, limit=RECENT_LIMIT)

    return StatisticsResponse(
        total_users=await _count(db, User.id),
        total_jobs=await _count(db, Listing.id),
        total_companies=await _count(db, Company.id),
        total_applications=await _count(db, Application.id),
        users_by_role=[RoleCount(role=role, count=count) for role, count in by_role],
        recent_jobs=recent_jobs,
        recent_applications=[ApplicationResponse.model_validate(app) for app in recent_applications],
    )

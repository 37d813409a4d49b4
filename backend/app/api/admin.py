"""
Admin dashboard endpoints.

Role-based access control: the router carries `require_admin` as a
dependency, so every route under /api/admin answers 403 to anyone who is
not an admin (anonymous callers included).
"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import require_admin
from app.database import get_db
from app.errors import (
    CategoryNotFoundError,
    CompanyNotFoundError,
    ConflictError,
    ListingNotFoundError,
    NotificationNotFoundError,
    UserNotFoundError,
)
from app.models.listing import ListingStatus, PostType
from app.models.user import User
from app.schemas.admin import (
    AdminUserUpdate,
    FeaturedSectionsResponse,
    FeaturedSectionsUpdate,
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
    StatisticsResponse,
)
from app.schemas.auth import MessageResponse, UserResponse
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate, CategoryWithCount
from app.schemas.company import CompanyResponse
from app.schemas.listing import AdminListingUpdate, ListingResponse
from app.services import categories as category_service
from app.services import listings as listing_service
from app.services import site_content
from app.services.companies import list_companies
from app.services.forms import form_values_from_listing
from app.services.statistics import get_statistics
from app.services.users import get_user, get_user_by_email, list_users, update_user
from app.services.validation import validate_listing

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


def _not_found(resource: str):
    return HTTPException(status_code=404, detail=f"{resource} not found")


# ============================================================
# LISTINGS
# ============================================================

@router.get("/jobs", response_model=List[ListingResponse])
async def list_jobs(
    status: Optional[ListingStatus] = None,
    post_type: Optional[PostType] = Query(None, alias="postType"),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: AsyncSession = Depends(get_db)
):
    """Every listing whatever its moderation state, with current company names."""
    return await listing_service.list_listings_for_admin(
        db, status=status, post_type=post_type, include_deleted=include_deleted
    )


@router.post("/jobs", response_model=ListingResponse, status_code=201)
async def create_job(
    payload: dict[str, Any] = Body(...),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Post a listing on behalf of a company or an individual.

    Returns:
        201: Created listing (pending, with an audit note)
        400: Body fails the post-type schema
        404: Named company does not exist
    """
    data = validate_listing(payload)
    try:
        return await listing_service.create_listing(db, data, submitted_by=admin)
    except CompanyNotFoundError:
        raise _not_found("Company")


@router.get("/jobs/{listing_id}", response_model=ListingResponse)
async def get_job(listing_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await listing_service.get_listing(db, listing_id, include_deleted=True)
    except ListingNotFoundError:
        raise _not_found("Job")


@router.get("/jobs/{listing_id}/form")
async def get_job_form(listing_id: int, db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Values that pre-fill the edit form for a listing."""
    try:
        listing = await listing_service.get_listing(db, listing_id)
    except ListingNotFoundError:
        raise _not_found("Job")
    return form_values_from_listing(listing)


@router.put("/jobs/{listing_id}", response_model=ListingResponse)
async def replace_job(
    listing_id: int,
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db)
):
    """Replace every content field of a listing with a full edit-form payload."""
    data = validate_listing(payload)
    try:
        return await listing_service.replace_listing(db, listing_id, data)
    except ListingNotFoundError:
        raise _not_found("Job")
    except CompanyNotFoundError:
        raise _not_found("Company")


@router.patch("/jobs/{listing_id}", response_model=ListingResponse)
async def moderate_job(
    listing_id: int,
    request: AdminListingUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Approve, reject, feature or annotate a listing.

    `isActive: false` rejects the listing and hides it from every public view.
    """
    try:
        return await listing_service.moderate_listing(db, listing_id, request)
    except ListingNotFoundError:
        raise _not_found("Job")


@router.delete("/jobs/{listing_id}", response_model=MessageResponse)
async def delete_job(listing_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete: the row stays, marked rejected and deleted."""
    try:
        await listing_service.soft_delete_listing(db, listing_id)
    except ListingNotFoundError:
        raise _not_found("Job")
    return MessageResponse(message="Job successfully deleted")


# ============================================================
# USERS & COMPANIES
# ============================================================

@router.get("/users", response_model=List[UserResponse])
async def list_all_users(db: AsyncSession = Depends(get_db)):
    return await list_users(db)


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_one_user(user_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await get_user(db, user_id)
    except UserNotFoundError:
        raise _not_found("User")


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_one_user(
    user_id: int,
    request: AdminUserUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Partial user update.

    Returns:
        200: Updated user
        400: Email already used by another account
        403: Admin tried to change their own role
        404: Unknown user
    """
    changes = request.model_dump(exclude_unset=True, exclude_none=True)

    if user_id == admin.id and "role" in changes and changes["role"] != admin.role:
        logger.warning(f"Admin {admin.email} attempted to change their own role")
        raise HTTPException(status_code=403, detail="You cannot change your own admin role")

    try:
        user = await get_user(db, user_id)
    except UserNotFoundError:
        raise _not_found("User")

    if "email" in changes and changes["email"].lower() != user.email.lower():
        if await get_user_by_email(db, changes["email"]):
            raise HTTPException(status_code=400, detail="Email already in use")

    user = await update_user(db, user, changes)
    logger.info(f"Admin {admin.email} updated user {user.id}: {', '.join(changes) or 'no changes'}")
    return user


@router.get("/companies", response_model=List[CompanyResponse])
async def list_all_companies(db: AsyncSession = Depends(get_db)):
    return await list_companies(db)


@router.get("/statistics", response_model=StatisticsResponse)
async def statistics(db: AsyncSession = Depends(get_db)):
    return await get_statistics(db)


# ============================================================
# CATEGORIES
# ============================================================

@router.get("/categories", response_model=List[CategoryWithCount])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.list_categories_with_counts(db)


@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def create_category(request: CategoryCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await category_service.create_category(db, request)
    except ConflictError as e:
        logger.warning(str(e))
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    request: CategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await category_service.update_category(db, category_id, request)
    except CategoryNotFoundError:
        raise _not_found("Category")
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await category_service.delete_category(db, category_id)
    except CategoryNotFoundError:
        raise _not_found("Category")
    return Response(status_code=204)


# ============================================================
# SITE CONTENT
# ============================================================

@router.get("/featured-sections", response_model=FeaturedSectionsResponse)
async def get_featured_sections(db: AsyncSession = Depends(get_db)):
    return await site_content.get_featured_sections(db)


@router.patch("/featured-sections", response_model=FeaturedSectionsResponse)
async def update_featured_sections(request: FeaturedSectionsUpdate, db: AsyncSession = Depends(get_db)):
    return await site_content.update_featured_sections(db, request)


@router.get("/notifications", response_model=List[NotificationResponse])
async def list_notifications(db: AsyncSession = Depends(get_db)):
    return await site_content.list_notifications(db)


@router.post("/notifications", response_model=NotificationResponse, status_code=201)
async def create_notification(request: NotificationCreate, db: AsyncSession = Depends(get_db)):
    return await site_content.create_notification(db, request)


@router.patch("/notifications/{notification_id}", response_model=NotificationResponse)
async def update_notification(
    notification_id: int,
    request: NotificationUpdate,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await site_content.update_notification(db, notification_id, request)
    except NotificationNotFoundError:
        raise _not_found("Notification")


@router.delete("/notifications/{notification_id}", status_code=204)
async def delete_notification(notification_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await site_content.delete_notification(db, notification_id)
    except NotificationNotFoundError:
        raise _not_found("Notification")
    return Response(status_code=204)

"""Admin dashboard schemas: user management, statistics, site content."""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.models.site_content import NotificationType
from app.models.user import UserRole
from app.schemas.application import ApplicationResponse
from app.schemas.base import CamelModel
from app.schemas.listing import ListingResponse


class AdminUserUpdate(CamelModel):
    """Partial user update; password and firebase uid are not editable here."""
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    full_name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None


class RoleCount(CamelModel):
    role: UserRole
    count: int


class StatisticsResponse(CamelModel):
    total_users: int
    total_jobs: int
    total_companies: int
    total_applications: int
    users_by_role: list[RoleCount]
    recent_jobs: list[ListingResponse]
    recent_applications: list[ApplicationResponse]


class HomepageHero(CamelModel):
    title: str = ""
    subtitle: str = ""
    enabled: bool = True


class FeaturedSectionsResponse(CamelModel):
    homepage_hero: HomepageHero = Field(default_factory=HomepageHero)
    featured_jobs: list[int] = Field(default_factory=list)
    featured_companies: list[int] = Field(default_factory=list)


class FeaturedSectionsUpdate(CamelModel):
    """Only the sections present in the body are replaced."""
    homepage_hero: Optional[HomepageHero] = None
    featured_jobs: Optional[list[int]] = None
    featured_companies: Optional[list[int]] = None


class NotificationCreate(CamelModel):
    message: str = Field(min_length=1)
    type: NotificationType = NotificationType.INFO
    enabled: bool = True
    expires_at: Optional[datetime] = None


class NotificationUpdate(CamelModel):
    message: Optional[str] = Field(default=None, min_length=1)
    type: Optional[NotificationType] = None
    enabled: Optional[bool] = None
    expires_at: Optional[datetime] = None


class NotificationResponse(NotificationCreate):
    id: int
    created_at: datetime
    updated_at: datetime

"""Database models"""
from app.models.user import User, UserRole
from app.models.session import UserSession
from app.models.company import Company
from app.models.job_seeker_profile import JobSeekerProfile
from app.models.listing import Listing, PostType, ListingStatus
from app.models.application import Application, ApplicationStatus
from app.models.category import Category
from app.models.site_content import FeaturedSection, PlatformNotification

__all__ = [
    "User",
    "UserRole",
    "UserSession",
    "Company",
    "JobSeekerProfile",
    "Listing",
    "PostType",
    "ListingStatus",
    "Application",
    "ApplicationStatus",
    "Category",
    "FeaturedSection",
    "PlatformNotification",
]

"""Authentication-related Pydantic schemas."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field

from app.models.user import UserRole
from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Request to create a local (email + password) account."""
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    phone: Optional[str] = None
    # Admin accounts are never self-registered
    role: Literal["job_seeker", "employer"] = "job_seeker"


class LoginRequest(CamelModel):
    """Request to log in with email and password."""
    email: EmailStr
    password: str


class FirebaseSyncRequest(CamelModel):
    """Identity pushed by the frontend after a Firebase sign-in."""
    email: Optional[str] = None
    firebase_uid: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    role: Literal["job_seeker", "employer"] = "job_seeker"


class UserResponse(CamelModel):
    """Public view of a user; the password hash is never included."""
    id: int
    email: str
    role: UserRole
    full_name: str
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    firebase_uid: Optional[str] = None
    created_at: datetime


class MessageResponse(CamelModel):
    message: str

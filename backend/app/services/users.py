"""User accounts: password hashing, lookups and federated (Firebase/social) sign-in."""
import logging
import secrets
from typing import Optional

import bcrypt
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import UserNotFoundError
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Fields an admin update can never overwrite
PROTECTED_FIELDS = {"id", "password", "firebase_uid", "created_at"}


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check a plaintext password against a bcrypt hash (False when the account has none)."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_firebase_uid(db: AsyncSession, firebase_uid: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.firebase_uid == firebase_uid))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    email: str,
    full_name: str,
    role: UserRole = UserRole.JOB_SEEKER,
    password: Optional[str] = None,
    **profile,
) -> User:
    """Create a user; `password` is plaintext and stored as a bcrypt hash."""
    user = User(
        email=email,
        full_name=full_name,
        role=UserRole(role),
        password=hash_password(password) if password else None,
        **profile,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"Created {user.role.value} account {user.email}")
    return user


def default_full_name(email: str, display_name: Optional[str] = None) -> str:
    if display_name and display_name.strip():
        return display_name.strip()
    local_part = email.split("@")[0]
    return local_part or "User"


async def sync_firebase_user(
    db: AsyncSession,
    firebase_uid: str,
    email: str,
    display_name: Optional[str] = None,
    photo_url: Optional[str] = None,
    role: UserRole = UserRole.JOB_SEEKER,
) -> User:
    """
    Find or create the local account for a Firebase identity.

    Lookup order: firebase uid, then email (the uid is linked to an
    existing account created with another sign-in method), then create.
    """
    user = await get_user_by_firebase_uid(db, firebase_uid)
    if user:
        return user

    user = await get_user_by_email(db, email)
    if user:
        user.firebase_uid = firebase_uid
        if not user.profile_picture and photo_url:
            user.profile_picture = photo_url
        await db.commit()
        await db.refresh(user)
        logger.info(f"Linked Firebase uid to existing account {user.email}")
        return user

    return await create_user(
        db,
        email=email,
        full_name=default_full_name(email, display_name),
        role=role,
        firebase_uid=firebase_uid,
        profile_picture=photo_url,
    )


async def get_or_create_social_user(
    db: AsyncSession,
    email: str,
    full_name: Optional[str] = None,
    picture: Optional[str] = None,
) -> User:
    """
    Find the account for a social login by email, or create a job seeker.

    New social accounts get an unusable random password so local login
    stays impossible until the user sets one.
    """
    user = await get_user_by_email(db, email)
    if user:
        if not user.profile_picture and picture:
            user.profile_picture = picture
            await db.commit()
            await db.refresh(user)
        return user

    return await create_user(
        db,
        email=email,
        full_name=default_full_name(email, full_name),
        role=UserRole.JOB_SEEKER,
        password=secrets.token_hex(32),
        profile_picture=picture,
    )


async def update_user(db: AsyncSession, user: User, update_data: dict) -> User:
    """Apply a partial update; protected fields are ignored."""
    for field, value in update_data.items():
        if field in PROTECTED_FIELDS:
            continue
        setattr(user, field, value)
    await db.commit()
    await db.refresh(user)
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return list(result.scalars().all())


async def count_users_by_role(db: AsyncSession) -> list[tuple[UserRole, int]]:
    result = await db.execute(
        select(User.role, func.count(User.id)).group_by(User.role).order_by(User.role)
    )
    return [(role, count) for role, count in result.all()]

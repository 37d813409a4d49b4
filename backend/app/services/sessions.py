"""
Login sessions stored in the `sessions` table.

The browser only holds the random session id in an httpOnly cookie.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.session import UserSession
from app.models.user import User

logger = logging.getLogger(__name__)


def session_max_age_seconds() -> int:
    return settings.session_ttl_days * 86400


async def create_session(db: AsyncSession, user: User, method: str = "password") -> UserSession:
    """Open a session for a user; returns the row whose `sid` goes in the cookie."""
    session = UserSession(
        sid=secrets.token_urlsafe(32),
        user_id=user.id,
        data={"method": method},
        expire=datetime.utcnow() + timedelta(days=settings.session_ttl_days),
    )
    db.add(session)
    await db.commit()
    await db.refresh(session)
    logger.info(f"Opened session for {user.email} (method={method})")
    return session


async def resolve_session(db: AsyncSession, sid: Optional[str]) -> Optional[UserSession]:
    """
    Look up a live session by id.

    Expired sessions are deleted and reported as absent.
    """
    if not sid:
        return None
    session = await db.get(UserSession, sid)
    if session is None:
        return None
    if session.is_expired():
        await db.delete(session)
        await db.commit()
        return None
    return session


async def destroy_session(db: AsyncSession, sid: Optional[str]) -> None:
    if not sid:
        return
    await db.execute(delete(UserSession).where(UserSession.sid == sid))
    await db.commit()


async def purge_expired_sessions(db: AsyncSession) -> int:
    """Delete every expired session; returns how many were removed."""
    result = await db.execute(delete(UserSession).where(UserSession.expire <= datetime.utcnow()))
    await db.commit()
    return result.rowcount or 0

"""
Admin-editable site content.

Featured sections are stored one row per key; a key without a row reads
as its default. Notifications are plain rows.
"""
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotificationNotFoundError
from app.models.site_content import FeaturedSection, FeaturedSectionKey, PlatformNotification
from app.schemas.admin import (
    FeaturedSectionsResponse,
    FeaturedSectionsUpdate,
    NotificationCreate,
    NotificationUpdate,
)

logger = logging.getLogger(__name__)


async def get_featured_sections(db: AsyncSession) -> FeaturedSectionsResponse:
    result = await db.execute(select(FeaturedSection))
    stored = {row.key: row.content for row in result.scalars().all() if row.content is not None}
    return FeaturedSectionsResponse.model_validate(stored)


async def update_featured_sections(db: AsyncSession, update: FeaturedSectionsUpdate) -> FeaturedSectionsResponse:
    """Replace the sections present in the update; the others keep their value."""
    changes = update.model_dump(mode="json", by_alias=True, exclude_none=True)

    for key, content in changes.items():
        key = FeaturedSectionKey(key).value
        result = await db.execute(select(FeaturedSection).where(FeaturedSection.key == key))
        section = result.scalar_one_or_none()
        if section is None:
            section = FeaturedSection(key=key)
            db.add(section)
        section.content = content
        section.updated_at = datetime.utcnow()

    await db.commit()
    logger.info(f"Updated featured sections: {', '.join(changes) or 'none'}")
    return await get_featured_sections(db)


async def list_notifications(db: AsyncSession, live_only: bool = False) -> list[PlatformNotification]:
    result = await db.execute(
        select(PlatformNotification).order_by(PlatformNotification.created_at.desc(), PlatformNotification.id.desc())
    )
    notifications = list(result.scalars().all())
    if live_only:
        notifications = [notification for notification in notifications if notification.is_live()]
    return notifications


async def get_notification(db: AsyncSession, notification_id: int) -> PlatformNotification:
    notification = await db.get(PlatformNotification, notification_id)
    if notification is None:
        raise NotificationNotFoundError(notification_id)
    return notification


async def create_notification(db: AsyncSession, data: NotificationCreate) -> PlatformNotification:
    notification = PlatformNotification(**data.model_dump())
    db.add(notification)
    await db.commit()
    await db.refresh(notification)
    logger.info(f"Created {notification.type.value} notification {notification.id}")
    return notification


async def update_notification(
    db: AsyncSession, notification_id: int, data: NotificationUpdate
) -> PlatformNotification:
    notification = await get_notification(db, notification_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("message", "type", "enabled") and value is None:
            continue
        setattr(notification, field, value)
    notification.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(notification)
    logger.info(f"Updated notification {notification.id}")
    return notification


async def delete_notification(db: AsyncSession, notification_id: int) -> None:
    notification = await get_notification(db, notification_id)
    await db.delete(notification)
    await db.commit()
    logger.info(f"Deleted notification {notification_id}")

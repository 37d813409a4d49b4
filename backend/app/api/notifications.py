"""Public banner notifications."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.admin import NotificationResponse
from app.services.site_content import list_notifications

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def live_notifications(db: AsyncSession = Depends(get_db)):
    """Enabled notifications that have not expired."""
    return await list_notifications(db, live_only=True)

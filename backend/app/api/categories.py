"""Public category listing."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.category import CategoryWithCount
from app.services.categories import list_categories_with_counts

router = APIRouter()


@router.get("", response_model=List[CategoryWithCount])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Every category with its current number of visible listings."""
    return await list_categories_with_counts(db)

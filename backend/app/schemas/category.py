"""Category schemas."""
from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    icon: str = Field(min_length=1)


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = Field(default=None, min_length=1)


class CategoryResponse(CategoryCreate):
    id: int


class CategoryWithCount(CategoryResponse):
    """Category plus the number of visible listings that reference it (computed at read time)."""
    count: int = 0

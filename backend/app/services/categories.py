"""Categories with live listing counts, admin CRUD and the default seed."""
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import CategoryNotFoundError, ConflictError
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryWithCount
from app.services.listings import count_visible_by_category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Information Technology", "computer"),
    ("Finance & Banking", "attach_money"),
    ("Management & Admin", "business"),
    ("Healthcare", "health_and_safety"),
    ("Education & Training", "school"),
    ("Engineering", "engineering"),
    ("Marketing & Sales", "campaign"),
    ("Agriculture", "agriculture"),
]


async def list_categories_with_counts(db: AsyncSession) -> list[CategoryWithCount]:
    """Every category with the number of visible listings that use its name."""
    result = await db.execute(select(Category).order_by(Category.id))
    categories = list(result.scalars().all())
    counts = await count_visible_by_category(db, [category.name for category in categories])
    return [
        CategoryWithCount(id=category.id, name=category.name, icon=category.icon, count=counts.get(category.name, 0))
        for category in categories
    ]


async def get_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return category


async def _name_taken(db: AsyncSession, name: str, exclude_id: int = None) -> bool:
    query = select(Category.id).where(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def create_category(db: AsyncSession, data: CategoryCreate) -> Category:
    """
    Raises:
        ConflictError: if a category with the same name exists
    """
    if await _name_taken(db, data.name):
        raise ConflictError(f"Category '{data.name}' already exists")

    category = Category(name=data.name, icon=data.icon)
    db.add(category)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(f"Category '{data.name}' already exists") from exc
    await db.refresh(category)

    logger.info(f"Created category {category.id}: {category.name}")
    return category


async def update_category(db: AsyncSession, category_id: int, data: CategoryUpdate) -> Category:
    category = await get_category(db, category_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes and await _name_taken(db, changes["name"], exclude_id=category.id):
        raise ConflictError(f"Category '{changes['name']}' already exists")

    for field, value in changes.items():
        setattr(category, field, value)
    await db.commit()
    await db.refresh(category)

    logger.info(f"Updated category {category.id}: {category.name}")
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """Delete a category; listings keep their category name."""
    category = await get_category(db, category_id)
    await db.delete(category)
    await db.commit()
    logger.info(f"Deleted category {category_id}: {category.name}")


async def seed_default_categories(db: AsyncSession) -> int:
    """Insert the default categories when the table is empty; returns how many were added."""
    result = await db.execute(select(func.count(Category.id)))
    if result.scalar_one() > 0:
        return 0

    for name, icon in DEFAULT_CATEGORIES:
        db.add(Category(name=name, icon=icon))
    await db.commit()

    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
    return len(DEFAULT_CATEGORIES)

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DatabaseError
from app.modules.categories.dto import CategoryDto
from app.modules.categories.models import Category

logger = logging.getLogger(__name__)


class CategoriesService:
    def __init__(self):
        self.logger = logger

    async def get_categories(self, db: AsyncSession) -> List[Category]:
        """Get all categories ordered by name"""
        self.logger.debug("CategoriesService.get_categories called")
        try:
            result = await db.execute(select(Category).order_by(Category.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while listing categories: {str(e)}")
            raise DatabaseError(f"list categories: {str(e)}")

    async def get_category(self, db: AsyncSession, category_id: int) -> Optional[Category]:
        """Get a category by primary key"""
        self.logger.debug(f"Fetching category with ID: {category_id}")
        try:
            return await db.get(Category, category_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while fetching category {category_id}: {str(e)}")
            raise DatabaseError(f"get category: {str(e)}")

    async def category_exists(self, db: AsyncSession, category_id: int) -> bool:
        """Check presence by primary key without loading the entity"""
        try:
            result = await db.execute(
                select(Category.category_id).where(Category.category_id == category_id)
            )
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while checking category {category_id}: {str(e)}")
            raise DatabaseError(f"check category: {str(e)}")

    async def create_category(self, db: AsyncSession, data: CategoryDto) -> Category:
        """Create a new category; the store assigns the primary key"""
        self.logger.info(f"Creating new category with name: {data.name}")

        new_category = Category(name=data.name, description=data.description)
        try:
            db.add(new_category)
            await db.commit()
            await db.refresh(new_category)
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during category creation: {str(e)}")
            raise DatabaseError(f"create category: {str(e)}")

        self.logger.info(f"Created category with ID: {new_category.category_id}")
        return new_category

    async def update_category(self, db: AsyncSession, category_id: int, data: CategoryDto) -> None:
        """Replace every client-owned field of the category (no return)"""
        self.logger.info(f"Updating category with ID: {category_id}")
        try:
            await db.execute(
                update(Category)
                .where(Category.category_id == category_id)
                .values(name=data.name, description=data.description)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during category update: {str(e)}")
            raise DatabaseError(f"update category: {str(e)}")

    async def delete_category(self, db: AsyncSession, category: Category) -> None:
        """Hard delete a category (no return)"""
        self.logger.info(f"Deleting category with ID: {category.category_id}")
        try:
            await db.delete(category)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during category deletion: {str(e)}")
            raise DatabaseError(f"delete category: {str(e)}")

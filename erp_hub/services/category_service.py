"""카테고리 서비스.

Category service — list with issue counts and create.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Category
from erp_hub.repositories.category_repository import category_repository
from erp_hub.schemas.category import CategoryCreate, CategoryOut, CategoryWithCount


class CategoryService:

    async def list_categories(self, db: AsyncSession) -> list[CategoryWithCount]:
        rows = await category_repository.list_with_issue_counts(db)
        return [
            CategoryWithCount(**CategoryOut.model_validate(category).model_dump(), issue_count=count)
            for category, count in rows
        ]

    async def create_category(self, db: AsyncSession, data: CategoryCreate) -> Category:
        category = await category_repository.create(db, data.model_dump())
        return category


category_service: CategoryService = CategoryService()

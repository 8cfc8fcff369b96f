"""카테고리 레포지토리.

Category repository — Handles categories DB queries.
"""

from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Category, Issue
from erp_hub.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):

    def __init__(self) -> None:
        super().__init__(Category)

    async def list_with_issue_counts(self, db: AsyncSession) -> Sequence[tuple[Category, int]]:
        """이름순 카테고리 목록과 각 카테고리의 이슈 수."""
        query: Select = (
            select(Category, func.count(Issue.id))
            .outerjoin(Issue, Issue.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name.asc())
        )
        result = await db.execute(query)
        return [(category, count) for category, count in result.all()]


category_repository: CategoryRepository = CategoryRepository()

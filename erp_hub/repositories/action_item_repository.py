"""실행 항목 레포지토리.

Action item repository — Handles action_items DB queries.
"""

from typing import Sequence

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from erp_hub.models.issue import ActionItem, Issue
from erp_hub.repositories.base import BaseRepository


class ActionItemRepository(BaseRepository[ActionItem]):

    def __init__(self) -> None:
        super().__init__(ActionItem)

    async def list_with_issue(self, db: AsyncSession) -> Sequence[ActionItem]:
        """미완료 우선, 순서, 우선순위, 마감일, 최신순으로 정렬된 전체 목록."""
        query: Select = (
            select(ActionItem)
            .options(selectinload(ActionItem.issue).selectinload(Issue.category))
            .order_by(
                ActionItem.completed.asc(),
                ActionItem.order.asc(),
                ActionItem.priority.desc(),
                ActionItem.due_date.asc(),
                ActionItem.created_at.desc(),
            )
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_with_issue(self, db: AsyncSession, item_id: str) -> ActionItem | None:
        return await self.get_by_id(
            db, item_id, options=[selectinload(ActionItem.issue).selectinload(Issue.category)]
        )

    async def max_order(self, db: AsyncSession) -> int | None:
        return (await db.execute(select(func.max(ActionItem.order)))).scalar()

    async def set_order(self, db: AsyncSession, item_id: str, order: int) -> int:
        result = await db.execute(
            update(ActionItem).where(ActionItem.id == item_id).values(order=order)
        )
        return result.rowcount or 0


action_item_repository: ActionItemRepository = ActionItemRepository()

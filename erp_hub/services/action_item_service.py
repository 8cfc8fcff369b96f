"""실행 항목 서비스.

Action item service — create/patch/delete/reorder.
Update and delete failures (including an unknown id) surface as 500,
matching how the client treats a failed write on this resource.
"""

import logging
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import ActionItem
from erp_hub.repositories.action_item_repository import action_item_repository
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.schemas.action_item import ActionItemCreate, ActionItemUpdate, ReorderEntry
from erp_hub.utils.exceptions import NotFoundError, ServerError

logger = logging.getLogger(__name__)

# 명시적 null을 그대로 저장하는 필드 — null clears the value
_NULLABLE_PATCH_FIELDS: frozenset[str] = frozenset({"due_date"})


class ActionItemService:

    async def list_items(self, db: AsyncSession) -> Sequence[ActionItem]:
        return await action_item_repository.list_with_issue(db)

    async def get_item(self, db: AsyncSession, item_id: str) -> ActionItem:
        item = await action_item_repository.get_with_issue(db, item_id)
        if item is None:
            raise NotFoundError("Action item not found")
        return item

    async def create_item(self, db: AsyncSession, data: ActionItemCreate) -> ActionItem:
        if await issue_repository.get_by_id(db, data.issue_id) is None:
            raise NotFoundError("Issue not found")

        max_order = await action_item_repository.max_order(db)
        return await action_item_repository.create(
            db,
            {
                "issue_id": data.issue_id,
                "original_issue_id": data.issue_id,
                "title": data.title,
                "description": data.description,
                "priority": data.priority if data.priority is not None else 0,
                "due_date": data.due_date,
                "order": (max_order if max_order is not None else -1) + 1,
            },
        )

    async def update_item(self, db: AsyncSession, item_id: str, data: ActionItemUpdate) -> ActionItem:
        """요청 본문에 있는 필드만 반영합니다.

        Only keys present in the body are written. An explicit null is
        applied for due_date (clears it) and ignored for every other field.
        """
        update_data: dict[str, Any] = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in _NULLABLE_PATCH_FIELDS
        }

        if "issue_id" in update_data and await issue_repository.get_by_id(db, update_data["issue_id"]) is None:
            logger.error("Action item %s moved to unknown issue %s", item_id, update_data["issue_id"])
            raise ServerError("Failed to update action item")

        updated = await action_item_repository.update(db, item_id, update_data)
        if updated is None:
            logger.error("Failed to update action item %s: not found", item_id)
            raise ServerError("Failed to update action item")
        return updated

    async def delete_item(self, db: AsyncSession, item_id: str) -> None:
        """존재 확인 없이 삭제 — 삭제된 행이 없으면 500."""
        deleted = await action_item_repository.delete_by_id(db, item_id)
        if deleted == 0:
            logger.error("Failed to delete action item %s: no row deleted", item_id)
            raise ServerError("Failed to delete action item")

    async def reorder(self, db: AsyncSession, entries: Sequence[ReorderEntry]) -> None:
        for entry in entries:
            if await action_item_repository.set_order(db, entry.id, entry.order) == 0:
                logger.error("Failed to reorder action items: unknown id %s", entry.id)
                raise ServerError("Failed to reorder action items")


action_item_service: ActionItemService = ActionItemService()

"""실행 항목 라우터 — 목록, 생성, 재정렬, 부분 수정, 삭제.

Action Item Router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.action_item import (
    ActionItemCreate,
    ActionItemOut,
    ActionItemReorder,
    ActionItemUpdate,
    ActionItemWithIssue,
)
from erp_hub.schemas.common import MessageResponse
from erp_hub.services.action_item_service import action_item_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ActionItemWithIssue])
async def list_action_items(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ActionItemWithIssue]:
    """전체 실행 항목 — 이슈 요약 포함."""
    items = await action_item_service.list_items(db)
    return [ActionItemWithIssue.model_validate(item) for item in items]


@router.post("", status_code=201, response_model=ActionItemOut)
async def create_action_item(
    data: ActionItemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ActionItemOut:
    """실행 항목 생성 — 순서는 현재 최대값 + 1."""
    item = await action_item_service.create_item(db, data)
    await db.commit()
    return ActionItemOut.model_validate(item)


@router.put("")
async def reorder_action_items(
    data: ActionItemReorder,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """{reorderedItems: [{id, order}]}로 순서 일괄 변경."""
    await action_item_service.reorder(db, data.reordered_items)
    await db.commit()
    return {"success": True}


@router.get("/{item_id}", response_model=ActionItemWithIssue)
async def get_action_item(
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ActionItemWithIssue:
    item = await action_item_service.get_item(db, item_id)
    return ActionItemWithIssue.model_validate(item)


@router.patch("/{item_id}")
async def update_action_item(
    item_id: str,
    data: ActionItemUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """보낸 필드만 수정. dueDate: null은 마감일 삭제."""
    item = await action_item_service.update_item(db, item_id, data)
    await db.commit()
    return {"success": True, "actionItem": ActionItemOut.model_validate(item)}


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_action_item(
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await action_item_service.delete_item(db, item_id)
    await db.commit()
    return {"success": True, "message": "Action item deleted successfully"}

"""실행 항목 Pydantic 스키마.

Action item request/response schemas.
ActionItemUpdate is presence-based: only keys sent by the client are applied
(``model_dump(exclude_unset=True)``), see ActionItemService.update_item.
"""

from datetime import datetime

from pydantic import Field

from erp_hub.schemas.common import CamelModel


class ActionItemCreate(CamelModel):
    issue_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None
    priority: int | None = None
    due_date: datetime | None = None


class ActionItemUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    priority: int | None = None
    completed: bool | None = None
    due_date: datetime | None = None  # 명시적 null이면 마감일 삭제 (explicit null clears)
    issue_id: str | None = None
    original_issue_id: str | None = None


class ReorderEntry(CamelModel):
    id: str
    order: int


class ActionItemReorder(CamelModel):
    reordered_items: list[ReorderEntry]


class ActionItemOut(CamelModel):
    id: str
    issue_id: str
    original_issue_id: str | None = None
    title: str
    description: str | None = None
    priority: int
    completed: bool
    due_date: datetime | None = None
    order: int
    created_at: datetime
    updated_at: datetime


class CategoryBrief(CamelModel):
    name: str
    color: str | None = None


class IssueBrief(CamelModel):
    id: str
    title: str
    category: CategoryBrief | None = None


class ActionItemWithIssue(ActionItemOut):
    issue: IssueBrief | None = None

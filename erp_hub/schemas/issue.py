"""이슈 Pydantic 스키마.

Issue request/response schemas.
"""

from datetime import datetime
from typing import Literal

from erp_hub.schemas.action_item import ActionItemOut
from erp_hub.schemas.category import CategoryOut
from erp_hub.schemas.common import CamelModel
from erp_hub.schemas.note import NoteOut, NoteWithAttachments

IssuePriority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]
IssueStatus = Literal["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"]


class IssueCreate(CamelModel):
    # title 누락은 서비스에서 "Title is required"로 처리
    title: str | None = None
    description: str | None = None
    resolution_plan: str | None = None
    work_performed: str | None = None
    work_organization: str | None = None
    roadblocks: str | None = None
    users_involved: str | None = None
    additional_help: str | None = None
    priority: IssuePriority = "MEDIUM"
    status: IssueStatus = "OPEN"
    category_id: str | None = None
    assigned_to: str | None = None
    cmic_ticket_number: str | None = None
    cmic_ticket_opened: datetime | None = None
    cmic_ticket_closed: bool = False
    additional_notes: str | None = None  # Zendesk 가져오기 시 최초 메모로 저장


class IssueUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    resolution_plan: str | None = None
    work_performed: str | None = None
    work_organization: str | None = None
    roadblocks: str | None = None
    users_involved: str | None = None
    additional_help: str | None = None
    priority: IssuePriority | None = None
    status: IssueStatus | None = None
    category_id: str | None = None
    assigned_to: str | None = None
    cmic_ticket_number: str | None = None
    cmic_ticket_opened: datetime | None = None
    cmic_ticket_closed: bool | None = None


class IssueOut(CamelModel):
    id: str
    title: str
    description: str | None = None
    resolution_plan: str | None = None
    work_performed: str | None = None
    work_organization: str | None = None
    roadblocks: str | None = None
    users_involved: str | None = None
    additional_help: str | None = None
    priority: str
    status: str
    archived: bool
    archived_at: datetime | None = None
    category_id: str | None = None
    assigned_to: str | None = None
    cmic_ticket_number: str | None = None
    cmic_ticket_opened: datetime | None = None
    cmic_ticket_closed: bool
    created_at: datetime
    updated_at: datetime
    category: CategoryOut | None = None


class IssueListItem(IssueOut):
    latest_note: NoteOut | None = None
    note_count: int = 0


class IssueDetail(IssueOut):
    notes: list[NoteWithAttachments] = []
    action_items: list[ActionItemOut] = []

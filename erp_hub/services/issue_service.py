"""이슈 서비스.

Issue service — Business logic for issue CRUD and the active/resolved lists.
Routes invalidate the cached dashboard view after each write commits.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Issue
from erp_hub.repositories.category_repository import category_repository
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.repositories.note_repository import note_repository
from erp_hub.schemas.issue import IssueCreate, IssueDetail, IssueListItem, IssueOut, IssueUpdate
from erp_hub.schemas.note import NoteOut
from erp_hub.utils.exceptions import BadRequestError, NotFoundError

ZENDESK_IMPORT_AUTHOR: str = "System - Zendesk Import"


class IssueService:

    async def list_issues(self, db: AsyncSession, status_group: str | None) -> list[IssueListItem]:
        issues: Sequence[Issue] = await issue_repository.list_by_status_group(db, status_group)
        counts, latest = await issue_repository.note_summaries(db, [i.id for i in issues])
        items: list[IssueListItem] = []
        for issue in issues:
            base = IssueOut.model_validate(issue).model_dump()
            note = latest.get(issue.id)
            items.append(
                IssueListItem(
                    **base,
                    latest_note=NoteOut.model_validate(note) if note else None,
                    note_count=counts.get(issue.id, 0),
                )
            )
        return items

    async def get_issue(self, db: AsyncSession, issue_id: str) -> Issue:
        issue = await issue_repository.get_with_category(db, issue_id)
        if issue is None:
            raise NotFoundError("Issue not found")
        return issue

    async def get_detail(self, db: AsyncSession, issue_id: str) -> IssueDetail:
        """카테고리, 메모(최신순, 첨부 포함), 실행 항목을 포함한 상세."""
        issue = await issue_repository.get_detail(db, issue_id)
        if issue is None:
            raise NotFoundError("Issue not found")

        detail = IssueDetail.model_validate(issue)
        detail.notes.sort(key=lambda n: n.created_at, reverse=True)
        # 미완료 먼저, 우선순위 높은 순, 최신순
        detail.action_items.sort(key=lambda a: a.created_at, reverse=True)
        detail.action_items.sort(key=lambda a: (a.completed, -a.priority))
        return detail

    async def _check_category(self, db: AsyncSession, category_id: str | None) -> None:
        if category_id and await category_repository.get_by_id(db, category_id) is None:
            raise BadRequestError("Category not found")

    async def create_issue(self, db: AsyncSession, data: IssueCreate) -> Issue:
        if not data.title or not data.title.strip():
            raise BadRequestError("Title is required")
        await self._check_category(db, data.category_id)

        fields: dict[str, Any] = data.model_dump(exclude={"additional_notes"})
        fields["title"] = data.title.strip()
        issue = await issue_repository.create(db, fields)

        if data.additional_notes and data.additional_notes.strip():
            await note_repository.create(
                db,
                {
                    "issue_id": issue.id,
                    "content": data.additional_notes,
                    "author": ZENDESK_IMPORT_AUTHOR,
                },
            )

        return await self.get_issue(db, issue.id)

    async def update_issue(self, db: AsyncSession, issue_id: str, data: IssueUpdate) -> Issue:
        update_data = data.model_dump(exclude_unset=True)
        if "title" in update_data and not (update_data["title"] or "").strip():
            raise BadRequestError("Title is required")
        # 필수 컬럼에 대한 명시적 null은 무시
        for required in ("priority", "status", "cmic_ticket_closed"):
            if update_data.get(required, "") is None:
                update_data.pop(required)
        await self._check_category(db, update_data.get("category_id"))

        updated = await issue_repository.update(db, issue_id, update_data)
        if updated is None:
            raise NotFoundError("Issue not found")
        return await self.get_issue(db, issue_id)

    async def archive_issue(self, db: AsyncSession, issue_id: str) -> Issue:
        archived = await issue_repository.archive(db, issue_id, datetime.now(timezone.utc))
        if archived is None:
            raise NotFoundError("Issue not found")
        return await self.get_issue(db, issue_id)

    async def delete_issue(self, db: AsyncSession, issue_id: str) -> None:
        deleted = await issue_repository.delete(db, issue_id)
        if not deleted:
            raise NotFoundError("Issue not found")


issue_service: IssueService = IssueService()

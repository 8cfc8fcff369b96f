"""이슈 레포지토리.

Issue repository — Handles issues DB queries.
Priority is stored as text, so "priority desc" uses a CASE rank
(URGENT > HIGH > MEDIUM > LOW) instead of alphabetical order.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from erp_hub.models.issue import ISSUE_PRIORITIES, Issue, Note
from erp_hub.repositories.base import BaseRepository

RESOLVED_STATUSES: tuple[str, ...] = ("RESOLVED", "CLOSED")
ACTIVE_STATUSES: tuple[str, ...] = ("OPEN", "IN_PROGRESS")

# 우선순위 정렬값 — LOW=0 ... URGENT=3
priority_rank = case(
    {name: rank for rank, name in enumerate(ISSUE_PRIORITIES)},
    value=Issue.priority,
    else_=-1,
)


class IssueRepository(BaseRepository[Issue]):

    def __init__(self) -> None:
        super().__init__(Issue)

    async def get_with_category(self, db: AsyncSession, issue_id: str) -> Issue | None:
        return await self.get_by_id(db, issue_id, options=[selectinload(Issue.category)])

    async def get_detail(self, db: AsyncSession, issue_id: str) -> Issue | None:
        return await self.get_by_id(
            db,
            issue_id,
            options=[
                selectinload(Issue.category),
                selectinload(Issue.notes).selectinload(Note.attachments),
                selectinload(Issue.action_items),
            ],
        )

    async def list_by_status_group(self, db: AsyncSession, status_group: str | None) -> Sequence[Issue]:
        """보관되지 않은 이슈를 상태 그룹별로 조회합니다.

        "resolved" selects RESOLVED/CLOSED; any other value selects OPEN/IN_PROGRESS.
        """
        statuses = RESOLVED_STATUSES if status_group == "resolved" else ACTIVE_STATUSES
        query: Select = (
            select(Issue)
            .options(selectinload(Issue.category))
            .where(Issue.archived.is_(False), Issue.status.in_(statuses))
            .order_by(priority_rank.desc(), Issue.updated_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def note_summaries(
        self, db: AsyncSession, issue_ids: Sequence[str]
    ) -> tuple[dict[str, int], dict[str, Note]]:
        """이슈별 메모 개수와 최신 메모를 반환합니다."""
        if not issue_ids:
            return {}, {}

        count_rows = await db.execute(
            select(Note.issue_id, func.count(Note.id))
            .where(Note.issue_id.in_(issue_ids))
            .group_by(Note.issue_id)
        )
        counts: dict[str, int] = {issue_id: count for issue_id, count in count_rows.all()}

        notes = await db.execute(
            select(Note)
            .where(Note.issue_id.in_(issue_ids))
            .order_by(Note.issue_id, Note.created_at.desc())
        )
        latest: dict[str, Note] = {}
        for note in notes.scalars().all():
            latest.setdefault(note.issue_id, note)
        return counts, latest

    async def list_for_report(
        self,
        db: AsyncSession,
        *conditions,
    ) -> Sequence[Issue]:
        """템플릿 데이터용 이슈 조회 — 카테고리 포함."""
        query: Select = (
            select(Issue)
            .options(selectinload(Issue.category))
            .where(*conditions)
            .order_by(priority_rank.desc(), Issue.updated_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def count_where(self, db: AsyncSession, *conditions) -> int:
        query: Select = select(func.count()).select_from(Issue).where(*conditions)
        return (await db.execute(query)).scalar() or 0

    async def status_counts(self, db: AsyncSession, include_archived: bool = True) -> dict[str, int]:
        query: Select = select(Issue.status, func.count(Issue.id)).group_by(Issue.status)
        if not include_archived:
            query = query.where(Issue.archived.is_(False))
        rows = await db.execute(query)
        return {status: count for status, count in rows.all()}

    async def archive(self, db: AsyncSession, issue_id: str, archived_at: datetime) -> Issue | None:
        return await self.update(db, issue_id, {"archived": True, "archived_at": archived_at})


issue_repository: IssueRepository = IssueRepository()

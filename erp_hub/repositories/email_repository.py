"""이메일 템플릿/초안 레포지토리.

Email template and draft repositories.
"""

from typing import Sequence

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from erp_hub.models.email import EmailDraft, EmailIssue, EmailTemplate
from erp_hub.models.issue import Issue
from erp_hub.repositories.base import BaseRepository


class EmailTemplateRepository(BaseRepository[EmailTemplate]):

    def __init__(self) -> None:
        super().__init__(EmailTemplate)

    async def list_ordered(self, db: AsyncSession) -> Sequence[EmailTemplate]:
        """기본 템플릿 먼저, 이후 이름순."""
        query: Select = select(EmailTemplate).order_by(
            EmailTemplate.is_default.desc(), EmailTemplate.name.asc()
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def clear_defaults(self, db: AsyncSession, except_id: str | None = None) -> None:
        """다른 모든 기본 템플릿 해제 — 호출자 트랜잭션 안에서 실행."""
        stmt = update(EmailTemplate).where(EmailTemplate.is_default.is_(True))
        if except_id is not None:
            stmt = stmt.where(EmailTemplate.id != except_id)
        await db.execute(stmt.values(is_default=False).execution_options(synchronize_session="fetch"))


class EmailDraftRepository(BaseRepository[EmailDraft]):

    def __init__(self) -> None:
        super().__init__(EmailDraft)

    @staticmethod
    def _load_options() -> list:
        return [
            selectinload(EmailDraft.template),
            selectinload(EmailDraft.email_issues)
            .selectinload(EmailIssue.issue)
            .selectinload(Issue.category),
        ]

    async def list_with_relations(self, db: AsyncSession) -> Sequence[EmailDraft]:
        query: Select = (
            select(EmailDraft)
            .options(*self._load_options())
            .order_by(EmailDraft.updated_at.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_with_relations(self, db: AsyncSession, draft_id: str) -> EmailDraft | None:
        return await self.get_by_id(db, draft_id, options=self._load_options())

    async def link_issues(self, db: AsyncSession, draft_id: str, issue_ids: Sequence[str]) -> None:
        # 중복 id는 한 번만 연결 (unique draft/issue pair)
        for issue_id in dict.fromkeys(issue_ids):
            db.add(EmailIssue(email_draft_id=draft_id, issue_id=issue_id))
        await db.flush()

    async def unlink_all(self, db: AsyncSession, draft_id: str) -> None:
        await db.execute(
            delete(EmailIssue)
            .where(EmailIssue.email_draft_id == draft_id)
            .execution_options(synchronize_session="fetch")
        )


email_template_repository: EmailTemplateRepository = EmailTemplateRepository()
email_draft_repository: EmailDraftRepository = EmailDraftRepository()

"""이메일 초안 서비스.

Email draft service — drafts link to issues through email_issues.
Every read returns the draft with its template and linked issues (with category).
"""

import json
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.email import EmailDraft
from erp_hub.repositories.email_repository import email_draft_repository, email_template_repository
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.schemas.email import EmailDraftCreate, EmailDraftUpdate
from erp_hub.utils.exceptions import BadRequestError, NotFoundError


class EmailDraftService:

    async def _check_references(
        self, db: AsyncSession, template_id: str | None, issue_ids: Sequence[str] | None
    ) -> None:
        if template_id and await email_template_repository.get_by_id(db, template_id) is None:
            raise BadRequestError("Template not found")
        for issue_id in issue_ids or []:
            if await issue_repository.get_by_id(db, issue_id) is None:
                raise BadRequestError(f"Issue not found: {issue_id}")

    async def list_drafts(self, db: AsyncSession) -> Sequence[EmailDraft]:
        return await email_draft_repository.list_with_relations(db)

    async def get_draft(self, db: AsyncSession, draft_id: str) -> EmailDraft:
        draft = await email_draft_repository.get_with_relations(db, draft_id)
        if draft is None:
            raise NotFoundError("Email draft not found")
        return draft

    async def create_draft(self, db: AsyncSession, data: EmailDraftCreate) -> EmailDraft:
        await self._check_references(db, data.template_id, data.issue_ids)
        draft = await email_draft_repository.create(
            db,
            {
                "subject": data.subject,
                "content": data.content,
                "recipients": json.dumps(data.recipients) if data.recipients else None,
                "template_id": data.template_id,
            },
        )
        if data.issue_ids:
            await email_draft_repository.link_issues(db, draft.id, data.issue_ids)
        return await self.get_draft(db, draft.id)

    async def update_draft(self, db: AsyncSession, draft_id: str, data: EmailDraftUpdate) -> EmailDraft:
        await self.get_draft(db, draft_id)
        update_data = data.model_dump(exclude_unset=True)
        issue_ids = update_data.pop("issue_ids", None)
        await self._check_references(db, update_data.get("template_id"), issue_ids)

        for required in ("subject", "content"):
            if update_data.get(required, "") is None:
                update_data.pop(required)
        if "recipients" in update_data:
            recipients = update_data["recipients"]
            update_data["recipients"] = json.dumps(recipients) if recipients else None

        await email_draft_repository.update(db, draft_id, update_data)
        if issue_ids is not None:
            await email_draft_repository.unlink_all(db, draft_id)
            await email_draft_repository.link_issues(db, draft_id, issue_ids)
        return await self.get_draft(db, draft_id)

    async def delete_draft(self, db: AsyncSession, draft_id: str) -> None:
        if not await email_draft_repository.delete(db, draft_id):
            raise NotFoundError("Email draft not found")


email_draft_service: EmailDraftService = EmailDraftService()

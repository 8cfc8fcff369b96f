"""이메일 초안 라우터."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.common import MessageResponse
from erp_hub.schemas.email import EmailDraftCreate, EmailDraftOut, EmailDraftUpdate
from erp_hub.services.email_draft_service import email_draft_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmailDraftOut])
async def list_drafts(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EmailDraftOut]:
    """최근 수정순 초안 목록 — 템플릿과 연결 이슈 포함."""
    drafts = await email_draft_service.list_drafts(db)
    return [EmailDraftOut.model_validate(d) for d in drafts]


@router.post("", response_model=EmailDraftOut)
async def create_draft(
    data: EmailDraftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailDraftOut:
    draft = await email_draft_service.create_draft(db, data)
    await db.commit()
    return EmailDraftOut.model_validate(draft)


@router.get("/{draft_id}", response_model=EmailDraftOut)
async def get_draft(
    draft_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailDraftOut:
    draft = await email_draft_service.get_draft(db, draft_id)
    return EmailDraftOut.model_validate(draft)


@router.put("/{draft_id}", response_model=EmailDraftOut)
async def update_draft(
    draft_id: str,
    data: EmailDraftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailDraftOut:
    """초안 수정 — issueIds가 있으면 연결 이슈 교체."""
    draft = await email_draft_service.update_draft(db, draft_id, data)
    await db.commit()
    return EmailDraftOut.model_validate(draft)


@router.delete("/{draft_id}", response_model=MessageResponse)
async def delete_draft(
    draft_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await email_draft_service.delete_draft(db, draft_id)
    await db.commit()
    return {"success": True, "message": "Email draft deleted successfully"}

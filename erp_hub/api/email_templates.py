"""이메일 템플릿 라우터.

Email Template Router — CRUD, sample seeding, template data and rendering.
Static paths (/init, /template-data) are declared before /{template_id}.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.common import MessageResponse
from erp_hub.schemas.email import EmailTemplateOut, EmailTemplateWrite, RenderedEmail
from erp_hub.services.email_template_service import email_template_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmailTemplateOut])
async def list_templates(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EmailTemplateOut]:
    """기본 템플릿 우선, 이름순."""
    templates = await email_template_service.list_templates(db)
    return [EmailTemplateOut.model_validate(t) for t in templates]


@router.post("", status_code=201, response_model=EmailTemplateOut)
async def create_template(
    data: EmailTemplateWrite,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailTemplateOut:
    template = await email_template_service.create_template(db, data)
    await db.commit()
    return EmailTemplateOut.model_validate(template)


@router.post("/init")
async def init_templates(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """템플릿이 없으면 주간 요약 샘플 템플릿 생성."""
    result = await email_template_service.init_templates(db)
    await db.commit()
    if "template" in result:
        result["template"] = EmailTemplateOut.model_validate(result["template"])
    return result


@router.get("/template-data")
async def get_template_data(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """플레이스홀더 치환용 대시보드 데이터."""
    return await email_template_service.get_template_data(db)


@router.get("/{template_id}", response_model=EmailTemplateOut)
async def get_template(
    template_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailTemplateOut:
    template = await email_template_service.get_template(db, template_id)
    return EmailTemplateOut.model_validate(template)


@router.put("/{template_id}", response_model=EmailTemplateOut)
async def replace_template(
    template_id: str,
    data: EmailTemplateWrite,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmailTemplateOut:
    """템플릿 전체 교체."""
    template = await email_template_service.replace_template(db, template_id, data)
    await db.commit()
    return EmailTemplateOut.model_validate(template)


@router.delete("/{template_id}", response_model=MessageResponse)
async def delete_template(
    template_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await email_template_service.delete_template(db, template_id)
    await db.commit()
    return {"success": True, "message": "Template deleted successfully"}


@router.post("/{template_id}/render", response_model=RenderedEmail)
async def render_template(
    template_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RenderedEmail:
    """현재 데이터로 제목/본문 플레이스홀더를 치환합니다."""
    rendered = await email_template_service.render_template(db, template_id)
    return RenderedEmail(**rendered)

"""AI 라우터 — 이메일 도우미와 ERP 현황 채팅.

AI Router.
    - POST /email: 이메일 초안에 AI 액션 적용
    - POST /chat: 현재 ERP 현황을 아는 대화형 이메일 도우미
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.ai import AIChatRequest, AIChatResponse, AIEmailRequest, AIEmailResponse
from erp_hub.services.ai_chat_service import ai_chat_service
from erp_hub.services.ai_email_service import ai_email_service

router: APIRouter = APIRouter()


@router.post("/email", response_model=AIEmailResponse)
async def process_email(data: AIEmailRequest) -> AIEmailResponse:
    """이메일 초안에 AI 액션 적용 (improve, shorten, formal, ...)."""
    result = await ai_email_service.process(data.action, data.content, data.context)
    return AIEmailResponse(**result)


@router.post("/chat", response_model=AIChatResponse)
async def chat(
    data: AIChatRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AIChatResponse:
    """대화 기록과 새 메시지를 받아 답변과 갱신된 기록을 반환."""
    result = await ai_chat_service.chat(
        db,
        data.message,
        [m.model_dump() for m in data.conversation],
    )
    return AIChatResponse(**result)

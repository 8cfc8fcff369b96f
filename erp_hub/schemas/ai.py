"""AI 이메일 도우미 Pydantic 스키마."""

from typing import Any, Literal

from erp_hub.schemas.common import CamelModel


class AIEmailRequest(CamelModel):
    action: str | None = None
    content: str | None = None
    context: dict[str, Any] | None = None


class AIEmailResponse(CamelModel):
    action: str
    original_content: str
    result: str
    usage: dict[str, Any] | None = None


class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class AIChatRequest(CamelModel):
    message: str | None = None
    conversation: list[ChatMessage] = []


class AIChatResponse(CamelModel):
    message: str
    conversation: list[ChatMessage]
    context: dict[str, Any]
    usage: dict[str, Any] | None = None

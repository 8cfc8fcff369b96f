"""AI ERP 채팅 서비스 — 현재 이슈 현황을 system prompt에 담은 대화형 도우미.

AI chat service. Every turn re-reads the ERP status (the same data the
email templates render from) and sends it with the running conversation.
The caller owns the conversation history; the reply is appended to it and
returned.
"""

import logging
from typing import Any, Sequence

from openai import OpenAIError
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.config import settings
from erp_hub.services.email_template_service import email_template_service
from erp_hub.utils.exceptions import BadRequestError, ServerError, ServiceUnavailableError
from erp_hub.utils.openai_client import get_openai_client, is_openai_enabled

logger = logging.getLogger(__name__)

CHAT_SYSTEM_PROMPT: str = """You are an ERP Email Assistant helping users write professional emails for the core team.

CURRENT ERP SYSTEM CONTEXT:
{context}

IMPORTANT GUIDELINES:
- The audience is always the core team
- NEVER use the word "stakeholders" in any emails - refer to them as "team members", "core team", or "leadership team"
- Default to a professional but approachable tone unless specified otherwise

Your role:
- Help users draft emails about ERP status, issues, and updates
- Ask clarifying questions to understand what they want to communicate
- Suggest relevant information to include based on current ERP data
- Generate email drafts when requested
- Focus on the most important and recent information

Keep responses concise and actionable."""


def _issue_lines(issues: Sequence[dict[str, Any]], template: str) -> str:
    return "\n".join(template.format(**issue) for issue in issues) or "None"


def format_erp_context(data: dict[str, Any]) -> str:
    """템플릿 데이터를 프롬프트용 텍스트로 변환합니다."""
    stats = data["stats"]
    return (
        f"CURRENT DATE: {data['currentDate']}\n"
        f"CURRENT WEEK: {data['currentWeek']}\n\n"
        "ISSUE STATISTICS:\n"
        f"- Total Issues: {stats['total']}\n"
        f"- Open: {stats['open']}\n"
        f"- In Progress: {stats['inProgress']}\n"
        f"- Resolved: {stats['resolved']}\n"
        f"- High Priority: {stats['highPriority']}\n\n"
        f"NEW ISSUES THIS WEEK: {stats['newThisWeek']}\n"
        f"RESOLVED THIS WEEK: {stats['resolvedThisWeek']}\n\n"
        "CURRENT OPEN ISSUES:\n"
        + _issue_lines(data["openIssues"], "- {title} ({priority}) - Created: {createdAt}")
        + "\n\nCURRENT IN-PROGRESS ISSUES:\n"
        + _issue_lines(
            [{**i, "assignedTo": i["assignedTo"] or "Unassigned"} for i in data["inProgressIssues"]],
            "- {title} ({priority}) - Assigned: {assignedTo}",
        )
        + "\n\nHIGH PRIORITY ISSUES:\n"
        + _issue_lines(data["highPriorityIssues"], "- {title} ({status}) - {category}")
        + "\n\nUse this information to help users write informed emails about the ERP system status.\n"
    )


class AIChatService:

    async def chat(
        self,
        db: AsyncSession,
        message: str | None,
        conversation: Sequence[dict[str, str]] = (),
    ) -> dict[str, Any]:
        if not is_openai_enabled():
            raise ServiceUnavailableError("AI features are disabled. OpenAI API key not configured.")
        if not message:
            raise BadRequestError("Message is required")

        client = get_openai_client()
        if client is None:
            raise ServerError("Failed to initialize OpenAI client")

        context = await email_template_service.get_template_data(db)
        messages = [
            {"role": "system", "content": CHAT_SYSTEM_PROMPT.format(context=format_erp_context(context))},
            *({"role": m["role"], "content": m["content"]} for m in conversation),
            {"role": "user", "content": message},
        ]

        try:
            response = await client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=messages,
                temperature=0.7,
                max_tokens=1000,
            )
        except OpenAIError:
            logger.exception("AI chat error")
            raise ServerError("AI chat failed")

        reply = response.choices[0].message.content if response.choices else None
        if not reply:
            raise ServerError("No response generated from AI")

        return {
            "message": reply,
            "conversation": [
                *conversation,
                {"role": "user", "content": message},
                {"role": "assistant", "content": reply},
            ],
            "context": context,
            "usage": response.usage.model_dump() if response.usage else None,
        }


ai_chat_service: AIChatService = AIChatService()

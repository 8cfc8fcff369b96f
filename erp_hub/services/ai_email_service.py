"""AI 이메일 도우미 서비스 — OpenAI Chat Completions 기반 초안 편집.

AI email assistant service. Each action maps to a prompt template;
``custom`` takes its instruction from ``context["instruction"]``.
"""

import logging
from typing import Any

from openai import OpenAIError

from erp_hub.config import settings
from erp_hub.utils.exceptions import BadRequestError, ServerError, ServiceUnavailableError
from erp_hub.utils.openai_client import get_openai_client, is_openai_enabled

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT: str = (
    "You are an expert email communication assistant for ERP system administrators. "
    "Provide professional, clear, and actionable responses."
)
ANALYST_SYSTEM_PROMPT: str = (
    "You are an expert email communication analyst. "
    "Provide constructive feedback with specific, actionable recommendations."
)

ACTION_PROMPTS: dict[str, str] = {
    "improve": (
        "Please improve this email draft while maintaining its professional tone and key information. "
        "Focus on clarity, structure, and readability:\n\n{content}"
    ),
    "shorten": "Please make this email more concise while preserving all essential information:\n\n{content}",
    "formal": "Please rewrite this email in a more formal, professional tone:\n\n{content}",
    "conversational": (
        "Please rewrite this email in a more conversational, friendly tone "
        "while maintaining professionalism:\n\n{content}"
    ),
    "analyze": (
        "Please analyze this email draft and provide feedback on:\n"
        "1. Clarity and readability\n2. Professional tone\n3. Structure and organization\n"
        "4. Completeness of information\n5. Suggested improvements\n\nEmail content:\n{content}"
    ),
    "generate_subject": (
        "Based on this email content, suggest 3 professional subject lines that are clear, "
        "specific, and compelling:\n\n{content}"
    ),
    "grammar_check": (
        "Please check this email for grammar, spelling, and punctuation errors. "
        "Provide the corrected version and list any changes made:\n\n{content}"
    ),
    "custom": "{instruction}\n\nEmail content:\n{content}",
}

SUPPORTED_ACTIONS: tuple[str, ...] = tuple(ACTION_PROMPTS)


class AIEmailService:

    def build_messages(self, action: str, content: str, context: dict[str, Any] | None) -> list[dict[str, str]]:
        """액션별 system/user 메시지를 구성합니다. 잘못된 요청은 400."""
        if action not in ACTION_PROMPTS:
            raise BadRequestError(
                f"Unknown action: {action}. Supported actions: {', '.join(SUPPORTED_ACTIONS)}"
            )
        instruction = (context or {}).get("instruction")
        if action == "custom" and not instruction:
            raise BadRequestError("Custom action requires an instruction in context")

        system_prompt = ANALYST_SYSTEM_PROMPT if action == "analyze" else DEFAULT_SYSTEM_PROMPT
        prompt = ACTION_PROMPTS[action].format(content=content, instruction=instruction or "")
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]

    async def process(
        self,
        action: str | None,
        content: str | None,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if not is_openai_enabled():
            raise ServiceUnavailableError("AI features are disabled. OpenAI API key not configured.")
        if not action or not content:
            raise BadRequestError("Missing required fields: action and content")

        messages = self.build_messages(action, content, context)
        client = get_openai_client()
        if client is None:
            raise ServerError("Failed to initialize OpenAI client")

        try:
            response = await client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=messages,
                temperature=0.7,
                max_tokens=2000,
            )
        except OpenAIError:
            logger.exception("AI email processing error (action=%s)", action)
            raise ServerError("AI processing failed")

        result = response.choices[0].message.content if response.choices else None
        if not result:
            raise ServerError("No response generated from OpenAI")

        return {
            "action": action,
            "original_content": content,
            "result": result,
            "usage": response.usage.model_dump() if response.usage else None,
        }


ai_email_service: AIEmailService = AIEmailService()

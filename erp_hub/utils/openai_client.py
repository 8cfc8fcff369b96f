"""OpenAI 클라이언트 초기화 — API 키가 있을 때만 생성.

Lazy OpenAI client holder. Without OPENAI_API_KEY every AI feature is
disabled and ``get_openai_client()`` returns None.
"""

import logging

from openai import AsyncOpenAI

from erp_hub.config import settings

logger = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None


def is_openai_enabled() -> bool:
    return bool(settings.OPENAI_API_KEY)


def get_openai_client() -> AsyncOpenAI | None:
    """캐시된 클라이언트를 반환하거나 처음 호출 시 생성합니다."""
    global _client
    if not is_openai_enabled():
        logger.warning("OpenAI API key not found. AI features will be disabled.")
        return None
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        logger.info("OpenAI client initialized")
    return _client


def reset_openai_client() -> None:
    """캐시된 클라이언트를 버립니다 (키 교체 후 재생성용)."""
    global _client
    _client = None

"""Axiom 요청 로깅 미들웨어.

Axiom request logging middleware.
Every API call is sent to Axiom as one structured event: method, path,
query/body data, status code, duration and the ``error`` message of failed
responses. Credential-like fields are masked; multipart uploads are logged
by content type only.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from erp_hub.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 — Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_?key|credential|code|state)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_ERROR_LEN = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 (Recursively mask sensitive fields)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > 2000:
        return data[:2000] + "...(truncated)"
    return data


def _error_message(body: bytes) -> str:
    """오류 응답 본문에서 "error" 메시지 추출."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]
    message = payload.get("error", payload) if isinstance(payload, dict) else payload
    message = message if isinstance(message, str) else json.dumps(message, default=str)
    return message[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """API 요청/응답을 Axiom 데이터셋에 기록합니다. 미설정 시 패스스루."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("multipart/"):
            return "(multipart upload)"
        body_bytes = await request.body()
        if not body_bytes:
            return None
        try:
            return _mask(json.loads(body_bytes))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None
        request_body = await self._read_body(request) if method in ("POST", "PUT", "PATCH") else None

        error_message: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 오류 응답은 본문을 소비하므로 다시 감싸서 반환 (re-wrap consumed body)
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_message = _error_message(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_message = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "service": settings.APP_NAME,
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = _mask(query_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_message:
                log_event["error"] = error_message

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                # 로깅 실패가 요청 처리에 영향주지 않도록 (never break a request on log failure)
                logger.warning("Axiom ingest failed for %s %s", method, path, exc_info=True)

        return response

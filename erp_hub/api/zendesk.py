"""Zendesk 라우터 — 티켓 조회 API와 OAuth 인가 흐름.

Zendesk Router.
    - GET ?action=test|stats|tickets|search: REST API 프록시 (미설정 시 503)
    - GET /oauth/authorize: Zendesk 인가 페이지로 302 리다이렉트
    - GET /oauth/callback: 인가 코드를 토큰으로 교환

The OAuth state value is kept in an HttpOnly cookie by /authorize and must
match the ``state`` query parameter on /callback.
"""

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from erp_hub.services.zendesk_service import ZendeskError, zendesk_service
from erp_hub.utils.exceptions import BadRequestError, ServerError, ServiceUnavailableError

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()

OAUTH_STATE_COOKIE: str = "zendesk_oauth_state"
OAUTH_STATE_MAX_AGE: int = 600


def _split(value: str | None) -> list[str] | None:
    return [v for v in value.split(",") if v] if value else None


@router.get("")
async def zendesk_query(
    action: str | None = Query(None),
    status: str | None = Query(None),
    priority: str | None = Query(None),
    limit: int | None = Query(None),
    recent: int | None = Query(None),
    high_priority: bool = Query(False),
    erp_only: bool = Query(False),
    query: str | None = Query(None),
) -> dict[str, Any]:
    """action에 따라 연결 테스트, 통계, 티켓 목록, 검색을 수행합니다."""
    if not zendesk_service.is_configured():
        raise ServiceUnavailableError(
            "Zendesk integration is not configured. Please set ZENDESK_SUBDOMAIN and ZENDESK_API_TOKEN."
        )

    try:
        if action == "test":
            return await zendesk_service.test_connection()
        if action == "stats":
            return await zendesk_service.get_ticket_stats()
        if action == "tickets":
            if recent:
                tickets = await zendesk_service.get_recent_tickets(recent)
            elif high_priority:
                tickets = await zendesk_service.get_high_priority_tickets()
            elif erp_only:
                tickets = await zendesk_service.get_erp_support_tickets()
            else:
                tickets = await zendesk_service.get_tickets(
                    status=_split(status),
                    priority=_split(priority),
                    limit=limit,
                    sort_by="updated_at",
                    sort_order="desc",
                )
            return {"tickets": tickets}
        if action == "search":
            if not query:
                raise BadRequestError("Search query is required")
            return {"tickets": await zendesk_service.search_tickets(query)}
    except ZendeskError:
        logger.exception("Zendesk API error (action=%s)", action)
        raise ServerError("Failed to fetch Zendesk data")

    raise BadRequestError("Invalid action. Supported actions: test, stats, tickets, search")


@router.get("/oauth/authorize")
async def oauth_authorize() -> RedirectResponse:
    """Zendesk OAuth 인가 페이지로 리다이렉트합니다."""
    if not zendesk_service.is_oauth_configured():
        raise ServerError("OAuth configuration is incomplete. Please check your environment variables.")

    state = secrets.token_urlsafe(24)
    response = RedirectResponse(zendesk_service.build_authorize_url(state), status_code=302)
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/oauth/callback")
async def oauth_callback(
    request: Request,
    code: str | None = Query(None),
    state: str | None = Query(None),
    error: str | None = Query(None),
    error_description: str | None = Query(None),
) -> JSONResponse:
    """인가 코드를 액세스 토큰으로 교환하고 결과를 반환합니다."""
    if error:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "OAuth authorization failed",
                "details": error,
                "description": error_description,
            },
        )
    if not code:
        raise BadRequestError("Authorization code is missing")

    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    # str compare_digest는 non-ASCII 입력에서 TypeError이므로 bytes로 비교
    if not expected_state or not state or not secrets.compare_digest(
        expected_state.encode("utf-8"), state.encode("utf-8")
    ):
        raise BadRequestError("Invalid OAuth state")

    if not zendesk_service.is_oauth_configured(require_secret=True):
        raise ServerError("OAuth configuration is incomplete")

    try:
        tokens = await zendesk_service.exchange_code(code)
    except ZendeskError:
        logger.exception("Zendesk OAuth token exchange failed")
        raise ServerError("Failed to exchange authorization code")

    token_type = tokens.get("token_type", "bearer")
    user = None
    if tokens.get("access_token"):
        user = await zendesk_service.fetch_oauth_user(token_type, tokens["access_token"])

    response = JSONResponse(
        content={
            "success": True,
            "tokenType": token_type,
            "scope": tokens.get("scope"),
            "hasRefreshToken": bool(tokens.get("refresh_token")),
            "accessToken": tokens.get("access_token"),
            "user": {"name": user.get("name"), "email": user.get("email")} if user else None,
            "message": "Set ZENDESK_OAUTH_ACCESS_TOKEN to the access token to enable API calls.",
        }
    )
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return response

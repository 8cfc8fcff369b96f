"""Zendesk 연동 서비스 — REST API 조회와 OAuth 코드 교환.

Zendesk integration service.

Authentication header precedence:
    1. ZENDESK_OAUTH_ACCESS_TOKEN -> Bearer <oauth token>
    2. ZENDESK_API_EMAIL + ZENDESK_API_TOKEN -> Basic base64("{email}/token:{token}")
    3. ZENDESK_API_TOKEN only -> Bearer <api token>

``transport`` can be replaced with ``httpx.MockTransport`` in tests.
"""

import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence
from urllib.parse import urlencode

import httpx

from erp_hub.config import settings

logger = logging.getLogger(__name__)

OAUTH_SCOPE: str = "read write"
OPEN_TICKET_STATUSES: tuple[str, ...] = ("new", "open", "pending")
ERP_SEARCH_QUERIES: tuple[str, ...] = (
    "tags:erp",
    "tags:enterprise",
    "tags:system",
    '"ERP" type:ticket',
    '"enterprise resource planning" type:ticket',
)


class ZendeskError(Exception):
    """Zendesk API 호출 실패."""


def empty_ticket_stats() -> dict[str, int]:
    return {
        "total": 0,
        "open": 0,
        "pending": 0,
        "solved": 0,
        "closed": 0,
        "new": 0,
        "high_priority": 0,
        "urgent_priority": 0,
    }


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class ZendeskService:

    def __init__(self) -> None:
        self.transport: httpx.AsyncBaseTransport | None = None

    # --- 설정 (Configuration) ---

    @property
    def base_url(self) -> str:
        return f"https://{settings.ZENDESK_SUBDOMAIN}.zendesk.com/api/v2"

    def is_configured(self) -> bool:
        return bool(
            settings.ZENDESK_SUBDOMAIN
            and (settings.ZENDESK_API_TOKEN or settings.ZENDESK_OAUTH_ACCESS_TOKEN)
        )

    def is_oauth_configured(self, require_secret: bool = False) -> bool:
        required = [
            settings.ZENDESK_OAUTH_CLIENT_ID,
            settings.ZENDESK_OAUTH_REDIRECT_URI,
            settings.ZENDESK_SUBDOMAIN,
        ]
        if require_secret:
            required.append(settings.ZENDESK_OAUTH_CLIENT_SECRET)
        return all(required)

    def auth_headers(self) -> dict[str, str]:
        if settings.ZENDESK_OAUTH_ACCESS_TOKEN:
            return {"Authorization": f"Bearer {settings.ZENDESK_OAUTH_ACCESS_TOKEN}"}
        if not settings.ZENDESK_API_TOKEN:
            raise ZendeskError("No Zendesk authentication configured")
        if settings.ZENDESK_API_EMAIL:
            raw = f"{settings.ZENDESK_API_EMAIL}/token:{settings.ZENDESK_API_TOKEN}"
            return {"Authorization": f"Basic {base64.b64encode(raw.encode('utf-8')).decode('ascii')}"}
        return {"Authorization": f"Bearer {settings.ZENDESK_API_TOKEN}"}

    def _client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=settings.ZENDESK_TIMEOUT_SECONDS,
            transport=self.transport,
            **kwargs,
        )

    async def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self.is_configured():
            raise ZendeskError("Zendesk is not configured")
        try:
            async with self._client(base_url=self.base_url, headers=self.auth_headers()) as client:
                response = await client.get(endpoint, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ZendeskError(
                f"Zendesk API error: {exc.response.status_code} - {exc.response.text[:300]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ZendeskError(f"Zendesk request failed: {exc}") from exc
        except ValueError as exc:
            # JSON이 아닌 200 응답 (maintenance page 등)
            raise ZendeskError(f"Zendesk returned an invalid response: {exc}") from exc
        if not isinstance(data, dict):
            raise ZendeskError("Zendesk returned an unexpected response body")
        return data

    # --- 티켓 조회 (Tickets) ---

    async def test_connection(self) -> dict[str, Any]:
        try:
            data = await self._get("/users/me.json")
        except ZendeskError as exc:
            return {"success": False, "error": str(exc)}
        return {"success": True, "user": data.get("user")}

    async def get_tickets(
        self,
        status: Sequence[str] | None = None,
        priority: Sequence[str] | None = None,
        limit: int | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        created_after: datetime | None = None,
        updated_after: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """티켓 목록 — 상태/우선순위/시간 필터는 응답 후 적용."""
        params: dict[str, Any] = {}
        if limit:
            params["per_page"] = limit
        if sort_by:
            params["sort_by"] = sort_by
        if sort_order:
            params["sort_order"] = sort_order

        tickets: list[dict[str, Any]] = (await self._get("/tickets.json", params or None)).get("tickets") or []

        if status:
            tickets = [t for t in tickets if t.get("status") in status]
        if priority:
            tickets = [t for t in tickets if t.get("priority") in priority]
        if created_after:
            tickets = [t for t in tickets if (_parse_time(t.get("created_at")) or created_after) > created_after]
        if updated_after:
            tickets = [t for t in tickets if (_parse_time(t.get("updated_at")) or updated_after) > updated_after]
        return tickets

    async def get_ticket_by_id(self, ticket_id: int) -> dict[str, Any] | None:
        return (await self._get(f"/tickets/{ticket_id}.json")).get("ticket")

    async def get_recent_tickets(self, days: int = 7) -> list[dict[str, Any]]:
        threshold = datetime.now(timezone.utc) - timedelta(days=days)
        return await self.get_tickets(created_after=threshold, sort_by="created_at", sort_order="desc")

    async def get_high_priority_tickets(self) -> list[dict[str, Any]]:
        return await self.get_tickets(
            priority=["urgent", "high"],
            status=list(OPEN_TICKET_STATUSES),
            sort_by="priority",
            sort_order="desc",
        )

    async def search_tickets(self, query: str) -> list[dict[str, Any]]:
        data = await self._get(
            "/search.json",
            {"query": query, "sort_by": "created_at", "sort_order": "desc"},
        )
        return [r for r in data.get("results") or [] if r.get("result_type") == "ticket"]

    async def get_erp_support_tickets(self) -> list[dict[str, Any]]:
        """ERP 관련 태그/키워드 검색 결과 — 티켓 id 기준 중복 제거."""
        seen: dict[Any, dict[str, Any]] = {}
        for query in ERP_SEARCH_QUERIES:
            try:
                for ticket in await self.search_tickets(query):
                    seen.setdefault(ticket.get("id"), ticket)
            except ZendeskError:
                logger.warning("Zendesk search failed for query %r", query)
        return list(seen.values())

    async def get_ticket_stats(self) -> dict[str, int]:
        """상태별/우선순위별 티켓 수. 실패 시 0으로 채운 통계."""
        try:
            tickets = await self.get_tickets()
        except ZendeskError:
            logger.exception("Error fetching Zendesk stats")
            return empty_ticket_stats()

        stats = empty_ticket_stats()
        for ticket in tickets:
            status = ticket.get("status")
            if status in ("open", "pending", "solved", "closed", "new"):
                stats[status] += 1
                stats["total"] += 1
            if status in OPEN_TICKET_STATUSES:
                if ticket.get("priority") == "high":
                    stats["high_priority"] += 1
                elif ticket.get("priority") == "urgent":
                    stats["urgent_priority"] += 1
        return stats

    # --- OAuth ---

    def build_authorize_url(self, state: str) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": settings.ZENDESK_OAUTH_CLIENT_ID,
                "redirect_uri": settings.ZENDESK_OAUTH_REDIRECT_URI,
                "scope": OAUTH_SCOPE,
                "state": state,
            }
        )
        return f"https://{settings.ZENDESK_SUBDOMAIN}.zendesk.com/oauth/authorizations/new?{query}"

    async def exchange_code(self, code: str) -> dict[str, Any]:
        """인가 코드를 액세스 토큰으로 교환합니다.

        Raises:
            ZendeskError: 토큰 엔드포인트 오류 또는 네트워크 실패 시
        """
        token_url = f"https://{settings.ZENDESK_SUBDOMAIN}.zendesk.com/oauth/tokens"
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": settings.ZENDESK_OAUTH_CLIENT_ID,
            "client_secret": settings.ZENDESK_OAUTH_CLIENT_SECRET,
            "redirect_uri": settings.ZENDESK_OAUTH_REDIRECT_URI,
            "scope": OAUTH_SCOPE,
        }
        try:
            async with self._client() as client:
                response = await client.post(token_url, json=payload)
                response.raise_for_status()
                tokens = response.json()
        except httpx.HTTPStatusError as exc:
            raise ZendeskError(
                f"Token exchange failed: {exc.response.status_code} - {exc.response.text[:300]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ZendeskError(f"Token exchange failed: {exc}") from exc
        except ValueError as exc:
            raise ZendeskError(f"Token exchange returned an invalid response: {exc}") from exc
        if not isinstance(tokens, dict):
            raise ZendeskError("Token exchange returned an unexpected response body")
        return tokens

    async def fetch_oauth_user(self, token_type: str, access_token: str) -> dict[str, Any] | None:
        """발급받은 토큰으로 /users/me 확인 — 실패하면 None."""
        try:
            async with self._client(base_url=self.base_url) as client:
                response = await client.get(
                    "/users/me.json",
                    headers={"Authorization": f"{token_type} {access_token}"},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Zendesk OAuth token verification failed")
            return None
        return data.get("user") if isinstance(data, dict) else None


zendesk_service: ZendeskService = ZendeskService()

"""대시보드 서비스 — 활성 이슈 통계 스냅샷과 캐시 무효화.

Dashboard service — builds the active-issue snapshot rendered by the
/dashboard page and keeps it in a small in-process cache. Issue and category
routes call ``revalidate("/dashboard")`` after they commit so the next page
view rebuilds it.
"""

import logging
import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.config import settings
from erp_hub.repositories.category_repository import category_repository
from erp_hub.repositories.issue_repository import issue_repository

logger = logging.getLogger(__name__)

DASHBOARD_PATH: str = "/dashboard"


class DashboardService:

    def __init__(self) -> None:
        # path -> (만료 시각 monotonic, 스냅샷)
        self._cache: dict[str, tuple[float, dict[str, Any]]] = {}

    def revalidate(self, path: str = DASHBOARD_PATH) -> None:
        """캐시된 뷰를 무효화합니다. 다음 조회 시 다시 계산."""
        if self._cache.pop(path, None) is not None:
            logger.debug("Invalidated cached view %s", path)

    def is_cached(self, path: str = DASHBOARD_PATH) -> bool:
        entry = self._cache.get(path)
        return entry is not None and entry[0] > time.monotonic()

    async def get_snapshot(self, db: AsyncSession) -> dict[str, Any]:
        cached = self._cache.get(DASHBOARD_PATH)
        if cached is not None and cached[0] > time.monotonic():
            return cached[1]

        snapshot = await self._build_snapshot(db)
        self._cache[DASHBOARD_PATH] = (time.monotonic() + settings.DASHBOARD_CACHE_TTL_SECONDS, snapshot)
        return snapshot

    async def _build_snapshot(self, db: AsyncSession) -> dict[str, Any]:
        issues = await issue_repository.list_by_status_group(db, None)
        counts, latest = await issue_repository.note_summaries(db, [i.id for i in issues])
        categories = await category_repository.list_with_issue_counts(db)

        rows = [
            {
                "id": issue.id,
                "title": issue.title,
                "priority": issue.priority,
                "status": issue.status,
                "category_name": issue.category.name if issue.category else None,
                "category_color": issue.category.color if issue.category else None,
                "assigned_to": issue.assigned_to,
                "note_count": counts.get(issue.id, 0),
                "latest_note": latest[issue.id].content if issue.id in latest else None,
                "updated_at": issue.updated_at,
            }
            for issue in issues
        ]
        stats = {
            "total": len(rows),
            "open": sum(1 for r in rows if r["status"] == "OPEN"),
            "in_progress": sum(1 for r in rows if r["status"] == "IN_PROGRESS"),
            "urgent": sum(1 for r in rows if r["priority"] == "URGENT"),
            "high": sum(1 for r in rows if r["priority"] == "HIGH"),
        }
        return {
            "stats": stats,
            "issues": rows,
            "categories": [
                {"id": c.id, "name": c.name, "color": c.color, "issue_count": n}
                for c, n in categories
            ],
        }


dashboard_service: DashboardService = DashboardService()

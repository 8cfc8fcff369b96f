"""서버 렌더링 페이지 테스트."""

from httpx import AsyncClient

from erp_hub.services.dashboard_service import dashboard_service
from tests.conftest import make_issue, make_note


class TestDashboardPage:
    """대시보드 HTML 테스트."""

    async def test_dashboard_lists_active_issues(self, client: AsyncClient, db, issue):
        await make_issue(db, title="<script>alert(1)</script>", priority="URGENT")
        await make_issue(db, title="Resolved one", status="RESOLVED")

        res = await client.get("/dashboard")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        html = res.text
        assert "Payroll export fails" in html
        assert "Resolved one" not in html
        assert "&lt;script&gt;" in html
        assert "<script>alert(1)</script>" not in html
        assert f'href="/dashboard/{issue.id}"' in html

    async def test_dashboard_snapshot_is_cached(self, client: AsyncClient, db):
        """스냅샷은 캐시되며, 이슈 쓰기 API가 무효화."""
        await client.get("/dashboard")
        assert dashboard_service.is_cached()

        # 직접 DB에 넣은 이슈는 캐시 때문에 아직 보이지 않음
        await make_issue(db, title="Sneaky insert")
        assert "Sneaky insert" not in (await client.get("/dashboard")).text

        await client.post("/api/issues", json={"title": "Via API"})
        html = (await client.get("/dashboard")).text
        assert "Sneaky insert" in html
        assert "Via API" in html

    async def test_root_redirects(self, client: AsyncClient):
        res = await client.get("/")
        assert res.status_code == 307
        assert res.headers["location"] == "/dashboard"


class TestIssuePage:
    """이슈 상세 HTML 테스트."""

    async def test_issue_page(self, client: AsyncClient, db, issue):
        await make_note(db, issue.id, content="Line one\nLine two", author="Dana")

        res = await client.get(f"/dashboard/{issue.id}")
        assert res.status_code == 200
        html = res.text
        assert "<h1>Payroll export fails</h1>" in html
        assert "Finance" in html
        assert "Line one<br>Line two" in html
        assert "Dana" in html
        assert "Notes (1)" in html

    async def test_issue_page_not_found(self, client: AsyncClient):
        res = await client.get("/dashboard/missing")
        assert res.status_code == 404
        assert "Issue not found" in res.text


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.json() == {"status": "ok"}

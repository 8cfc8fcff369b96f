"""이메일 템플릿 API 테스트.

Email template tests — CRUD, single default rule, sample seeding,
template data and placeholder rendering.
"""

from datetime import datetime, timedelta, timezone

import httpx
from httpx import AsyncClient

from erp_hub.config import settings
from erp_hub.services.email_template_service import render_placeholders
from erp_hub.services.zendesk_service import empty_ticket_stats, zendesk_service
from tests.conftest import make_issue

URL = "/api/email-templates"

TEMPLATE = {
    "name": "Status",
    "subject": "Status for {{currentWeek}}",
    "content": "Open: {{stats.open}}\n{{openIssues}}",
    "variables": {"stats.open": "Number of open issues"},
}


class TestTemplateCrud:
    """템플릿 CRUD 테스트."""

    async def test_create_and_get(self, client: AsyncClient):
        res = await client.post(URL, json=TEMPLATE)
        assert res.status_code == 201
        created = res.json()
        assert created["isDefault"] is False
        assert created["variables"] == {"stats.open": "Number of open issues"}

        fetched = await client.get(f"{URL}/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Status"

    async def test_create_requires_fields(self, client: AsyncClient):
        res = await client.post(URL, json={"name": "No subject", "content": "x"})
        assert res.status_code == 400
        assert "subject" in res.json()["errors"]

    async def test_list_default_first_then_name(self, client: AsyncClient):
        await client.post(URL, json={**TEMPLATE, "name": "Zeta", "isDefault": True})
        await client.post(URL, json={**TEMPLATE, "name": "Beta"})
        await client.post(URL, json={**TEMPLATE, "name": "Alpha"})

        names = [t["name"] for t in (await client.get(URL)).json()]
        assert names == ["Zeta", "Alpha", "Beta"]

    async def test_single_default_on_create(self, client: AsyncClient):
        """새 기본 템플릿을 만들면 기존 기본은 해제."""
        first = (await client.post(URL, json={**TEMPLATE, "name": "One", "isDefault": True})).json()
        second = (await client.post(URL, json={**TEMPLATE, "name": "Two", "isDefault": True})).json()

        templates = {t["id"]: t for t in (await client.get(URL)).json()}
        assert templates[second["id"]]["isDefault"] is True
        assert templates[first["id"]]["isDefault"] is False

    async def test_single_default_on_replace(self, client: AsyncClient):
        first = (await client.post(URL, json={**TEMPLATE, "name": "One", "isDefault": True})).json()
        second = (await client.post(URL, json={**TEMPLATE, "name": "Two"})).json()

        res = await client.put(f"{URL}/{second['id']}", json={**TEMPLATE, "name": "Two", "isDefault": True})
        assert res.status_code == 200
        defaults = [t["id"] for t in (await client.get(URL)).json() if t["isDefault"]]
        assert defaults == [second["id"]]
        assert first["id"] not in defaults

    async def test_replace_overwrites_omitted_fields(self, client: AsyncClient):
        """PUT은 전체 교체 — 빠진 description/isDefault는 기본값으로."""
        created = (await client.post(URL, json={**TEMPLATE, "description": "desc", "isDefault": True})).json()
        res = await client.put(f"{URL}/{created['id']}", json={
            "name": "Renamed",
            "subject": "S",
            "content": "C",
        })
        data = res.json()
        assert data["name"] == "Renamed"
        assert data["description"] is None
        assert data["isDefault"] is False
        assert data["variables"] is None

    async def test_replace_not_found(self, client: AsyncClient):
        res = await client.put(f"{URL}/missing", json=TEMPLATE)
        assert res.status_code == 404
        assert res.json()["error"] == "Template not found"

    async def test_delete(self, client: AsyncClient):
        created = (await client.post(URL, json=TEMPLATE)).json()
        res = await client.delete(f"{URL}/{created['id']}")
        assert res.status_code == 200
        assert res.json()["success"] is True
        assert (await client.get(f"{URL}/{created['id']}")).status_code == 404

    async def test_delete_keeps_drafts(self, client: AsyncClient):
        """템플릿 삭제 시 초안은 남고 templateId만 비워짐."""
        template = (await client.post(URL, json=TEMPLATE)).json()
        draft = (await client.post("/api/email-drafts", json={
            "subject": "Hi",
            "content": "Body",
            "templateId": template["id"],
        })).json()

        await client.delete(f"{URL}/{template['id']}")
        res = await client.get(f"/api/email-drafts/{draft['id']}")
        assert res.status_code == 200
        assert res.json()["templateId"] is None
        assert res.json()["template"] is None


class TestTemplateInit:
    """샘플 템플릿 초기화 테스트."""

    async def test_init_creates_sample_once(self, client: AsyncClient):
        res = await client.post(f"{URL}/init")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Sample template created successfully"
        assert data["template"]["name"] == "Weekly Summary Email"
        assert data["template"]["isDefault"] is True
        assert "stats.total" in data["template"]["variables"]

        again = (await client.post(f"{URL}/init")).json()
        assert again == {"message": "Templates already exist", "count": 1}


class TestTemplateData:
    """템플릿 데이터와 렌더링 테스트."""

    async def test_template_data_stats(self, client: AsyncClient, db, category):
        now = datetime.now(timezone.utc)
        await make_issue(db, title="Open high", priority="HIGH", category_id=category.id)
        await make_issue(db, title="Working", status="IN_PROGRESS")
        await make_issue(db, title="Fixed", status="RESOLVED", updated_at=now)
        await make_issue(db, title="Old fix", status="RESOLVED", updated_at=now - timedelta(days=30))
        await make_issue(db, title="Closed urgent", status="CLOSED", priority="URGENT")

        res = await client.get(f"{URL}/template-data")
        assert res.status_code == 200
        data = res.json()
        stats = data["stats"]
        assert stats["total"] == 5
        assert stats["open"] == 1
        assert stats["inProgress"] == 1
        assert stats["resolved"] == 2
        assert stats["closed"] == 1
        assert stats["resolvedThisWeek"] == 1
        assert stats["highPriority"] == 1
        assert [i["title"] for i in data["openIssues"]] == ["Open high"]
        assert data["openIssues"][0]["category"] == "Finance"
        assert [i["title"] for i in data["resolvedThisWeek"]] == ["Fixed"]
        assert data["categoryBreakdown"] == [{"name": "Finance", "count": 1, "color": "#3498db"}]
        assert data["zendesk"] is None
        assert " - " in data["currentWeek"]

    async def test_template_data_zendesk_non_json(self, client: AsyncClient, monkeypatch):
        """Zendesk가 HTML 점검 페이지를 200으로 반환해도 0으로 채운 통계."""
        monkeypatch.setattr(settings, "ZENDESK_SUBDOMAIN", "acme")
        monkeypatch.setattr(settings, "ZENDESK_API_TOKEN", "tok")
        zendesk_service.transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>maintenance</html>")
        )

        res = await client.get(f"{URL}/template-data")
        assert res.status_code == 200
        zendesk = res.json()["zendesk"]
        assert zendesk["stats"] == empty_ticket_stats()
        assert zendesk["recentTickets"] == []
        assert zendesk["highPriorityTickets"] == []

    async def test_render(self, client: AsyncClient, db):
        await make_issue(db, title="Vendor sync broken", priority="HIGH")
        template = (await client.post(URL, json=TEMPLATE)).json()

        res = await client.post(f"{URL}/{template['id']}/render")
        assert res.status_code == 200
        data = res.json()
        assert data["templateId"] == template["id"]
        assert "{{" not in data["subject"]
        assert data["content"] == "Open: 1\n- Vendor sync broken (HIGH, Uncategorized)"

    async def test_render_not_found(self, client: AsyncClient):
        res = await client.post(f"{URL}/missing/render")
        assert res.status_code == 404


class TestRenderPlaceholders:
    """플레이스홀더 치환 단위 테스트."""

    def test_nested_and_unknown(self):
        data = {"stats": {"open": 3}, "name": "Ops"}
        text = "{{name}}: {{ stats.open }} open, {{stats.missing}} {{unknown}}"
        assert render_placeholders(text, data) == "Ops: 3 open, {{stats.missing}} {{unknown}}"

    def test_empty_list(self):
        assert render_placeholders("{{items}}", {"items": []}) == "- None"

    def test_plain_list(self):
        assert render_placeholders("{{items}}", {"items": ["a", "b"]}) == "- a\n- b"

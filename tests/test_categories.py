"""카테고리 API 테스트."""

from httpx import AsyncClient

from erp_hub.services.dashboard_service import dashboard_service
from tests.conftest import make_issue

URL = "/api/categories"


class TestCategories:
    """카테고리 목록/생성 테스트."""

    async def test_list_sorted_by_name_with_counts(self, client: AsyncClient, db, category):
        """이름순 정렬, 이슈 수 포함 (보관 이슈도 집계)."""
        await make_issue(db, title="a", category_id=category.id)
        await make_issue(db, title="b", category_id=category.id, archived=True)
        await client.post(URL, json={"name": "Accounts Payable"})

        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()
        assert [c["name"] for c in data] == ["Accounts Payable", "Finance"]
        assert data[0]["issueCount"] == 0
        assert data[1]["issueCount"] == 2
        assert data[1]["color"] == "#3498db"

    async def test_create_category(self, client: AsyncClient):
        res = await client.post(URL, json={"name": "Payroll", "color": "#e74c3c"})
        assert res.status_code == 201
        data = res.json()
        assert data["success"] is True
        assert data["category"]["name"] == "Payroll"
        assert data["category"]["description"] is None

    async def test_create_category_requires_name(self, client: AsyncClient):
        """이름 누락/빈 문자열은 400."""
        assert (await client.post(URL, json={})).status_code == 400
        assert (await client.post(URL, json={"name": ""})).status_code == 400

    async def test_create_invalidates_dashboard(self, client: AsyncClient, db):
        await dashboard_service.get_snapshot(db)
        await client.post(URL, json={"name": "HR"})
        assert not dashboard_service.is_cached()

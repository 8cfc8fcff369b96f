"""이메일 초안 API 테스트."""

from httpx import AsyncClient

from tests.conftest import make_issue

URL = "/api/email-drafts"


class TestDraftCreate:
    """초안 생성 테스트."""

    async def test_create_with_issues(self, client: AsyncClient, issue):
        """연결 이슈와 카테고리, 수신자 목록 포함."""
        res = await client.post(URL, json={
            "subject": "Weekly update",
            "content": "Body",
            "recipients": ["cfo@example.com", "ops@example.com"],
            "issueIds": [issue.id, issue.id],
        })
        assert res.status_code == 200
        data = res.json()
        assert data["recipients"] == ["cfo@example.com", "ops@example.com"]
        assert data["template"] is None
        assert len(data["emailIssues"]) == 1
        linked = data["emailIssues"][0]
        assert linked["issueId"] == issue.id
        assert linked["issue"]["title"] == "Payroll export fails"
        assert linked["issue"]["category"]["name"] == "Finance"

    async def test_create_without_recipients(self, client: AsyncClient):
        res = await client.post(URL, json={"subject": "S", "content": "C"})
        assert res.status_code == 200
        assert res.json()["recipients"] is None
        assert res.json()["emailIssues"] == []

    async def test_create_requires_subject(self, client: AsyncClient):
        res = await client.post(URL, json={"content": "C"})
        assert res.status_code == 400

    async def test_create_unknown_template(self, client: AsyncClient):
        res = await client.post(URL, json={"subject": "S", "content": "C", "templateId": "missing"})
        assert res.status_code == 400
        assert res.json()["error"] == "Template not found"

    async def test_create_unknown_issue(self, client: AsyncClient):
        res = await client.post(URL, json={"subject": "S", "content": "C", "issueIds": ["missing"]})
        assert res.status_code == 400


class TestDraftReadUpdateDelete:
    """초안 조회/수정/삭제 테스트."""

    async def _create(self, client: AsyncClient, **extra) -> dict:
        body = {"subject": "Draft", "content": "Body", **extra}
        return (await client.post(URL, json=body)).json()

    async def test_list(self, client: AsyncClient):
        await self._create(client, subject="One")
        await self._create(client, subject="Two")
        res = await client.get(URL)
        assert res.status_code == 200
        assert {d["subject"] for d in res.json()} == {"One", "Two"}

    async def test_get_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/missing")
        assert res.status_code == 404
        assert res.json()["error"] == "Email draft not found"

    async def test_update_replaces_issue_links(self, client: AsyncClient, db, issue):
        """issueIds가 오면 연결을 통째로 교체."""
        other = await make_issue(db, title="Other")
        draft = await self._create(client, issueIds=[issue.id])

        res = await client.put(f"{URL}/{draft['id']}", json={"issueIds": [other.id]})
        assert res.status_code == 200
        assert [e["issueId"] for e in res.json()["emailIssues"]] == [other.id]

    async def test_update_without_issue_ids_keeps_links(self, client: AsyncClient, issue):
        draft = await self._create(client, issueIds=[issue.id])

        res = await client.put(f"{URL}/{draft['id']}", json={"subject": "Renamed"})
        data = res.json()
        assert data["subject"] == "Renamed"
        assert data["content"] == "Body"
        assert [e["issueId"] for e in data["emailIssues"]] == [issue.id]

    async def test_update_clear_recipients(self, client: AsyncClient):
        draft = await self._create(client, recipients=["a@example.com"])
        res = await client.put(f"{URL}/{draft['id']}", json={"recipients": []})
        assert res.json()["recipients"] is None

    async def test_update_not_found(self, client: AsyncClient):
        res = await client.put(f"{URL}/missing", json={"subject": "x"})
        assert res.status_code == 404

    async def test_delete(self, client: AsyncClient, issue):
        """초안 삭제 시 연결 행만 삭제되고 이슈는 유지."""
        draft = await self._create(client, issueIds=[issue.id])
        res = await client.delete(f"{URL}/{draft['id']}")
        assert res.status_code == 200
        assert res.json()["success"] is True

        assert (await client.get(f"{URL}/{draft['id']}")).status_code == 404
        assert (await client.get(f"/api/issues/{issue.id}")).status_code == 200

    async def test_deleting_issue_removes_link(self, client: AsyncClient, issue):
        draft = await self._create(client, issueIds=[issue.id])
        await client.delete(f"/api/issues/{issue.id}")

        res = await client.get(f"{URL}/{draft['id']}")
        assert res.json()["emailIssues"] == []

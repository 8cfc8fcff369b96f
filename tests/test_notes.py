"""메모 API 테스트."""

from httpx import AsyncClient

URL = "/api/notes"


class TestNoteCreate:
    """메모 생성 테스트."""

    async def test_create_note(self, client: AsyncClient, issue):
        res = await client.post(URL, json={
            "issueId": issue.id,
            "content": "Called the vendor",
            "author": "Sam",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["success"] is True
        assert data["note"]["issueId"] == issue.id
        assert data["note"]["author"] == "Sam"

        detail = (await client.get(f"/api/issues/{issue.id}")).json()
        assert [n["content"] for n in detail["notes"]] == ["Called the vendor"]

    async def test_create_note_without_author(self, client: AsyncClient, issue):
        res = await client.post(URL, json={"issueId": issue.id, "content": "anon"})
        assert res.status_code == 200
        assert res.json()["note"]["author"] is None

    async def test_create_note_empty_content(self, client: AsyncClient, issue):
        """빈 내용은 400."""
        res = await client.post(URL, json={"issueId": issue.id, "content": ""})
        assert res.status_code == 400
        assert "content" in res.json()["errors"]

    async def test_create_note_missing_issue_id(self, client: AsyncClient):
        res = await client.post(URL, json={"content": "orphan"})
        assert res.status_code == 400

    async def test_create_note_unknown_issue(self, client: AsyncClient):
        res = await client.post(URL, json={"issueId": "missing", "content": "x"})
        assert res.status_code == 404
        assert res.json()["error"] == "Issue not found"

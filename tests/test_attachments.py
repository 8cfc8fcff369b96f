"""첨부파일 업로드/다운로드 API 테스트.

Attachment tests run against local storage (LOCAL_UPLOADS_DIR is a tmp dir).
"""

from httpx import AsyncClient
from sqlalchemy import select

from erp_hub.models import Attachment
from erp_hub.services.storage_service import StorageError, storage_service, uploads_dir

URL = "/api/attachments"
PDF = b"%PDF-1.4 quarterly close checklist"


async def _upload(client: AsyncClient, note_id: str, **data):
    return await client.post(
        f"{URL}/upload",
        files={"file": ("close checklist.pdf", PDF, "application/pdf")},
        data={"noteId": note_id, **data},
    )


class TestAttachmentUpload:
    """업로드 테스트."""

    async def test_upload_available(self, client: AsyncClient, note):
        """업로드 성공 시 AVAILABLE, storage_key는 파일 URL."""
        res = await _upload(client, note.id, createdBy="Dana")
        assert res.status_code == 200
        data = res.json()
        assert data["success"] is True
        attachment = data["attachment"]
        assert attachment["status"] == "AVAILABLE"
        assert attachment["noteId"] == note.id
        assert attachment["fileName"] == "close checklist.pdf"
        assert attachment["contentType"] == "application/pdf"
        assert attachment["size"] == len(PDF)
        assert attachment["createdBy"] == "Dana"
        assert attachment["storageKey"].endswith(f"/uploads/attachments/{attachment['id']}/close checklist.pdf")

        stored = uploads_dir() / "attachments" / attachment["id"] / "close checklist.pdf"
        assert stored.read_bytes() == PDF

    async def test_upload_shows_on_issue_detail(self, client: AsyncClient, issue, note):
        await _upload(client, note.id)
        detail = (await client.get(f"/api/issues/{issue.id}")).json()
        assert detail["notes"][0]["attachments"][0]["status"] == "AVAILABLE"

    async def test_upload_without_file(self, client: AsyncClient, note):
        res = await client.post(f"{URL}/upload", data={"noteId": note.id})
        assert res.status_code == 400
        assert res.json()["error"] == "No file provided"

    async def test_upload_without_note_id(self, client: AsyncClient):
        res = await client.post(f"{URL}/upload", files={"file": ("a.txt", b"a", "text/plain")})
        assert res.status_code == 400
        assert res.json()["error"] == "noteId is required"

    async def test_upload_unknown_note(self, client: AsyncClient):
        res = await _upload(client, "missing")
        assert res.status_code == 404

    async def test_upload_failure_marks_deleted(self, client: AsyncClient, db, note, monkeypatch):
        """저장소 실패 시 500, 레코드는 DELETED."""
        async def _fail(key, data, content_type):
            raise StorageError("bucket unavailable")

        monkeypatch.setattr(storage_service, "upload", _fail)

        res = await _upload(client, note.id)
        assert res.status_code == 500
        assert res.json() == {"success": False, "error": "Failed to upload file"}

        rows = (await db.execute(select(Attachment))).scalars().all()
        assert len(rows) == 1
        assert rows[0].status == "DELETED"
        assert rows[0].storage_key == ""
        assert (await client.get(f"{URL}/{rows[0].id}/download")).status_code == 404

    async def test_unexpected_upload_error_marks_deleted(self, client: AsyncClient, db, note, monkeypatch):
        """StorageError가 아닌 예외도 DELETED + 500."""
        async def _boom(key, data, content_type):
            raise RuntimeError("sdk exploded")

        monkeypatch.setattr(storage_service, "upload", _boom)

        res = await _upload(client, note.id)
        assert res.status_code == 500
        assert res.json() == {"success": False, "error": "Failed to upload file"}

        rows = (await db.execute(select(Attachment))).scalars().all()
        assert [r.status for r in rows] == ["DELETED"]


class TestAttachmentDownload:
    """다운로드 테스트."""

    async def test_download(self, client: AsyncClient, note):
        attachment_id = (await _upload(client, note.id)).json()["attachment"]["id"]

        res = await client.get(f"{URL}/{attachment_id}/download")
        assert res.status_code == 200
        assert res.content == PDF
        assert res.headers["content-type"] == "application/pdf"
        assert res.headers["content-disposition"] == 'attachment; filename="close checklist.pdf"'
        assert res.headers["content-length"] == str(len(PDF))

    async def test_download_not_available(self, client: AsyncClient, db, note):
        """AVAILABLE이 아니면 404."""
        pending = Attachment(note_id=note.id, file_name="x.txt", content_type="text/plain", size=1)
        db.add(pending)
        await db.flush()

        res = await client.get(f"{URL}/{pending.id}/download")
        assert res.status_code == 404

    async def test_download_missing_blob(self, client: AsyncClient, db, note):
        """레코드는 있으나 파일이 없으면 500."""
        broken = Attachment(
            note_id=note.id,
            file_name="gone.txt",
            content_type="text/plain",
            size=4,
            status="AVAILABLE",
            storage_key=storage_service.url_for("attachments/gone/gone.txt"),
        )
        db.add(broken)
        await db.flush()

        res = await client.get(f"{URL}/{broken.id}/download")
        assert res.status_code == 500
        assert res.json()["error"] == "Failed to download file"


class TestStorageKeys:
    """저장 경로/URL 변환 테스트."""

    def test_attachment_key_strips_directories(self):
        assert storage_service.attachment_key("abc", "../../etc/passwd") == "attachments/abc/passwd"

    def test_extract_key_roundtrip_local(self):
        url = storage_service.url_for("attachments/abc/file.txt")
        assert storage_service.extract_key(url) == "attachments/abc/file.txt"
        assert storage_service.extract_key("https://elsewhere.example/file.txt") is None

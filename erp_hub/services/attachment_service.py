"""첨부파일 서비스 — 업로드 상태 전이와 다운로드 프록시.

Attachment service.

Upload flow:
    1. 메모 존재 확인 (note must exist, else 404)
    2. UPLOADING 상태, 빈 storage_key로 레코드 생성 후 커밋
    3. 저장소 업로드 (attachments/{id}/{file_name})
    4. 성공: storage_key=URL, AVAILABLE / 실패: DELETED 후 500

The placeholder row is committed before the external upload, so this
service commits itself instead of leaving it to the route.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Attachment
from erp_hub.repositories.note_repository import attachment_repository, note_repository
from erp_hub.services.storage_service import StorageError, storage_service
from erp_hub.utils.exceptions import NotFoundError, ServerError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"


class AttachmentService:

    async def upload(
        self,
        db: AsyncSession,
        note_id: str,
        file_name: str,
        content_type: str | None,
        data: bytes,
        created_by: str | None = None,
    ) -> Attachment:
        if await note_repository.get_by_id(db, note_id) is None:
            raise NotFoundError("Note not found")

        attachment = await attachment_repository.create(
            db,
            {
                "note_id": note_id,
                "file_name": file_name,
                "content_type": content_type or DEFAULT_CONTENT_TYPE,
                "size": len(data),
                "storage_key": "",
                "status": "UPLOADING",
                "created_by": created_by,
            },
        )
        await db.commit()

        key = storage_service.attachment_key(attachment.id, file_name)
        try:
            url = await storage_service.upload(key, data, attachment.content_type)
        except Exception:
            # 어떤 실패든 placeholder는 DELETED로 남김
            logger.exception("Attachment upload failed (attachment_id=%s)", attachment.id)
            await attachment_repository.set_status(db, attachment.id, "DELETED")
            await db.commit()
            raise ServerError("Failed to upload file")

        updated = await attachment_repository.set_status(db, attachment.id, "AVAILABLE", storage_key=url)
        await db.commit()
        return updated

    async def get_available(self, db: AsyncSession, attachment_id: str) -> Attachment:
        """AVAILABLE 상태의 첨부파일만 반환합니다. 나머지는 404."""
        attachment = await attachment_repository.get_by_id(db, attachment_id)
        if attachment is None or attachment.status != "AVAILABLE":
            raise NotFoundError("Attachment not found")
        return attachment

    async def read_content(self, attachment: Attachment) -> bytes:
        try:
            return await storage_service.download(attachment.storage_key)
        except StorageError:
            logger.exception("Attachment download failed (attachment_id=%s)", attachment.id)
            raise ServerError("Failed to download file")


attachment_service: AttachmentService = AttachmentService()

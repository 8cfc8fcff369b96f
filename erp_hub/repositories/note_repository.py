"""메모/첨부파일 레포지토리.

Note and attachment repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Attachment, Note
from erp_hub.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):

    def __init__(self) -> None:
        super().__init__(Note)


class AttachmentRepository(BaseRepository[Attachment]):

    def __init__(self) -> None:
        super().__init__(Attachment)

    async def set_status(
        self,
        db: AsyncSession,
        attachment_id: str,
        status: str,
        storage_key: str | None = None,
    ) -> Attachment | None:
        data: dict[str, str] = {"status": status}
        if storage_key is not None:
            data["storage_key"] = storage_key
        return await self.update(db, attachment_id, data)


note_repository: NoteRepository = NoteRepository()
attachment_repository: AttachmentRepository = AttachmentRepository()

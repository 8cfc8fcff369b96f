"""메모 서비스.

Note service — notes are append-only; the only write is create.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import Note
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.repositories.note_repository import note_repository
from erp_hub.schemas.note import NoteCreate
from erp_hub.utils.exceptions import NotFoundError


class NoteService:

    async def create_note(self, db: AsyncSession, data: NoteCreate) -> Note:
        if await issue_repository.get_by_id(db, data.issue_id) is None:
            raise NotFoundError("Issue not found")
        return await note_repository.create(
            db,
            {
                "issue_id": data.issue_id,
                "content": data.content,
                "author": data.author,
            },
        )

    async def get_note(self, db: AsyncSession, note_id: str) -> Note:
        note = await note_repository.get_by_id(db, note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note


note_service: NoteService = NoteService()

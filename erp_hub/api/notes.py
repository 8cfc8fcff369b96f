"""메모 라우터."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.note import NoteCreate, NoteOut
from erp_hub.services.note_service import note_service

router: APIRouter = APIRouter()


@router.post("")
async def create_note(
    data: NoteCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """이슈에 메모 추가. content가 비어 있으면 400."""
    note = await note_service.create_note(db, data)
    await db.commit()
    return {"success": True, "note": NoteOut.model_validate(note)}

"""첨부파일 라우터 — 멀티파트 업로드와 다운로드 프록시.

Attachment Router.
    - POST /upload: multipart (file, noteId, createdBy?) 업로드
    - GET /{attachment_id}/download: AVAILABLE 첨부파일 내용 전달
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.note import AttachmentOut
from erp_hub.services.attachment_service import attachment_service
from erp_hub.utils.exceptions import BadRequestError

router: APIRouter = APIRouter()


@router.post("/upload")
async def upload_attachment(
    db: Annotated[AsyncSession, Depends(get_db)],
    file: UploadFile | None = None,
    note_id: Annotated[str | None, Form(alias="noteId")] = None,
    created_by: Annotated[str | None, Form(alias="createdBy")] = None,
) -> dict:
    """파일을 저장소에 업로드하고 첨부파일 레코드를 생성합니다."""
    if file is None or not file.filename:
        raise BadRequestError("No file provided")
    if not note_id:
        raise BadRequestError("noteId is required")

    data = await file.read()
    attachment = await attachment_service.upload(
        db,
        note_id=note_id,
        file_name=file.filename,
        content_type=file.content_type,
        data=data,
        created_by=created_by or None,
    )
    return {"success": True, "attachment": AttachmentOut.model_validate(attachment)}


@router.get("/{attachment_id}/download")
async def download_attachment(
    attachment_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    attachment = await attachment_service.get_available(db, attachment_id)
    content = await attachment_service.read_content(attachment)
    file_name = attachment.file_name.replace('"', "")
    return Response(
        content=content,
        media_type=attachment.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{file_name}"',
            "Content-Length": str(attachment.size),
        },
    )

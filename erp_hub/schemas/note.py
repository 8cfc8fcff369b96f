"""메모/첨부파일 Pydantic 스키마.

Note and attachment request/response schemas.
"""

from datetime import datetime

from pydantic import Field

from erp_hub.schemas.common import CamelModel


class NoteCreate(CamelModel):
    issue_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    author: str | None = None


class AttachmentOut(CamelModel):
    id: str
    note_id: str
    file_name: str
    content_type: str
    size: int
    storage_key: str
    status: str
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class NoteOut(CamelModel):
    id: str
    issue_id: str
    content: str
    author: str | None = None
    created_at: datetime
    updated_at: datetime


class NoteWithAttachments(NoteOut):
    attachments: list[AttachmentOut] = []

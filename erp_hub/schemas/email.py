"""이메일 템플릿/초안 Pydantic 스키마.

Email template and draft request/response schemas.
``variables`` and ``recipients`` are stored as JSON text and decoded on the way out.
"""

import json
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from erp_hub.schemas.common import CamelModel
from erp_hub.schemas.issue import IssueOut


def _decode_json(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


# === 템플릿 (Template) ===

class EmailTemplateWrite(CamelModel):
    """템플릿 생성/전체 교체 요청 — PUT도 동일 스키마 (isDefault 기본 false)."""

    name: str = Field(min_length=1)
    description: str | None = None
    subject: str = Field(min_length=1)
    content: str = Field(min_length=1)
    variables: dict[str, str] | str | None = None
    is_default: bool = False


class EmailTemplateOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    subject: str
    content: str
    variables: Any = None
    is_default: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("variables", mode="before")
    @classmethod
    def _parse_variables(cls, value: Any) -> Any:
        return _decode_json(value)


class RenderedEmail(CamelModel):
    template_id: str
    subject: str
    content: str


# === 초안 (Draft) ===

class EmailDraftCreate(CamelModel):
    subject: str = Field(min_length=1)
    content: str = Field(min_length=1)
    recipients: list[str] | None = None
    template_id: str | None = None
    issue_ids: list[str] = []


class EmailDraftUpdate(CamelModel):
    subject: str | None = None
    content: str | None = None
    recipients: list[str] | None = None
    template_id: str | None = None
    issue_ids: list[str] | None = None  # 주어지면 연결 이슈를 통째로 교체


class EmailIssueOut(CamelModel):
    id: str
    email_draft_id: str
    issue_id: str
    created_at: datetime
    issue: IssueOut | None = None


class EmailDraftOut(CamelModel):
    id: str
    subject: str
    content: str
    recipients: Any = None
    template_id: str | None = None
    created_at: datetime
    updated_at: datetime
    template: EmailTemplateOut | None = None
    email_issues: list[EmailIssueOut] = []

    @field_validator("recipients", mode="before")
    @classmethod
    def _parse_recipients(cls, value: Any) -> Any:
        return _decode_json(value)

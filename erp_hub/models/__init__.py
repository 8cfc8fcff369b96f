"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata,
which Alembic and relationship resolution rely on.

Modules:
    issue: 카테고리, 이슈, 메모, 첨부파일, 실행 항목, 벤더 티켓 (Category, Issue, Note, Attachment, ActionItem, VendorTicket)
    email: 이메일 템플릿, 초안, 초안-이슈 연결 (EmailTemplate, EmailDraft, EmailIssue)
"""

from erp_hub.models.issue import (
    ATTACHMENT_STATUSES,
    ISSUE_PRIORITIES,
    ISSUE_STATUSES,
    ActionItem,
    Attachment,
    Category,
    Issue,
    Note,
    VENDORS,
    VendorTicket,
)
from erp_hub.models.email import EmailDraft, EmailIssue, EmailTemplate

__all__ = [
    "ATTACHMENT_STATUSES",
    "ISSUE_PRIORITIES",
    "ISSUE_STATUSES",
    "ActionItem",
    "Attachment",
    "Category",
    "Issue",
    "Note",
    "VENDORS",
    "VendorTicket",
    "EmailDraft",
    "EmailIssue",
    "EmailTemplate",
]

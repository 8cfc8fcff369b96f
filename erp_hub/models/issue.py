"""이슈 추적 관련 SQLAlchemy ORM 모델 정의.

Issue-tracking SQLAlchemy ORM model definitions.

Tables:
    - categories: 이슈 분류 (Issue categories with display color)
    - issues: 이슈 (Tracked ERP problems with status/priority)
    - notes: 이슈 메모 (Append-only comments on an issue)
    - attachments: 첨부파일 메타데이터 (Uploaded file metadata, blob lives in storage)
    - action_items: 실행 항목 (Discrete tasks derived from an issue)
    - vendor_tickets: 벤더 티켓 (CMiC / Procore support tickets opened for an issue)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from erp_hub.database import Base

# 우선순위 — 낮은 것부터 높은 순 (Ordered lowest to highest)
ISSUE_PRIORITIES: tuple[str, ...] = ("LOW", "MEDIUM", "HIGH", "URGENT")
ISSUE_STATUSES: tuple[str, ...] = ("OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED")
ATTACHMENT_STATUSES: tuple[str, ...] = ("UPLOADING", "AVAILABLE", "DELETED")
VENDORS: tuple[str, ...] = ("CMIC", "PROCORE", "OTHER")


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """이슈 카테고리 모델.

    Category model — groups issues for filtering and dashboard breakdowns.

    Attributes:
        id: 고유 식별자 (Opaque string key)
        name: 카테고리 이름 (Display name)
        description: 설명 (Optional description)
        color: 표시 색상 (Badge color, e.g. "#3b82f6")
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    issues = relationship("Issue", back_populates="category")


class Issue(Base):
    """이슈 모델 — ERP 문제 추적 레코드.

    Issue model — a tracked ERP problem.
    Archived issues are hidden from active lists but kept for history.
    The cmic_* columns reference the ticket opened in the external ERP vendor system.

    Attributes:
        priority: 우선순위 (LOW / MEDIUM / HIGH / URGENT)
        status: 진행 상태 (OPEN -> IN_PROGRESS -> RESOLVED / CLOSED)
        archived: 보관 여부 (Hidden from active views when True)
        archived_at: 보관 일시 (Set together with archived)
    """

    __tablename__ = "issues"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolution_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    work_performed: Mapped[str | None] = mapped_column(Text, nullable=True)
    work_organization: Mapped[str | None] = mapped_column(Text, nullable=True)
    roadblocks: Mapped[str | None] = mapped_column(Text, nullable=True)
    users_involved: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_help: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(String(20), default="MEDIUM", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="OPEN", nullable=False)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    category_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 외부 ERP 벤더 티켓 참조 — External vendor ticket reference
    cmic_ticket_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cmic_ticket_opened: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cmic_ticket_closed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    category = relationship("Category", back_populates="issues")
    notes = relationship("Note", back_populates="issue", cascade="all, delete-orphan")
    action_items = relationship(
        "ActionItem",
        back_populates="issue",
        cascade="all, delete-orphan",
        foreign_keys="ActionItem.issue_id",
    )
    email_links = relationship("EmailIssue", back_populates="issue", cascade="all, delete-orphan")
    vendor_tickets = relationship("VendorTicket", back_populates="issue", cascade="all, delete-orphan")


class Note(Base):
    """이슈 메모 모델 — 생성 후 수정하지 않는 코멘트.

    Note model — append-only comment on an issue; carrier for attachments.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    issue_id: Mapped[str] = mapped_column(String(36), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    issue = relationship("Issue", back_populates="notes")
    attachments = relationship("Attachment", back_populates="note", cascade="all, delete-orphan")


class Attachment(Base):
    """첨부파일 모델 — 파일 메타데이터와 저장소 참조.

    Attachment model — uploaded file metadata plus a reference to stored content.

    Status lifecycle:
        UPLOADING -> AVAILABLE (업로드 성공, storage_key 설정)
        UPLOADING -> DELETED   (업로드 실패)
    """

    __tablename__ = "attachments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    note_id: Mapped[str] = mapped_column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    storage_key: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="UPLOADING", nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    note = relationship("Note", back_populates="attachments")


class ActionItem(Base):
    """실행 항목 모델 — 이슈에서 파생된 개별 작업.

    Action item model — discrete task derived from an issue.
    original_issue_id remembers the issue the item was first created under,
    even after it is moved to another issue.
    """

    __tablename__ = "action_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    issue_id: Mapped[str] = mapped_column(String(36), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    original_issue_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    issue = relationship("Issue", back_populates="action_items", foreign_keys=[issue_id])


class VendorTicket(Base):
    """벤더 티켓 모델 — 이슈 해결을 위해 외부 벤더에 연 지원 티켓.

    Vendor ticket model — a support ticket opened with an ERP vendor
    (CMiC, Procore, ...) while working an issue. Shares the issue status set.
    """

    __tablename__ = "vendor_tickets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    issue_id: Mapped[str] = mapped_column(String(36), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    ticket_number: Mapped[str] = mapped_column(String(100), nullable=False)
    vendor: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="OPEN", nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_opened: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    date_closed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    issue = relationship("Issue", back_populates="vendor_tickets")

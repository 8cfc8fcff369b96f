"""이메일 템플릿/초안 SQLAlchemy ORM 모델 정의.

Email template and draft ORM models.

Tables:
    - email_templates: 재사용 이메일 템플릿 (Reusable skeletons with {{placeholders}})
    - email_drafts: 작성된 이메일 초안 (Composed drafts)
    - email_issues: 초안-이슈 연결 (Draft <-> Issue junction)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from erp_hub.database import Base
from erp_hub.models.issue import _new_id, _utcnow


class EmailTemplate(Base):
    """이메일 템플릿 모델.

    Email template model. ``variables`` holds a JSON object (serialized text)
    mapping placeholder names to human descriptions.
    At most one row has is_default = True.
    """

    __tablename__ = "email_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    drafts = relationship("EmailDraft", back_populates="template")


class EmailDraft(Base):
    """이메일 초안 모델 — recipients는 JSON 배열 문자열."""

    __tablename__ = "email_drafts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    recipients: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("email_templates.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    template = relationship("EmailTemplate", back_populates="drafts")
    email_issues = relationship("EmailIssue", back_populates="email_draft", cascade="all, delete-orphan")


class EmailIssue(Base):
    """초안-이슈 연결 모델."""

    __tablename__ = "email_issues"
    __table_args__ = (UniqueConstraint("email_draft_id", "issue_id", name="uq_email_issue"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email_draft_id: Mapped[str] = mapped_column(String(36), ForeignKey("email_drafts.id", ondelete="CASCADE"), nullable=False)
    issue_id: Mapped[str] = mapped_column(String(36), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    email_draft = relationship("EmailDraft", back_populates="email_issues")
    issue = relationship("Issue", back_populates="email_links")

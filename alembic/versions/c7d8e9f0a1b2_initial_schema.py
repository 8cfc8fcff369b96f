"""initial_schema

Revision ID: c7d8e9f0a1b2
Revises:
Create Date: 2026-10-18 09:00:00.000000

이슈 추적 및 이메일 테이블 생성.
Create issue tracking tables (categories, issues, notes, attachments,
action_items) and email tables (email_templates, email_drafts, email_issues).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c7d8e9f0a1b2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # categories — 이슈 분류 (Issue categories)
    op.create_table(
        'categories',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(32), nullable=True),
        *_timestamps(),
    )

    # issues — ERP 이슈 (priority/status는 텍스트 enum)
    op.create_table(
        'issues',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('resolution_plan', sa.Text(), nullable=True),
        sa.Column('work_performed', sa.Text(), nullable=True),
        sa.Column('work_organization', sa.Text(), nullable=True),
        sa.Column('roadblocks', sa.Text(), nullable=True),
        sa.Column('users_involved', sa.Text(), nullable=True),
        sa.Column('additional_help', sa.Text(), nullable=True),
        sa.Column('priority', sa.String(20), server_default='MEDIUM', nullable=False),
        sa.Column('status', sa.String(20), server_default='OPEN', nullable=False),
        sa.Column('archived', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('category_id', sa.String(36), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assigned_to', sa.String(255), nullable=True),
        sa.Column('cmic_ticket_number', sa.String(100), nullable=True),
        sa.Column('cmic_ticket_opened', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cmic_ticket_closed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_issues_status_archived', 'issues', ['status', 'archived'])

    op.create_table(
        'notes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('issue_id', sa.String(36), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('author', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_notes_issue_id', 'notes', ['issue_id'])

    # attachments — 상태: UPLOADING -> AVAILABLE | DELETED
    op.create_table(
        'attachments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('note_id', sa.String(36), sa.ForeignKey('notes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_name', sa.String(500), nullable=False),
        sa.Column('content_type', sa.String(255), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('storage_key', sa.Text(), server_default='', nullable=False),
        sa.Column('status', sa.String(20), server_default='UPLOADING', nullable=False),
        sa.Column('created_by', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_attachments_note_id', 'attachments', ['note_id'])

    op.create_table(
        'action_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('issue_id', sa.String(36), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('original_issue_id', sa.String(36), nullable=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', sa.Integer(), server_default='0', nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_action_items_issue_id', 'action_items', ['issue_id'])

    # email_templates — is_default는 최대 1개 (enforced by the service)
    op.create_table(
        'email_templates',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('subject', sa.String(500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('variables', sa.Text(), nullable=True),
        sa.Column('is_default', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'email_drafts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('subject', sa.String(500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('recipients', sa.Text(), nullable=True),
        sa.Column('template_id', sa.String(36), sa.ForeignKey('email_templates.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'email_issues',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email_draft_id', sa.String(36), sa.ForeignKey('email_drafts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('issue_id', sa.String(36), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('email_draft_id', 'issue_id', name='uq_email_issue'),
    )


def downgrade() -> None:
    # 의존 순서 역순으로 삭제 (drop in reverse dependency order)
    op.drop_table('email_issues')
    op.drop_table('email_drafts')
    op.drop_table('email_templates')
    op.drop_table('action_items')
    op.drop_table('attachments')
    op.drop_table('notes')
    op.drop_table('issues')
    op.drop_table('categories')

"""add_vendor_tickets

Revision ID: d4e5f6a7b8c9
Revises: c7d8e9f0a1b2
Create Date: 2026-10-19 10:00:00.000000

벤더 티켓 테이블 추가.
Add vendor_tickets (CMiC / Procore tickets opened for an issue).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'd4e5f6a7b8c9'
down_revision: Union[str, None] = 'c7d8e9f0a1b2'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'vendor_tickets',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('issue_id', sa.String(36), sa.ForeignKey('issues.id', ondelete='CASCADE'), nullable=False),
        sa.Column('ticket_number', sa.String(100), nullable=False),
        sa.Column('vendor', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), server_default='OPEN', nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date_opened', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('date_closed', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_vendor_tickets_issue_id', 'vendor_tickets', ['issue_id'])


def downgrade() -> None:
    op.drop_index('ix_vendor_tickets_issue_id', table_name='vendor_tickets')
    op.drop_table('vendor_tickets')

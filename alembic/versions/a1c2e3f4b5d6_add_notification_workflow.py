"""add_notification_workflow

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 10:00:00.000000

승인 대기 알림(admin_notifications), 전달 알림(notifications),
승인 대상 콘텐츠(generaladminaddyear, newsupdate) 테이블 생성.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "generaladminaddyear",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("department_id", sa.String(50), nullable=False),
        sa.Column("department_heading", sa.String(255), nullable=False),
        sa.Column("year", sa.String(20), nullable=False),
        sa.Column("meetingtype", sa.String(100), nullable=False),
        sa.Column("pdfheading", sa.String(255), nullable=False),
        sa.Column("pdf", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "newsupdate",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("description", sa.String(1000), nullable=False),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "admin_notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("target_entity_id", UUID(as_uuid=True), nullable=False),
        sa.Column("target_entity_kind", sa.String(50), nullable=False),
        sa.Column("role", sa.String(100), nullable=False),
        sa.Column("description", sa.String(1000), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("time", sa.String(8), nullable=False),
        sa.Column("remark", sa.String(1000), nullable=True),
        sa.Column("state", sa.String(20), server_default="open", nullable=False),
    )
    op.create_index("ix_admin_notifications_state", "admin_notifications", ["state"])
    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("heading", sa.String(255), nullable=False),
        sa.Column("description", sa.String(2000), nullable=False),
        sa.Column("role", sa.String(100), nullable=False),
        sa.Column("readed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_notifications_role", "notifications", ["role"])


def downgrade() -> None:
    op.drop_index("ix_notifications_role")
    op.drop_table("notifications")
    op.drop_index("ix_admin_notifications_state")
    op.drop_table("admin_notifications")
    op.drop_table("newsupdate")
    op.drop_table("generaladminaddyear")

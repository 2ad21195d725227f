"""User reports

Revision ID: 001
Revises:
Create Date: 2026-10-17

Tables created:
  - user_reports   Abuse reports one user files against another; soft-deleted
                   rows are kept for audit

PostgreSQL ENUM types created:
  - reportreason       spam / inappropriate_content / fraud / harassment /
                       fake_listings / price_manipulation / contact_abuse / other
  - userreportstatus   pending / under_review / resolved / dismissed

Actor columns carry no foreign keys: `users` is owned by user management and a
report must outlive the account it points at.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# ─────────────────────────────────────────────────────────────────────────────
#  UPGRADE
# ─────────────────────────────────────────────────────────────────────────────

def upgrade() -> None:
    # ── 1. ENUM types ─────────────────────────────────────────────────────────
    op.execute(
        """
        DO $$ BEGIN
            CREATE TYPE reportreason AS ENUM (
                'spam',
                'inappropriate_content',
                'fraud',
                'harassment',
                'fake_listings',
                'price_manipulation',
                'contact_abuse',
                'other'
            );
        EXCEPTION WHEN duplicate_object THEN NULL;
        END $$;
        """
    )
    op.execute(
        """
        DO $$ BEGIN
            CREATE TYPE userreportstatus AS ENUM (
                'pending',
                'under_review',
                'resolved',
                'dismissed'
            );
        EXCEPTION WHEN duplicate_object THEN NULL;
        END $$;
        """
    )

    # ── 2. user_reports ───────────────────────────────────────────────────────
    op.create_table(
        "user_reports",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("reported_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("reported_by_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "reason",
            postgresql.ENUM(name="reportreason", create_type=False),
            nullable=False,
        ),
        sa.Column("description", sa.String(1000), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="userreportstatus", create_type=False),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        # Set by admin transitions and soft delete
        sa.Column("reviewed_by_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("admin_notes", sa.String(500), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "evidence_urls",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("related_ad_id", sa.String(64), nullable=True),
        sa.Column("report_count", sa.Integer(), nullable=True),
        sa.Column("is_resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_user_reports"),
        sa.CheckConstraint(
            "reported_user_id != reported_by_id",
            name="ck_user_reports_no_self_report",
        ),
    )
    op.create_index(
        "idx_user_reports_target_status", "user_reports", ["reported_user_id", "status"]
    )
    op.create_index("idx_user_reports_reported_by", "user_reports", ["reported_by_id"])
    op.create_index(
        "idx_user_reports_status_created", "user_reports", ["status", "created_at"]
    )
    op.create_index("idx_user_reports_reason", "user_reports", ["reason"])
    op.create_index("idx_user_reports_is_deleted", "user_reports", ["is_deleted"])
    op.create_index(
        "idx_user_reports_pair_created",
        "user_reports",
        ["reported_user_id", "reported_by_id", "created_at"],
    )


# ─────────────────────────────────────────────────────────────────────────────
#  DOWNGRADE
# ─────────────────────────────────────────────────────────────────────────────

def downgrade() -> None:
    op.drop_index("idx_user_reports_pair_created", table_name="user_reports")
    op.drop_index("idx_user_reports_is_deleted", table_name="user_reports")
    op.drop_index("idx_user_reports_reason", table_name="user_reports")
    op.drop_index("idx_user_reports_status_created", table_name="user_reports")
    op.drop_index("idx_user_reports_reported_by", table_name="user_reports")
    op.drop_index("idx_user_reports_target_status", table_name="user_reports")
    op.drop_table("user_reports")

    op.execute("DROP TYPE IF EXISTS userreportstatus")
    op.execute("DROP TYPE IF EXISTS reportreason")

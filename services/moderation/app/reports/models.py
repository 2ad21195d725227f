"""
User reports domain — SQLAlchemy ORM models.

Tables:
  user_reports  — one row per abuse report; soft-deleted rows stay for audit

Actor columns (reported_user_id, reported_by_id, reviewed_by_id) carry no
foreign keys: users belong to the user-management component, and a report must
outlive the account it references.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base
from app.reports.constants import ReportReason, ReportStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Report(Base):
    __tablename__ = "user_reports"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(), primary_key=True, default=uuid.uuid4)
    reported_user_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(), nullable=False)
    reported_by_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid(), nullable=False)
    reason: Mapped[ReportReason] = mapped_column(
        sa.Enum(ReportReason, name="reportreason", values_callable=_enum_values),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(sa.String(1000), nullable=False)
    status: Mapped[ReportStatus] = mapped_column(
        sa.Enum(ReportStatus, name="userreportstatus", values_callable=_enum_values),
        nullable=False,
        default=ReportStatus.PENDING,
    )

    # ── Review stamps (written only by admin transitions) ─────────────────────
    reviewed_by_id: Mapped[uuid.UUID | None] = mapped_column(sa.Uuid(), nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)

    evidence_urls: Mapped[list[str]] = mapped_column(
        sa.JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list
    )
    # Opaque listing id; never validated against the ads catalog
    related_ad_id: Mapped[str | None] = mapped_column(sa.String(64), nullable=True)

    # Denormalized: live (non-deleted) report count for reported_user_id
    report_count: Mapped[int | None] = mapped_column(sa.Integer, nullable=True)
    is_resolved: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)
    is_deleted: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    __table_args__ = (
        sa.CheckConstraint("reported_user_id != reported_by_id", name="no_self_report"),
        sa.Index("idx_user_reports_target_status", "reported_user_id", "status"),
        sa.Index("idx_user_reports_reported_by", "reported_by_id"),
        sa.Index("idx_user_reports_status_created", "status", "created_at"),
        sa.Index("idx_user_reports_reason", "reason"),
        sa.Index("idx_user_reports_is_deleted", "is_deleted"),
        # Rate-limit lookup: same pair inside the rolling window
        sa.Index("idx_user_reports_pair_created", "reported_user_id", "reported_by_id", "created_at"),
    )

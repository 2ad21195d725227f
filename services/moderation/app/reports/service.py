"""
User reports domain — pure business logic (zero FastAPI routing).

Rules:
  submit:    fields valid → target exists → not self → no live report for the
             same pair in the last 24h (Redis pair lock held across check+insert)
             → insert as pending → commit → recompute target's report_count
  read:      is_deleted rows are invisible everywhere; non-admins only ever see
             reports they submitted
  review:    admin-only; any status may be written; stamps reviewer + time
  delete:    admin-only soft delete; stamps reviewer + time; recomputes count
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import redis.asyncio as aioredis
import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.actors.directory import find_actor
from app.exceptions import (
    AdminAccessRequired,
    CannotReportSelf,
    InvalidReportRequest,
    ReportAccessDenied,
    ReportAlreadySubmitted,
    ReportedUserNotFound,
    ReportNotFound,
)
from app.reports.constants import ReportSortField, ReportStatus, SortOrder
from app.reports.locks import submission_lock
from app.reports.models import Report
from app.reports.schemas import ReportCreateRequest, ReportListQuery
from app.reports.validation import (
    validate_list_query,
    validate_status_update,
    validate_submission,
)
from shared.models.pagination import page_offset
from shared.models.user import CurrentUser

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    ReportSortField.CREATED_AT: Report.created_at,
    ReportSortField.UPDATED_AT: Report.updated_at,
    ReportSortField.REPORT_COUNT: Report.report_count,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ── Shared query helpers ───────────────────────────────────────────────────────

def _live() -> sa.ColumnElement[bool]:
    return Report.is_deleted.is_(False)


def _visibility(requester: CurrentUser) -> list[sa.ColumnElement[bool]]:
    """Predicates every user-facing read starts from."""
    clauses = [_live()]
    if not requester.is_privileged:
        clauses.append(Report.reported_by_id == requester.id)
    return clauses


def ensure_privileged(user: CurrentUser) -> None:
    if not user.is_privileged:
        raise AdminAccessRequired()


async def _get_live_report(session: AsyncSession, report_id: uuid.UUID) -> Report | None:
    result = await session.execute(
        sa.select(Report).where(Report.id == report_id, _live())
    )
    return result.scalar_one_or_none()


async def _recent_report_exists(
    session: AsyncSession,
    reported_user_id: uuid.UUID,
    reported_by_id: uuid.UUID,
    *,
    since: datetime,
) -> bool:
    result = await session.execute(
        sa.select(sa.exists().where(
            Report.reported_user_id == reported_user_id,
            Report.reported_by_id == reported_by_id,
            Report.created_at >= since,
            _live(),
        ))
    )
    return result.scalar_one()


# ── Report count aggregator ────────────────────────────────────────────────────

async def recompute_report_count(session: AsyncSession, reported_user_id: uuid.UUID) -> int:
    """Write the target's live report count onto every live report of that target."""
    count = (
        await session.execute(
            sa.select(sa.func.count())
            .select_from(Report)
            .where(Report.reported_user_id == reported_user_id, _live())
        )
    ).scalar_one()
    await session.execute(
        sa.update(Report)
        .where(Report.reported_user_id == reported_user_id, _live())
        .values(report_count=count)
        .execution_options(synchronize_session=False)
    )
    return count


async def _refresh_report_count(session: AsyncSession, report: Report) -> None:
    """Recompute after a committed insert; a failure leaves the report in place."""
    try:
        await recompute_report_count(session, report.reported_user_id)
        await session.commit()
    except SQLAlchemyError:
        logger.warning(
            "report_count recompute failed for user %s; count is stale until the next write",
            report.reported_user_id,
            exc_info=True,
        )
        await session.rollback()
    await session.refresh(report)


# ── Submission ────────────────────────────────────────────────────────────────

async def submit_report(
    session: AsyncSession,
    redis: aioredis.Redis,
    reporter_id: uuid.UUID,
    body: ReportCreateRequest,
    *,
    window_hours: int = 24,
    lock_ttl_seconds: int = 10,
) -> Report:
    errors = validate_submission(body.description, body.evidence_urls, body.related_ad)
    if errors:
        raise InvalidReportRequest(errors)
    if await find_actor(session, body.reported_user) is None:
        raise ReportedUserNotFound()
    if reporter_id == body.reported_user:
        raise CannotReportSelf()

    async with submission_lock(
        redis, body.reported_user, reporter_id, ttl_seconds=lock_ttl_seconds
    ) as acquired:
        if not acquired:
            raise ReportAlreadySubmitted(window_hours)
        since = _now() - timedelta(hours=window_hours)
        if await _recent_report_exists(session, body.reported_user, reporter_id, since=since):
            raise ReportAlreadySubmitted(window_hours)

        report = Report(
            reported_user_id=body.reported_user,
            reported_by_id=reporter_id,
            reason=body.reason,
            description=body.description.strip(),
            evidence_urls=list(body.evidence_urls),
            related_ad_id=body.related_ad,
            status=ReportStatus.PENDING,
            is_resolved=False,
            is_deleted=False,
        )
        session.add(report)
        await session.flush()
        await session.commit()

    logger.info(
        "New user report %s for user %s by %s (%s)",
        report.id, report.reported_user_id, reporter_id, report.reason.value,
    )
    await _refresh_report_count(session, report)
    return report


# ── Reads ─────────────────────────────────────────────────────────────────────

async def list_reports(
    session: AsyncSession,
    requester: CurrentUser,
    query: ReportListQuery,
) -> tuple[list[Report], int]:
    errors = validate_list_query(query.page, query.limit, query.sort_by, query.sort_order)
    if errors:
        raise InvalidReportRequest(errors)

    clauses = _visibility(requester)
    if query.reported_user is not None:
        clauses.append(Report.reported_user_id == query.reported_user)
    # Non-admins are already pinned to their own id; their reportedBy value is ignored.
    if query.reported_by is not None and requester.is_privileged:
        clauses.append(Report.reported_by_id == query.reported_by)
    if query.reason is not None:
        clauses.append(Report.reason == query.reason)
    if query.status is not None:
        clauses.append(Report.status == query.status)
    if query.search:
        clauses.append(Report.description.icontains(query.search, autoescape=True))

    total = (
        await session.execute(sa.select(sa.func.count()).select_from(Report).where(*clauses))
    ).scalar_one()

    column = _SORT_COLUMNS[ReportSortField(query.sort_by)]
    if SortOrder(query.sort_order) is SortOrder.ASC:
        ordering = (column.asc(), Report.id.asc())
    else:
        ordering = (column.desc(), Report.id.desc())

    rows = (
        await session.execute(
            sa.select(Report)
            .where(*clauses)
            .order_by(*ordering)
            .limit(query.limit)
            .offset(page_offset(query.page, query.limit))
        )
    ).scalars().all()
    return list(rows), total


async def get_report(
    session: AsyncSession,
    requester: CurrentUser,
    report_id: uuid.UUID,
) -> Report:
    report = await _get_live_report(session, report_id)
    if report is None:
        raise ReportNotFound()
    if not requester.is_privileged and report.reported_by_id != requester.id:
        raise ReportAccessDenied()
    return report


async def get_report_stats(session: AsyncSession, admin: CurrentUser) -> dict[str, Any]:
    ensure_privileged(admin)

    total = (
        await session.execute(sa.select(sa.func.count()).select_from(Report).where(_live()))
    ).scalar_one()

    async def _grouped(column) -> dict[str, int]:
        n = sa.func.count().label("n")
        rows = await session.execute(
            sa.select(column, n).where(_live()).group_by(column).order_by(n.desc())
        )
        return {key.value: count for key, count in rows.all()}

    by_reason = await _grouped(Report.reason)
    by_status = await _grouped(Report.status)
    return {
        "total_reports": total,
        "pending_reports": by_status.get(ReportStatus.PENDING.value, 0),
        "resolved_reports": by_status.get(ReportStatus.RESOLVED.value, 0),
        "dismissed_reports": by_status.get(ReportStatus.DISMISSED.value, 0),
        "reports_by_reason": by_reason,
        "reports_by_status": by_status,
    }


# ── Moderation workflow ────────────────────────────────────────────────────────

async def update_report_status(
    session: AsyncSession,
    admin: CurrentUser,
    report_id: uuid.UUID,
    new_status: ReportStatus,
    admin_notes: str | None = None,
) -> Report:
    ensure_privileged(admin)
    errors = validate_status_update(admin_notes)
    if errors:
        raise InvalidReportRequest(errors)

    report = await _get_live_report(session, report_id)
    if report is None:
        raise ReportNotFound()

    previous = report.status
    report.status = new_status
    # Blank notes (whitespace is stripped on input) leave earlier notes in place
    if admin_notes:
        report.admin_notes = admin_notes
    report.reviewed_by_id = admin.id
    report.reviewed_at = _now()
    report.is_resolved = new_status is ReportStatus.RESOLVED
    await session.flush()

    logger.info(
        "Report %s moved %s -> %s by admin %s",
        report.id, previous.value, new_status.value, admin.id,
    )
    return report


async def delete_report(
    session: AsyncSession,
    admin: CurrentUser,
    report_id: uuid.UUID,
) -> Report:
    ensure_privileged(admin)
    report = await _get_live_report(session, report_id)
    if report is None:
        raise ReportNotFound()

    report.is_deleted = True
    report.reviewed_by_id = admin.id
    report.reviewed_at = _now()
    await session.flush()
    remaining = await recompute_report_count(session, report.reported_user_id)

    logger.info(
        "Report %s soft-deleted by admin %s; user %s now has %d live report(s)",
        report.id, admin.id, report.reported_user_id, remaining,
    )
    return report

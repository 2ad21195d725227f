"""
User reports domain — request orchestration.

Runs each service call under the request deadline and maps ORM rows to the
enriched response schemas.
"""
from __future__ import annotations

import uuid

import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.deadline import run_with_deadline
from app.reports import service as svc
from app.reports.enrichment import enrich_report, enrich_reports
from app.reports.schemas import (
    ReportCreateRequest,
    ReportListQuery,
    ReportListResponse,
    ReportResponse,
    ReportStatsResponse,
    ReportStatusUpdateRequest,
)
from shared.models.user import CurrentUser


async def submit_report(
    session: AsyncSession,
    redis: aioredis.Redis,
    reporter: CurrentUser,
    body: ReportCreateRequest,
    settings: Settings,
    timeout: float,
) -> ReportResponse:
    async def _run() -> ReportResponse:
        report = await svc.submit_report(
            session,
            redis,
            reporter.id,
            body,
            window_hours=settings.report_window_hours,
            lock_ttl_seconds=settings.report_lock_ttl_seconds,
        )
        return await enrich_report(session, report)

    return await run_with_deadline(_run(), timeout)


async def list_reports(
    session: AsyncSession,
    requester: CurrentUser,
    query: ReportListQuery,
    timeout: float,
) -> ReportListResponse:
    async def _run() -> ReportListResponse:
        reports, total = await svc.list_reports(session, requester, query)
        items = await enrich_reports(session, reports)
        return ReportListResponse.build(items, total=total, page=query.page, limit=query.limit)

    return await run_with_deadline(_run(), timeout)


async def get_report(
    session: AsyncSession,
    requester: CurrentUser,
    report_id: uuid.UUID,
    timeout: float,
) -> ReportResponse:
    async def _run() -> ReportResponse:
        report = await svc.get_report(session, requester, report_id)
        return await enrich_report(session, report)

    return await run_with_deadline(_run(), timeout)


async def admin_report_stats(
    session: AsyncSession,
    admin: CurrentUser,
    timeout: float,
) -> ReportStatsResponse:
    stats = await run_with_deadline(svc.get_report_stats(session, admin), timeout)
    return ReportStatsResponse(**stats)


async def admin_update_status(
    session: AsyncSession,
    admin: CurrentUser,
    report_id: uuid.UUID,
    body: ReportStatusUpdateRequest,
    timeout: float,
) -> ReportResponse:
    async def _run() -> ReportResponse:
        report = await svc.update_report_status(
            session, admin, report_id, body.status, body.admin_notes
        )
        return await enrich_report(session, report)

    return await run_with_deadline(_run(), timeout)


async def admin_delete_report(
    session: AsyncSession,
    admin: CurrentUser,
    report_id: uuid.UUID,
    timeout: float,
) -> None:
    await run_with_deadline(svc.delete_report(session, admin, report_id), timeout)

"""
User reports domain — user-facing routes.

All routes prefixed /api/v1/user-reports.

Routes:
  POST   /                 Report a user  (per-client slowapi limit + 24h pair rule)
  GET    /                 List reports   (non-admins: only reports they submitted)
  GET    /{report_id}      Single report  (owner or admin)
"""

import uuid

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.config import Settings, get_settings
from app.database import get_db
from app.deadline import get_deadline
from app.rate_limit import limiter, report_submit_limit
from app.redis_client import get_redis
from app.reports import controller as ctrl
from app.reports.constants import (
    DEFAULT_PAGE_SIZE,
    ReportReason,
    ReportSortField,
    ReportStatus,
    SortOrder,
)
from app.reports.schemas import (
    ReportCreateRequest,
    ReportListQuery,
    ReportListResponse,
    ReportResponse,
)
from shared.models.user import CurrentUser

router = APIRouter(prefix="/user-reports", tags=["user-reports"])


@router.post(
    "",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a user",
    description=(
        "Report a user for spam, fraud, harassment, fake listings or other abuse. "
        "You cannot report yourself, and the same user can be reported by you at most "
        "once per 24 hours. The response carries the target's updated `reportCount`."
    ),
    responses={
        400: {"description": "Validation error, self-report, or duplicate within 24 hours"},
        404: {"description": "Reported user not found"},
        429: {"description": "Too many submissions from this client"},
    },
)
@limiter.limit(report_submit_limit)
async def submit_report(
    request: Request,
    body: ReportCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
    timeout: float = Depends(get_deadline),
) -> ReportResponse:
    return await ctrl.submit_report(session, redis, current_user, body, settings, timeout)


@router.get(
    "",
    response_model=ReportListResponse,
    summary="List user reports",
    description=(
        "Admins see every report; everyone else sees only reports they submitted "
        "(any `reportedBy` value they pass is ignored). Soft-deleted reports never appear."
    ),
)
async def list_reports(
    reported_user: uuid.UUID | None = Query(None, alias="reportedUser", description="Filter by reported user ID"),
    reported_by: uuid.UUID | None = Query(None, alias="reportedBy", description="Filter by reporter ID (admins only)"),
    reason: ReportReason | None = Query(None, description="Filter by report reason"),
    report_status: ReportStatus | None = Query(None, alias="status", description="Filter by report status"),
    search: str | None = Query(None, description="Case-insensitive search in description"),
    page: int = Query(1, description="Page number (1-indexed)"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Items per page (1-100)"),
    sort_by: str = Query(ReportSortField.CREATED_AT.value, alias="sortBy", description="createdAt | updatedAt | reportCount"),
    sort_order: str = Query(SortOrder.DESC.value, alias="sortOrder", description="ASC | DESC"),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    timeout: float = Depends(get_deadline),
) -> ReportListResponse:
    query = ReportListQuery(
        reported_user=reported_user,
        reported_by=reported_by,
        reason=reason,
        status=report_status,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await ctrl.list_reports(session, current_user, query, timeout)


@router.get(
    "/{report_id}",
    response_model=ReportResponse,
    summary="Get a user report",
    responses={
        403: {"description": "Report was submitted by someone else"},
        404: {"description": "Report not found"},
    },
)
async def get_report(
    report_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    timeout: float = Depends(get_deadline),
) -> ReportResponse:
    return await ctrl.get_report(session, current_user, report_id, timeout)

"""
User reports domain — admin-facing routes.

Routes:
  GET    /api/v1/admin/user-reports/stats          Counts by status and by reason
  PUT    /api/v1/admin/user-reports/{report_id}    Change status / add admin notes
  DELETE /api/v1/admin/user-reports/{report_id}    Soft delete (kept for audit)

Requires: ADMIN or SUPER_ADMIN role.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import require_admin
from app.database import get_db
from app.deadline import get_deadline
from app.reports import controller as ctrl
from app.reports.schemas import (
    ReportResponse,
    ReportStatsResponse,
    ReportStatusUpdateRequest,
)
from shared.models.user import CurrentUser

router = APIRouter(prefix="/admin/user-reports", tags=["admin-user-reports"])


@router.get(
    "/stats",
    response_model=ReportStatsResponse,
    summary="[Admin] Report statistics",
    description="Totals by status and breakdowns by reason and status. Soft-deleted reports are excluded.",
)
async def report_stats(
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
    timeout: float = Depends(get_deadline),
) -> ReportStatsResponse:
    return await ctrl.admin_report_stats(session, admin, timeout)


@router.put(
    "/{report_id}",
    response_model=ReportResponse,
    summary="[Admin] Update a report's status",
    description=(
        "Set any status (pending, under_review, resolved, dismissed) and optionally "
        "record admin notes. Stamps the reviewing admin and review time."
    ),
)
async def update_report_status(
    report_id: uuid.UUID,
    body: ReportStatusUpdateRequest,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
    timeout: float = Depends(get_deadline),
) -> ReportResponse:
    return await ctrl.admin_update_status(session, admin, report_id, body, timeout)


@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="[Admin] Soft-delete a report",
    description="Hides the report from every list, stat and duplicate check; the row is kept for audit.",
)
async def delete_report(
    report_id: uuid.UUID,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
    timeout: float = Depends(get_deadline),
) -> Response:
    await ctrl.admin_delete_report(session, admin, report_id, timeout)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

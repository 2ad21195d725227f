"""
User reports domain — Pydantic V2 request/response schemas.

Wire keys are camelCase (``reportedUser``, ``reportCount`` …); snake_case
attribute names are accepted on input as well.  Shape and enum checks live
here; length/URL/range rules live in ``validation.py`` so they run as one
explicit step before any mutation.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import ConfigDict, Field

from app.reports.constants import (
    DEFAULT_PAGE_SIZE,
    ReportReason,
    ReportSortField,
    ReportStatus,
    SortOrder,
)
from shared.models.base import CamelModel
from shared.models.pagination import Page


class _Request(CamelModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Requests ──────────────────────────────────────────────────────────────────

class ReportCreateRequest(_Request):
    reported_user: uuid.UUID = Field(description="ID of the user being reported")
    reason: ReportReason
    description: str = Field(description="What happened (10-1000 characters)")
    evidence_urls: list[str] = Field(
        default_factory=list, description="URLs to screenshots or other evidence"
    )
    related_ad: str | None = Field(None, description="ID of the listing that triggered the report")


class ReportStatusUpdateRequest(_Request):
    status: ReportStatus
    admin_notes: str | None = Field(None, description="Resolution notes (max 500 characters)")


class ReportListQuery(_Request):
    """Normalized list filters; built by the router from query parameters."""

    reported_user: uuid.UUID | None = None
    reported_by: uuid.UUID | None = None
    reason: ReportReason | None = None
    status: ReportStatus | None = None
    search: str | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = ReportSortField.CREATED_AT.value
    sort_order: str = SortOrder.DESC.value


# ── Embedded actor details ────────────────────────────────────────────────────

class ActorDetails(CamelModel):
    """Reporter / reviewer identity.  ``id`` is null for the Unknown User placeholder."""

    id: uuid.UUID | None
    name: str
    email: str


class ReportedUserDetails(ActorDetails):
    phone: str | None


# ── Responses ─────────────────────────────────────────────────────────────────

class ReportResponse(CamelModel):
    id: uuid.UUID
    reported_user: uuid.UUID
    reported_user_details: ReportedUserDetails
    reported_by: uuid.UUID
    reported_by_details: ActorDetails
    reason: ReportReason
    description: str
    status: ReportStatus
    reviewed_by: uuid.UUID | None
    reviewed_by_details: ActorDetails | None
    admin_notes: str | None
    reviewed_at: datetime | None
    evidence_urls: list[str]
    related_ad: str | None
    report_count: int | None
    is_resolved: bool
    created_at: datetime
    updated_at: datetime


ReportListResponse = Page[ReportResponse]


class ReportStatsResponse(CamelModel):
    total_reports: int
    pending_reports: int
    resolved_reports: int
    dismissed_reports: int
    reports_by_reason: dict[str, int]
    reports_by_status: dict[str, int]

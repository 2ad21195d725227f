"""
Application-level join of reports against the actor directory.

One page of reports → one ``IN`` query for every distinct actor id it
references → merge in memory.  A missing actor never fails the read; it is
rendered as the Unknown User placeholder so consumers always get a
well-shaped object.
"""
from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.actors.directory import find_actors
from app.actors.models import User
from app.reports.constants import UNKNOWN_USER_EMAIL, UNKNOWN_USER_NAME, UNKNOWN_USER_PHONE
from app.reports.models import Report
from app.reports.schemas import ActorDetails, ReportedUserDetails, ReportResponse


def _actor_details(user: User | None) -> ActorDetails:
    if user is None:
        return ActorDetails(id=None, name=UNKNOWN_USER_NAME, email=UNKNOWN_USER_EMAIL)
    return ActorDetails(id=user.id, name=user.full_name, email=user.email)


def _reported_user_details(user: User | None) -> ReportedUserDetails:
    if user is None:
        return ReportedUserDetails(
            id=None, name=UNKNOWN_USER_NAME, email=UNKNOWN_USER_EMAIL, phone=UNKNOWN_USER_PHONE
        )
    return ReportedUserDetails(
        id=user.id, name=user.full_name, email=user.email, phone=user.phone_number
    )


def to_response(report: Report, actors: dict[uuid.UUID, User]) -> ReportResponse:
    reviewer = None
    if report.reviewed_by_id is not None:
        reviewer = _actor_details(actors.get(report.reviewed_by_id))
    return ReportResponse(
        id=report.id,
        reported_user=report.reported_user_id,
        reported_user_details=_reported_user_details(actors.get(report.reported_user_id)),
        reported_by=report.reported_by_id,
        reported_by_details=_actor_details(actors.get(report.reported_by_id)),
        reason=report.reason,
        description=report.description,
        status=report.status,
        reviewed_by=report.reviewed_by_id,
        reviewed_by_details=reviewer,
        admin_notes=report.admin_notes,
        reviewed_at=report.reviewed_at,
        evidence_urls=list(report.evidence_urls or []),
        related_ad=report.related_ad_id,
        report_count=report.report_count,
        is_resolved=report.is_resolved,
        created_at=report.created_at,
        updated_at=report.updated_at,
    )


async def enrich_reports(session: AsyncSession, reports: Sequence[Report]) -> list[ReportResponse]:
    actor_ids: set[uuid.UUID | None] = set()
    for r in reports:
        actor_ids.update((r.reported_user_id, r.reported_by_id, r.reviewed_by_id))
    actors = await find_actors(session, actor_ids)
    return [to_response(r, actors) for r in reports]


async def enrich_report(session: AsyncSession, report: Report) -> ReportResponse:
    return (await enrich_reports(session, [report]))[0]

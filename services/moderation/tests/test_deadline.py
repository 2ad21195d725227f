import asyncio

import pytest
import sqlalchemy as sa
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

from app.config import Settings
from app.deadline import resolve_timeout, run_with_deadline
from app.exceptions import DeadlineExceeded, StoreUnavailable
from app.reports import controller as ctrl
from app.reports import service as svc
from app.reports.constants import ReportReason
from app.reports.models import Report
from app.reports.schemas import ReportCreateRequest


def test_resolve_timeout_defaults_and_caps() -> None:
    settings = Settings(request_timeout_seconds=10.0, max_request_timeout_seconds=30.0)
    assert resolve_timeout(None, settings) == 10.0
    assert resolve_timeout(0, settings) == 10.0
    assert resolve_timeout(2.5, settings) == 2.5
    assert resolve_timeout(120, settings) == 30.0


@pytest.mark.asyncio
async def test_run_with_deadline_returns_result() -> None:
    async def _work() -> str:
        return "done"

    assert await run_with_deadline(_work(), 1.0) == "done"


@pytest.mark.asyncio
async def test_run_with_deadline_times_out() -> None:
    with pytest.raises(DeadlineExceeded) as exc_info:
        await run_with_deadline(asyncio.sleep(5), 0.01)
    assert exc_info.value.status_code == 504


@pytest.mark.asyncio
async def test_store_failures_become_unavailable() -> None:
    async def _db_down() -> None:
        raise OperationalError("SELECT 1", {}, Exception("could not connect"))

    async def _redis_down() -> None:
        raise RedisConnectionError("connection refused")

    with pytest.raises(StoreUnavailable) as exc_info:
        await run_with_deadline(_db_down(), 1.0)
    assert exc_info.value.status_code == 503
    with pytest.raises(StoreUnavailable):
        await run_with_deadline(_redis_down(), 1.0)


@pytest.mark.asyncio
async def test_deadline_during_recompute_keeps_committed_report(
    db_session, fake_redis, reporter, reporter_user, target, monkeypatch
) -> None:
    async def _slow_recompute(session, reported_user_id):
        await asyncio.sleep(5)

    monkeypatch.setattr(svc, "recompute_report_count", _slow_recompute)
    body = ReportCreateRequest(
        reported_user=target.id,
        reason=ReportReason.FRAUD,
        description="Took a deposit and blocked me afterwards.",
    )

    with pytest.raises(DeadlineExceeded) as exc_info:
        await ctrl.submit_report(db_session, fake_redis, reporter_user, body, Settings(), 0.5)
    assert exc_info.value.status_code == 504

    rows = (
        await db_session.execute(
            sa.select(Report.reported_by_id, Report.report_count).where(
                Report.reported_user_id == target.id
            )
        )
    ).all()
    assert [(r.reported_by_id, r.report_count) for r in rows] == [(reporter.id, None)]

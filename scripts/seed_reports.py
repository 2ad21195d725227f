#!/usr/bin/env python3
"""
Seed the moderation database with demo users and reports for local dev.

Reads from .env:
    MODERATION_DATABASE_URL   — target database (tables must already exist)
    REDIS_URL                 — Redis used for the submission lock

Usage:
    cd <repo root>
    python scripts/seed_reports.py
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(repo_root / "shared"))
sys.path.insert(0, str(repo_root / "services" / "moderation"))

from dotenv import load_dotenv

load_dotenv(repo_root / ".env")

import sqlalchemy as sa

from app.actors.models import User
from app.config import get_settings
from app.exceptions import ReportAlreadySubmitted
from app.reports import service as svc
from app.reports.constants import ReportReason
from app.reports.schemas import ReportCreateRequest
from shared.database.postgres import get_async_session_factory
from shared.database.redis_client import close_redis_client, get_redis_client

_USERS = [
    ("Alice Buyer", "alice@marketplace.local", "+15550101"),
    ("Bob Seller", "bob@marketplace.local", "+15550102"),
    ("Carol Buyer", "carol@marketplace.local", None),
]

# (reporter email, reported email, reason, description)
_REPORTS = [
    ("alice@marketplace.local", "bob@marketplace.local", ReportReason.FRAUD,
     "Took payment for a bike and never shipped it."),
    ("carol@marketplace.local", "bob@marketplace.local", ReportReason.FAKE_LISTINGS,
     "The same stock photo is used on six different listings."),
    ("bob@marketplace.local", "carol@marketplace.local", ReportReason.HARASSMENT,
     "Sent repeated abusive messages after I declined an offer."),
]


async def _ensure_user(session, full_name: str, email: str, phone: str | None) -> User:
    user = (
        await session.execute(sa.select(User).where(User.email == email))
    ).scalar_one_or_none()
    if user is None:
        user = User(full_name=full_name, email=email, phone_number=phone)
        session.add(user)
        await session.commit()
        print(f"  user  {email} (id={user.id})")
    return user


async def main() -> None:
    settings = get_settings()
    factory = get_async_session_factory(settings.moderation_database_url)
    redis = get_redis_client(settings.redis_url)

    try:
        async with factory() as session:
            users = {}
            for full_name, email, phone in _USERS:
                users[email] = await _ensure_user(session, full_name, email, phone)

            for reporter, reported, reason, description in _REPORTS:
                body = ReportCreateRequest(
                    reported_user=users[reported].id, reason=reason, description=description
                )
                try:
                    report = await svc.submit_report(
                        session,
                        redis,
                        users[reporter].id,
                        body,
                        window_hours=settings.report_window_hours,
                        lock_ttl_seconds=settings.report_lock_ttl_seconds,
                    )
                except ReportAlreadySubmitted:
                    print(f"  skip  {reporter} -> {reported} (already reported)")
                    continue
                print(f"  report {report.id} {reporter} -> {reported} ({reason.value})")
    finally:
        await close_redis_client(redis)

    print("Seed done.")


if __name__ == "__main__":
    asyncio.run(main())

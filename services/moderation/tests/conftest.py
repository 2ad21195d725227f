import os

# The slowapi limiter reads these at import time; per-client limits are not
# what these tests exercise.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_STORAGE_URI", "memory://")

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.actors.models import User
from app.auth.dependencies import get_current_user
from app.database import set_session_factory
from app.main import app
from app.redis_client import get_redis
from app.reports.constants import ReportReason, ReportStatus
from app.reports.models import Report
from shared.constants import Role
from shared.database.postgres import Base, get_async_engine, session_factory_for
from shared.models.user import CurrentUser


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = get_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return session_factory_for(engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[FakeRedis, None]:
    client = FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


# ── Actors ────────────────────────────────────────────────────────────────────

ActorFactory = Callable[..., Awaitable[User]]


@pytest.fixture
def make_actor(db_session: AsyncSession) -> ActorFactory:
    async def _make(
        full_name: str = "Test User",
        email: str | None = None,
        phone_number: str | None = "+15550100",
    ) -> User:
        user = User(
            full_name=full_name,
            email=email or f"{uuid4().hex[:10]}@example.com",
            phone_number=phone_number,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


def as_current_user(user: User, *roles: Role) -> CurrentUser:
    return CurrentUser(id=user.id, email=user.email, roles=list(roles or (Role.USER,)))


@pytest_asyncio.fixture
async def reporter(make_actor: ActorFactory) -> User:
    return await make_actor("Rita Reporter", "rita@example.com")


@pytest_asyncio.fixture
async def target(make_actor: ActorFactory) -> User:
    return await make_actor("Tom Target", "tom@example.com", "+15550199")


@pytest_asyncio.fixture
async def admin(make_actor: ActorFactory) -> User:
    return await make_actor("Ada Admin", "ada@example.com", None)


@pytest.fixture
def reporter_user(reporter: User) -> CurrentUser:
    return as_current_user(reporter)


@pytest.fixture
def admin_user(admin: User) -> CurrentUser:
    return as_current_user(admin, Role.ADMIN)


# ── Direct row insertion (backdated / pre-seeded reports) ─────────────────────

@pytest.fixture
def add_report(db_session: AsyncSession) -> Callable[..., Awaitable[Report]]:
    async def _add(
        reported_user_id,
        reported_by_id,
        *,
        reason: ReportReason = ReportReason.SPAM,
        description: str = "Posted the same listing forty times.",
        status: ReportStatus = ReportStatus.PENDING,
        created_at: datetime | None = None,
        report_count: int | None = None,
    ) -> Report:
        report = Report(
            reported_user_id=reported_user_id,
            reported_by_id=reported_by_id,
            reason=reason,
            description=description,
            status=status,
            is_resolved=status is ReportStatus.RESOLVED,
            report_count=report_count,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(report)
        await db_session.commit()
        return report

    return _add


# ── HTTP client ───────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
    fake_redis: FakeRedis,
) -> AsyncGenerator[AsyncClient, None]:
    set_session_factory(session_factory)
    app.dependency_overrides[get_redis] = lambda: fake_redis
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    set_session_factory(None)


@pytest.fixture
def login() -> Callable[[CurrentUser], None]:
    """Authenticate subsequent requests as the given caller."""

    def _login(user: CurrentUser) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _login

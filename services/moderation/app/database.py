"""
Moderation service — database wiring.

One engine and session factory per process, created by ``init_db`` at startup
and torn down by ``dispose_db``.  Request handlers get a session through
``get_db``; the transaction commits when the handler returns and rolls back
when it raises.
"""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from shared.database.postgres import get_async_engine, session_factory_for

# Import all models so SQLAlchemy's Base.metadata is populated.
# Required for Alembic autogenerate and create_all().
import app.actors.models  # noqa: F401
import app.reports.models  # noqa: F401

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_db(database_url: str) -> None:
    global _engine, _session_factory
    _engine = get_async_engine(database_url)
    _session_factory = session_factory_for(_engine, expire_on_commit=False)


async def dispose_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


def set_session_factory(factory: async_sessionmaker[AsyncSession] | None) -> None:
    """Point request sessions at an engine owned by the caller (used by tests)."""
    global _session_factory
    _session_factory = factory


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("Database not initialized")
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

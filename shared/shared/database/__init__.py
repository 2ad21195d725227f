from shared.database.postgres import (
    Base,
    get_async_engine,
    get_async_session_factory,
    session_factory_for,
)
from shared.database.redis_client import close_redis_client, get_redis_client

__all__ = [
    "Base",
    "get_async_engine",
    "get_async_session_factory",
    "session_factory_for",
    "get_redis_client",
    "close_redis_client",
]

"""
Async Redis client — holds the per-pair report submission locks.

Uses a module-level singleton so a single connection pool is reused per
process.  The pool is created lazily on first call to get_redis_client().
"""
from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import Depends

from app.config import Settings, get_settings
from shared.database.redis_client import close_redis_client
from shared.database.redis_client import get_redis_client as _connect

_client: aioredis.Redis | None = None


def get_redis_client(redis_url: str) -> aioredis.Redis:
    """Return (and lazily create) the module-level async Redis client."""
    global _client
    if _client is None:
        _client = _connect(redis_url)
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await close_redis_client(_client)
        _client = None


def get_redis(settings: Settings = Depends(get_settings)) -> aioredis.Redis:
    return get_redis_client(settings.redis_url)

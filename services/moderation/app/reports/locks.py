"""
Per-pair submission lock (Redis SET NX EX).

The 24-hour duplicate check is a read followed by an insert; two concurrent
submissions for the same reporter → target pair could both pass it.  Holding
this lock across check + insert + commit closes that gap: the loser sees the
lock taken and is rejected as a duplicate.  The TTL bounds how long a crashed
holder, or a release that failed, can block the pair.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

_PAIR_LOCK_PREFIX = "user_report:lock:"


def pair_lock_key(reported_user_id: uuid.UUID, reported_by_id: uuid.UUID) -> str:
    return f"{_PAIR_LOCK_PREFIX}{reported_user_id}:{reported_by_id}"


@asynccontextmanager
async def submission_lock(
    redis: aioredis.Redis,
    reported_user_id: uuid.UUID,
    reported_by_id: uuid.UUID,
    *,
    ttl_seconds: int,
) -> AsyncIterator[bool]:
    """Yield True when this call owns the pair lock, False when another submission does."""
    key = pair_lock_key(reported_user_id, reported_by_id)
    token = uuid.uuid4().hex
    acquired = bool(await redis.set(key, token, nx=True, ex=ttl_seconds))
    if not acquired:
        logger.warning("Concurrent report submission for pair %s", key)
    try:
        yield acquired
    finally:
        if acquired:
            await _release(redis, key, token)


async def _release(redis: aioredis.Redis, key: str, token: str) -> None:
    # Only release our own lock; an expired-and-retaken key belongs to someone else.
    try:
        if await redis.get(key) == token:
            await redis.delete(key)
    except RedisError:
        logger.warning("Could not release pair lock %s; it expires on its own", key, exc_info=True)

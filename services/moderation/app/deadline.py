"""
Per-request deadlines.

Every report operation runs under a time budget.  The caller may supply one via
the ``X-Request-Timeout`` header (seconds); otherwise the configured default
applies.  The budget is always capped by ``max_request_timeout_seconds``.

Expiry raises DeadlineExceeded (504).  Work the store already committed is not
undone: a submission whose count recompute is cut off keeps its row.
Connection-level store failures become StoreUnavailable (503).
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Depends, Header
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from sqlalchemy.exc import InterfaceError, OperationalError

from app.config import Settings, get_settings
from app.exceptions import DeadlineExceeded, StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_timeout(requested: float | None, settings: Settings) -> float:
    if requested is None or requested <= 0:
        return settings.request_timeout_seconds
    return min(requested, settings.max_request_timeout_seconds)


def get_deadline(
    x_request_timeout: float | None = Header(default=None, alias="X-Request-Timeout"),
    settings: Settings = Depends(get_settings),
) -> float:
    return resolve_timeout(x_request_timeout, settings)


async def run_with_deadline(awaitable: Awaitable[T], timeout: float) -> T:
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Operation exceeded its %.2fs deadline", timeout)
        raise DeadlineExceeded() from None
    except (OperationalError, InterfaceError, RedisConnectionError, RedisTimeoutError) as exc:
        logger.error("Backing store unavailable: %s", exc)
        raise StoreUnavailable() from exc

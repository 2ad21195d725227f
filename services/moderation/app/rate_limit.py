"""
Global slowapi rate limiter.

Imported by reports/router.py for per-endpoint limits.  Mounted onto app.state
in main.py so slowapi middleware can find it.

Storage: Redis (same instance as the submission locks), so every worker shares
one counter per client.  RATE_LIMIT_STORAGE_URI overrides it (e.g. memory://
for a single-process dev server).
"""
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings


def storage_uri() -> str:
    return os.getenv("RATE_LIMIT_STORAGE_URI") or get_settings().redis_url


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=storage_uri(),
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() != "false",
)


def report_submit_limit() -> str:
    return get_settings().report_submit_rate_limit

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.database import dispose_db, init_db
from app.rate_limit import limiter
from app.redis_client import close_redis
from app.reports.admin_router import router as reports_admin_router
from app.reports.router import router as reports_router
from shared.middleware.error_handler import (
    error_envelope_middleware,
    http_exception_handler,
    request_validation_handler,
)
from shared.middleware.request_id import request_id_middleware


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## Marketplace Moderation Service

Lets marketplace users report abusive accounts and lets administrators review them:

* **Submit**: report a user for spam, fraud, harassment, fake listings, price
  manipulation, contact abuse, inappropriate content or other reasons, with optional
  evidence URLs and the listing that triggered the report.
* **Anti-abuse**: no self-reports; one report per reporter → user pair per rolling 24 hours.
* **Review**: admins move reports through `pending → under_review → resolved | dismissed`,
  with notes; every transition records the reviewing admin and time.
* **Visibility**: users only ever see reports they submitted; admins see everything.
* **Soft delete**: deleted reports are kept for audit but hidden everywhere.

### Authentication
All endpoints require:
```
Authorization: Bearer <access_token>
```
Admin endpoints additionally require the `admin` or `super_admin` role in the token.

### Error shape
All errors return a consistent JSON envelope:
```json
{ "detail": "Human-readable message", "error": {"code": "...", "message": "..."}, "request_id": "..." }
```
Validation errors return `400` with a list of `{field, message}` objects under `detail`.

### Deadlines
Send `X-Request-Timeout: <seconds>` to bound a call; `504` is returned when it expires.
"""

_TAGS_METADATA = [
    {
        "name": "user-reports",
        "description": (
            "Submit reports against other users and read back the reports you submitted. "
            "Every report is returned with reporter / reported-user / reviewer details."
        ),
    },
    {
        "name": "admin-user-reports",
        "description": "**Admin only.** Statistics, status transitions and soft deletion.",
    },
]


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.moderation_database_url)
    yield
    await close_redis()
    await dispose_db()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s:%(name)s: %(message)s",
    )

    app = FastAPI(
        title="Marketplace Moderation Service",
        version="1.0.0",
        description=_DESCRIPTION,
        openapi_tags=_TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Attach rate limiter state before middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Middleware is applied in reverse-registration order (last added = outermost).
    # CORS must be outermost so ALL responses (including 429s) carry CORS headers.
    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(error_envelope_middleware)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(reports_router, prefix="/api/v1")
    app.include_router(reports_admin_router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="moderation")

    return app


app = create_app()

# to start: uvicorn app.main:app --reload  (from services/moderation)

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _envelope(request: Request, status_code: int, code: str, detail: Any) -> JSONResponse:
    message = detail if isinstance(detail, str) else code
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "error": {"code": code, "message": message},
            "request_id": getattr(request.state, "request_id", None),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    code = getattr(exc, "code", None) or "http_error"
    response = _envelope(request, exc.status_code, code, exc.detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    """Malformed input is an invalid request (400) with a field-by-field error list."""
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
            "message": err.get("msg", "Invalid value."),
        }
        for err in exc.errors()
    ]
    return _envelope(request, status.HTTP_400_BAD_REQUEST, "invalid_request", errors)


async def error_envelope_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    try:
        return await call_next(request)
    except StarletteHTTPException as exc:
        return await http_exception_handler(request, exc)
    except Exception:
        logger.exception("Unhandled exception")
        return _envelope(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )

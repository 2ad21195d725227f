"""
Moderation service — domain-specific HTTP exceptions.

All exceptions use preset status codes and detail messages so that callers
never need to specify these at the call site.  The global error_envelope_middleware
in shared catches these and wraps them in the standard error envelope; ``code``
becomes ``error.code`` in that envelope.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass

from fastapi import HTTPException, status


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


# ── Invalid request (400) ─────────────────────────────────────────────────────

class InvalidReportRequest(HTTPException):
    """One or more fields failed validation; detail carries every field error."""

    code = "invalid_request"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[asdict(e) for e in errors],
        )


class CannotReportSelf(HTTPException):
    code = "cannot_report_self"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot report yourself.")


class ReportAlreadySubmitted(HTTPException):
    """Same reporter → same target inside the rolling submission window."""

    code = "already_reported"

    def __init__(self, window_hours: int = 24) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "You have already reported this user recently. "
                f"Please wait {window_hours} hours before reporting again."
            ),
        )


# ── Not found (404) ───────────────────────────────────────────────────────────

class ReportNotFound(HTTPException):
    code = "report_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found.")


class ReportedUserNotFound(HTTPException):
    code = "reported_user_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Reported user not found.")


# ── Forbidden (403) ───────────────────────────────────────────────────────────

class ReportAccessDenied(HTTPException):
    """Non-privileged caller asked for a report somebody else submitted."""

    code = "forbidden"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own reports.",
        )


class AdminAccessRequired(HTTPException):
    code = "admin_required"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required.",
        )


# ── Infrastructure (503 / 504) ────────────────────────────────────────────────

class StoreUnavailable(HTTPException):
    code = "unavailable"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="The report store is temporarily unavailable. Please try again shortly.",
        )


class DeadlineExceeded(HTTPException):
    code = "timeout"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="The request did not complete before its deadline.",
        )

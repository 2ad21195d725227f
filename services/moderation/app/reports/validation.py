"""
User reports domain — explicit per-operation validation.

Each function returns every field error it finds (empty list = valid) and never
touches the database.  Service entry points call them before any read or write
and raise ``InvalidReportRequest`` with the full list.
"""
from __future__ import annotations

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from app.exceptions import FieldError
from app.reports.constants import (
    ADMIN_NOTES_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    EVIDENCE_URLS_MAX,
    RELATED_AD_MAX_LENGTH,
    ReportSortField,
    SortOrder,
)
from shared.models.pagination import MAX_PAGE_SIZE

_http_url = TypeAdapter(AnyHttpUrl)


def _is_http_url(value: str) -> bool:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_submission(
    description: str,
    evidence_urls: list[str] | None,
    related_ad: str | None,
) -> list[FieldError]:
    errors: list[FieldError] = []

    text = (description or "").strip()
    if len(text) < DESCRIPTION_MIN_LENGTH:
        errors.append(FieldError(
            "description",
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long.",
        ))
    elif len(text) > DESCRIPTION_MAX_LENGTH:
        errors.append(FieldError(
            "description",
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.",
        ))

    urls = evidence_urls or []
    if len(urls) > EVIDENCE_URLS_MAX:
        errors.append(FieldError(
            "evidenceUrls", f"At most {EVIDENCE_URLS_MAX} evidence URLs are allowed."
        ))
    for i, url in enumerate(urls):
        if not _is_http_url(url):
            errors.append(FieldError(f"evidenceUrls.{i}", "Must be a valid http(s) URL."))

    if related_ad is not None and not (0 < len(related_ad) <= RELATED_AD_MAX_LENGTH):
        errors.append(FieldError(
            "relatedAd", f"relatedAd must be 1-{RELATED_AD_MAX_LENGTH} characters."
        ))
    return errors


def validate_status_update(admin_notes: str | None) -> list[FieldError]:
    if admin_notes is not None and len(admin_notes) > ADMIN_NOTES_MAX_LENGTH:
        return [FieldError(
            "adminNotes", f"Admin notes cannot exceed {ADMIN_NOTES_MAX_LENGTH} characters."
        )]
    return []


def validate_list_query(page: int, limit: int, sort_by: str, sort_order: str) -> list[FieldError]:
    errors: list[FieldError] = []
    if page < 1:
        errors.append(FieldError("page", "page must be 1 or greater."))
    if not 1 <= limit <= MAX_PAGE_SIZE:
        errors.append(FieldError("limit", f"limit must be between 1 and {MAX_PAGE_SIZE}."))
    if sort_by not in {f.value for f in ReportSortField}:
        allowed = ", ".join(f.value for f in ReportSortField)
        errors.append(FieldError("sortBy", f"sortBy must be one of: {allowed}."))
    if sort_order not in {o.value for o in SortOrder}:
        errors.append(FieldError("sortOrder", "sortOrder must be ASC or DESC."))
    return errors

from app.reports.validation import (
    validate_list_query,
    validate_status_update,
    validate_submission,
)


def _fields(errors) -> set[str]:
    return {e.field for e in errors}


def test_valid_submission_has_no_errors() -> None:
    errors = validate_submission(
        "Listed a car that does not exist.",
        ["https://example.com/a.png", "http://example.com/b.jpg"],
        "ad-123",
    )
    assert errors == []


def test_description_length_measured_after_trim() -> None:
    assert _fields(validate_submission("   123456789   ", [], None)) == {"description"}
    assert validate_submission("   1234567890   ", [], None) == []
    assert _fields(validate_submission("x" * 1001, [], None)) == {"description"}
    assert validate_submission("x" * 1000, [], None) == []


def test_evidence_urls_limits() -> None:
    eleven = [f"https://example.com/{i}.png" for i in range(11)]
    assert _fields(validate_submission("A long enough description", eleven, None)) == {"evidenceUrls"}

    errors = validate_submission(
        "A long enough description", ["https://ok.example.com", "not a url", "mailto:x@y.z"], None
    )
    assert _fields(errors) == {"evidenceUrls.1", "evidenceUrls.2"}


def test_related_ad_bounds() -> None:
    assert validate_submission("A long enough description", [], "a" * 64) == []
    assert _fields(validate_submission("A long enough description", [], "a" * 65)) == {"relatedAd"}
    assert _fields(validate_submission("A long enough description", [], "")) == {"relatedAd"}


def test_admin_notes_bounds() -> None:
    assert validate_status_update(None) == []
    assert validate_status_update("n" * 500) == []
    assert _fields(validate_status_update("n" * 501)) == {"adminNotes"}


def test_list_query_bounds() -> None:
    assert validate_list_query(1, 20, "createdAt", "DESC") == []
    assert validate_list_query(5, 100, "reportCount", "ASC") == []
    assert _fields(validate_list_query(0, 0, "createdAt", "DESC")) == {"page", "limit"}
    assert _fields(validate_list_query(1, 20, "created_at", "desc")) == {"sortBy", "sortOrder"}

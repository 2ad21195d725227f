"""
User reports domain — enums and limits.
"""
from __future__ import annotations

import enum

DESCRIPTION_MIN_LENGTH: int = 10
DESCRIPTION_MAX_LENGTH: int = 1_000
ADMIN_NOTES_MAX_LENGTH: int = 500
EVIDENCE_URLS_MAX: int = 10
RELATED_AD_MAX_LENGTH: int = 64

DEFAULT_PAGE_SIZE: int = 20

# Placeholder rendered when a referenced actor no longer exists.
UNKNOWN_USER_NAME = "Unknown User"
UNKNOWN_USER_EMAIL = "unknown@example.com"
UNKNOWN_USER_PHONE = "N/A"


class ReportReason(str, enum.Enum):
    SPAM = "spam"
    INAPPROPRIATE_CONTENT = "inappropriate_content"
    FRAUD = "fraud"
    HARASSMENT = "harassment"
    FAKE_LISTINGS = "fake_listings"
    PRICE_MANIPULATION = "price_manipulation"
    CONTACT_ABUSE = "contact_abuse"
    OTHER = "other"


# ── Review lifecycle ──────────────────────────────────────────────────────────
# pending → under_review → resolved | dismissed.  Admins may also jump straight
# from pending to a terminal state, or write any status back.
class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportSortField(str, enum.Enum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    REPORT_COUNT = "reportCount"


class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"

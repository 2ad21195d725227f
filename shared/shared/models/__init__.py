from shared.models.base import CamelModel
from shared.models.pagination import MAX_PAGE_SIZE, Page, page_offset
from shared.models.user import CurrentUser

__all__ = ["CamelModel", "CurrentUser", "MAX_PAGE_SIZE", "Page", "page_offset"]

"""
Moderation service — auth FastAPI dependencies.

These wrap the shared JWT dependencies and add the admin role guard used by
the admin report routes.
"""
from __future__ import annotations

from fastapi import Depends

from app.exceptions import AdminAccessRequired
from shared.auth.dependencies import get_current_user_required
from shared.models.user import CurrentUser

# Alias the shared dependency so routes import from here, not from shared
# directly.  Tests override this name.
get_current_user = get_current_user_required


def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Raise 403 unless the authenticated user holds the ADMIN or SUPER_ADMIN role."""
    if not current_user.is_privileged:
        raise AdminAccessRequired()
    return current_user

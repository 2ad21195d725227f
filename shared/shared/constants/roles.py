from enum import Enum


class Role(str, Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


# Roles allowed to review, resolve, dismiss and delete reports and to see
# every report regardless of who submitted it.
PRIVILEGED_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


def is_privileged(roles: list[Role] | list[str]) -> bool:
    return any(Role(r) in PRIVILEGED_ROLES for r in roles)

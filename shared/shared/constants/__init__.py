from shared.constants.roles import PRIVILEGED_ROLES, Role, is_privileged

__all__ = ["Role", "PRIVILEGED_ROLES", "is_privileged"]

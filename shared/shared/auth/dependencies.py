import logging
from functools import lru_cache
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.auth.config import AuthSettings
from shared.constants import Role
from shared.models.user import CurrentUser

logger = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)

_KNOWN_ROLES = {r.value for r in Role}


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings()


def _decode_token(token: str, settings: AuthSettings) -> dict:
    return jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        audience=settings.audience,
        options={"leeway": settings.leeway_seconds},
    )


def _payload_to_user(payload: dict) -> CurrentUser:
    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Missing sub in token")
    email = payload.get("email") or ""
    roles_raw = payload.get("roles") or []
    if isinstance(roles_raw, str):
        roles_raw = [roles_raw]
    # Roles minted by newer identity releases are ignored rather than rejected.
    roles = [Role(r) for r in roles_raw if r in _KNOWN_ROLES]
    return CurrentUser(id=UUID(user_id), email=email, roles=roles)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CurrentUser | None:
    if not credentials or not credentials.credentials:
        return None
    try:
        payload = _decode_token(credentials.credentials, settings)
        return _payload_to_user(payload)
    except (JWTError, ValueError, KeyError) as exc:
        logger.info("Rejected bearer token: %s", exc)
        return None


async def get_current_user_required(
    user: CurrentUser | None = Depends(get_current_user_optional),
) -> CurrentUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

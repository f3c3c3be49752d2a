"""JWT bearer-token helpers and role guards."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from fastapi import Depends, HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError

from funeral_desk.core.config import AuthSettings, get_settings


class AuthenticationError(Exception):
    """Raised when authentication or token validation fails."""


# Immutable dataclass for the decoded credential
@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """Representation of the authenticated staff member."""

    staff_id: str
    name: str
    role: str

    def as_dict(self) -> dict[str, str]:
        return {"staff_id": self.staff_id, "name": self.name, "role": self.role}


class SecurityProvider:
    """Issue and verify signed access tokens."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    @property
    def token_ttl_seconds(self) -> int:
        """Return the access token lifetime in seconds."""

        return int(self._settings.access_token_expire_minutes * 60)

    @property
    def admin_role(self) -> str:
        return self._settings.admin_role

    @property
    def is_enabled(self) -> bool:
        return self._settings.enabled

    def default_admin_user(self) -> AuthenticatedUser:
        return AuthenticatedUser(staff_id="system", name="System", role=self._settings.admin_role)

    def is_admin(self, user: AuthenticatedUser) -> bool:
        return user.role == self._settings.admin_role

    def create_access_token(self, user: AuthenticatedUser, *, now: datetime | None = None) -> str:
        """Create a signed JWT carrying the staff id, name and role."""

        issued = now or datetime.now(tz=timezone.utc)
        expires = issued + timedelta(minutes=self._settings.access_token_expire_minutes)
        payload: dict[str, object] = {
            "sub": user.staff_id,
            "name": user.name,
            "role": user.role,
            "iat": int(issued.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> AuthenticatedUser:
        """Decode a JWT and return the corresponding ``AuthenticatedUser``."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        staff_id = payload.get("sub")
        name = payload.get("name")
        role = payload.get("role")
        if not isinstance(staff_id, str) or not isinstance(role, str):
            raise AuthenticationError("Token payload missing required claims")
        if not isinstance(name, str):
            name = ""
        return AuthenticatedUser(staff_id=staff_id, name=name, role=role)


@lru_cache(maxsize=1)
def get_security_provider() -> SecurityProvider:
    """Return a cached security provider instance."""

    return SecurityProvider(get_settings().auth)


def get_authenticated_user(request: Request) -> AuthenticatedUser:
    """Retrieve the authenticated user placed on the request by the middleware."""

    security = get_security_provider()
    if not security.is_enabled:
        return security.default_admin_user()

    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization token missing or invalid format.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin_user(
    user: AuthenticatedUser = Depends(get_authenticated_user),
) -> AuthenticatedUser:
    """Ensure the current user holds the administrator role."""

    if not get_security_provider().is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return user


__all__ = [
    "AuthenticatedUser",
    "AuthenticationError",
    "SecurityProvider",
    "get_security_provider",
    "get_authenticated_user",
    "require_admin_user",
]

"""Authentication route issuing bearer tokens."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import SecurityProvider, get_security_provider
from funeral_desk.schemas.auth import LoginRequest, LoginResponse, StaffProfile
from funeral_desk.services import AuthService

from .dependencies import get_auth_service

LOGGER = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def get_security() -> SecurityProvider:
    return get_security_provider()


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    security: SecurityProvider = Depends(get_security),
) -> LoginResponse:
    """Check staff credentials and return a signed access token."""

    user = service.authenticate(payload.username, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    token = security.create_access_token(user)
    LOGGER.info("Staff %s logged in as %s", user.staff_id, user.role)
    return LoginResponse(
        message="Login successful.",
        token=token,
        user=StaffProfile(**user.as_dict()),
    )


__all__ = ["router"]

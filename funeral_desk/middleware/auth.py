"""Application middleware enforcing bearer-token authentication."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from funeral_desk.core.logger import get_logger, log_context
from funeral_desk.core.security import AuthenticationError, AuthenticatedUser, SecurityProvider

LOGGER = get_logger(__name__)


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        {"message": message},
        status_code=401,
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a valid ``Authorization: Bearer`` credential."""

    def __init__(
        self,
        app,
        security_provider: SecurityProvider,
        *,
        login_path: str = "/auth/login",
        exempt_paths: Iterable[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._security_provider = security_provider
        self._exempt_paths = set(exempt_paths or ()) | {login_path}

    def _is_exempt(self, path: str) -> bool:
        """Return ``True`` when the request path should bypass authentication."""

        if path in self._exempt_paths:
            return True
        return path in {"/", "/health", "/openapi.json", "/docs", "/redoc", "/favicon.ico"}

    @staticmethod
    def _bearer_token(request: Request) -> str | None:
        header = request.headers.get("authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path
        request.state.user = None

        with log_context.request(request.method, path):
            if self._is_exempt(path) or not self._security_provider.is_enabled:
                return await call_next(request)

            token = self._bearer_token(request)
            if token is None:
                LOGGER.info("Request without bearer token rejected")
                return _unauthorized("Authorization token missing or invalid format.")

            try:
                user: AuthenticatedUser = self._security_provider.decode_token(token)
            except AuthenticationError as exc:
                LOGGER.info("Failed to decode access token: %s", exc)
                return _unauthorized("Invalid or expired token.")

            request.state.user = user
            log_context.bind(staff_id=user.staff_id)
            return await call_next(request)


__all__ = ["AuthMiddleware"]

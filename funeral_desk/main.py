"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from funeral_desk import __version__
from funeral_desk.core import get_logger, get_settings
from funeral_desk.core.errors import AppError
from funeral_desk.core.logger import init_logging
from funeral_desk.core.security import get_security_provider
from funeral_desk.middleware.auth import AuthMiddleware
from funeral_desk.routers import (
    admin_router,
    auth_router,
    cases_router,
    contracts_router,
    inventory_router,
    notify_router,
    payments_router,
    procurement_router,
    reminders_router,
    reports_router,
    schedule_router,
)

LOGGER = get_logger(__name__)


def _first_invalid_field(exc: RequestValidationError) -> tuple[str, str]:
    errors = exc.errors()
    if not errors:
        return "body", "Invalid request."
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location) or "body"
    return field, f"{field}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render domain, validation and HTTP errors as ``{"message": ...}`` bodies."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            LOGGER.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        else:
            LOGGER.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        field, message = _first_invalid_field(exc)
        LOGGER.info("%s %s invalid field %s", request.method, request.url.path, field)
        return JSONResponse(
            {"message": message, "field": field},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            {"message": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    init_logging(
        level=settings.log_level,
        log_dir=Path(settings.log_dir),
        timezone=settings.timezone,
    )

    app = FastAPI(title="Funeral Desk", version=__version__)
    app.add_middleware(AuthMiddleware, security_provider=get_security_provider())
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(cases_router)
    app.include_router(contracts_router)
    app.include_router(schedule_router)
    app.include_router(reminders_router)
    app.include_router(inventory_router)
    app.include_router(payments_router)
    app.include_router(procurement_router)
    app.include_router(reports_router)
    app.include_router(admin_router)
    app.include_router(notify_router)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        return {"message": "Funeral desk API is running."}

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok", "environment": settings.environment}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()

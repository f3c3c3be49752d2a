"""Domain exceptions and the HTTP status each one maps to."""
from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def details(self) -> str | None:
        """Underlying message attached verbatim for diagnostics."""

        if self.cause is None:
            return None
        if isinstance(self.cause, AppError) and self.cause.details:
            return f"{self.cause.message}: {self.cause.details}"
        return str(self.cause)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """A required field is missing or holds an unusable value."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message, "field": self.field}


class NotFoundError(AppError):
    """A referenced record does not exist or a filtered query is empty."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(AppError):
    """The backing row store rejected or failed a call."""


class AggregationError(AppError):
    """Report aggregation aborted because one of its source reads failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__("Aggregation failed", cause=cause)


class NotificationError(AppError):
    """The reminder push channel is misconfigured or the push failed."""

    status_code = status.HTTP_502_BAD_GATEWAY


__all__ = [
    "AppError",
    "AggregationError",
    "NotFoundError",
    "NotificationError",
    "StoreError",
    "ValidationError",
]

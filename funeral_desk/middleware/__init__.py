"""ASGI middleware for the funeral desk API."""

from .auth import AuthMiddleware

__all__ = ["AuthMiddleware"]

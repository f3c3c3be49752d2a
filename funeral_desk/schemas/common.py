"""Response envelopes shared by every router."""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataList(BaseModel, Generic[T]):
    """A message plus a list of records under ``data``."""

    message: str = ""
    data: list[T]


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    message: str
    details: str | None = None
    field: str | None = None

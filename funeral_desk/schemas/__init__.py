"""Pydantic request and response models."""

from .common import DataList, ErrorResponse
from .reports import CaseFinancials

__all__ = ["CaseFinancials", "DataList", "ErrorResponse"]

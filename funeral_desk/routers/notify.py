"""Route triggering the daily reminder push."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from funeral_desk.schemas.notify import DigestResult
from funeral_desk.services import NotifyService

from .dependencies import get_notify_service

router = APIRouter(prefix="/notify", tags=["notify"])


@router.get("/check-today", response_model=DigestResult)
def check_today(service: NotifyService = Depends(get_notify_service)) -> DigestResult:
    return service.send_today_digest()


__all__ = ["router"]

"""Daily reminder digest pushed through the LINE Messaging API."""
from __future__ import annotations

from typing import Sequence

import httpx

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.core.config import NotifySettings
from funeral_desk.core.errors import NotificationError
from funeral_desk.core.logger import get_logger
from funeral_desk.schemas.notify import DigestResult
from funeral_desk.schemas.reminders import ReminderRecord
from funeral_desk.store import TabularStore

from .reminder_service import ReminderService

LOGGER = get_logger(__name__)

PUSH_TIMEOUT_SECONDS = 10.0


def build_digest(day: str, reminders: Sequence[ReminderRecord]) -> str:
    lines = [f"Today's reminders ({day})"]
    for index, reminder in enumerate(reminders, start=1):
        lines.append("")
        lines.append(f"{index}. [{reminder.case_id}] {reminder.category}")
        lines.append(f"Content: {reminder.content}")
    return "\n".join(lines)


class LinePushClient:
    """Send a text message to one LINE user with the push endpoint."""

    def __init__(self, settings: NotifySettings, *, transport: httpx.BaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    def push_text(self, text: str) -> None:
        if not self._settings.configured:
            raise NotificationError("LINE push is not configured.")

        payload = {
            "to": self._settings.user_id,
            "messages": [{"type": "text", "text": text}],
        }
        headers = {"Authorization": f"Bearer {self._settings.channel_access_token}"}
        try:
            with httpx.Client(timeout=PUSH_TIMEOUT_SECONDS, transport=self._transport) as client:
                response = client.post(self._settings.push_url, headers=headers, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            LOGGER.error("LINE push failed: %s", exc)
            raise NotificationError("Push notification failed.", cause=exc) from exc


class NotifyService:
    def __init__(
        self,
        store: TabularStore,
        push_client: LinePushClient,
        *,
        now: Clock | None = None,
    ) -> None:
        self._reminders = ReminderService(store, now=now)
        self._push_client = push_client
        self._now = now or local_now

    def send_today_digest(self) -> DigestResult:
        """Push today's pending reminders; nothing is sent when there are none."""

        today = self._now().date()
        pending = self._reminders.pending_on(today)
        stamp = today.isoformat()
        if not pending:
            LOGGER.info("No pending reminders for %s", stamp)
            return DigestResult(message="No pending reminders today.", date=stamp, sent=0)

        self._push_client.push_text(build_digest(stamp, pending))
        LOGGER.info("Pushed %d reminder(s) for %s", len(pending), stamp)
        return DigestResult(
            message=f"Pushed {len(pending)} reminder(s).", date=stamp, sent=len(pending)
        )

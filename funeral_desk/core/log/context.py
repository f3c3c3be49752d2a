"""Per-request log context: who is acting and on which endpoint."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator


_context_var: contextvars.ContextVar[dict[str, str]] = contextvars.ContextVar(
    "log_context", default={}
)


def describe(context: dict[str, str]) -> str:
    """Render ``[S002] POST /contracts/add job=... `` for a log line prefix."""

    parts: list[str] = []
    if "staff_id" in context:
        parts.append(f"[{context['staff_id']}]")
    if "method" in context and "path" in context:
        parts.append(f"{context['method']} {context['path']}")
    parts.extend(
        f"{key}={value}"
        for key, value in context.items()
        if key not in {"staff_id", "method", "path"}
    )
    return " ".join(parts) + " " if parts else ""


class LogContext:
    """Bind request metadata to every record logged on the current task."""

    @contextmanager
    def request(self, method: str, path: str) -> Iterator[None]:
        token = _context_var.set({"method": method, "path": path})
        try:
            yield
        finally:
            _context_var.reset(token)

    def bind(self, **values: object) -> None:
        current = dict(_context_var.get())
        current.update({k: str(v) for k, v in values.items() if v is not None})
        _context_var.set(current)


class RequestContextFilter(logging.Filter):
    """Set ``record.request`` from the bound context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request"):
            record.request = describe(_context_var.get())
        return True


log_context = LogContext()

"""Request-scoped log prefixes and business-day log files."""
from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from funeral_desk.core.log import BusinessDayFileHandler, BusinessTimeFormatter, FILE_FORMAT
from funeral_desk.core.log.context import RequestContextFilter, describe, log_context

TAIPEI = ZoneInfo("Asia/Taipei")


def _record(message: str, created: datetime | None = None) -> logging.LogRecord:
    record = logging.LogRecord("funeral_desk.test", logging.INFO, __file__, 1, message, None, None)
    if created is not None:
        record.created = created.timestamp()
    return record


def test_describe_orders_staff_then_endpoint_then_extras() -> None:
    assert describe({}) == ""
    assert describe({"method": "POST", "path": "/cases/add", "staff_id": "S002"}) == "[S002] POST /cases/add "
    assert describe({"job": "seed_demo"}) == "job=seed_demo "


def test_request_scope_binds_staff_and_resets_afterwards() -> None:
    request_filter = RequestContextFilter()

    with log_context.request("GET", "/report/cases"):
        log_context.bind(staff_id="S001")
        inside = _record("listing")
        request_filter.filter(inside)

    outside = _record("idle")
    request_filter.filter(outside)

    assert inside.request == "[S001] GET /report/cases "
    assert outside.request == ""


def test_daily_file_is_named_after_business_day(tmp_path) -> None:
    handler = BusinessDayFileHandler(tmp_path, "funeral_desk", TAIPEI)
    handler.setFormatter(BusinessTimeFormatter(FILE_FORMAT, TAIPEI))
    try:
        # 16:30 UTC on 14 March is already 15 March in Taipei.
        late = datetime(2025, 3, 14, 16, 30, tzinfo=ZoneInfo("UTC"))
        record = _record("digest sent", created=late)
        RequestContextFilter().filter(record)
        handler.emit(record)
    finally:
        handler.close()

    written = (tmp_path / "funeral_desk_2025-03-15.log").read_text(encoding="utf-8")
    assert written.startswith("2025-03-15 00:30:00 | INFO")
    assert written.rstrip().endswith("| digest sent")

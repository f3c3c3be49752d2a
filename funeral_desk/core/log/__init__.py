"""Logging for the funeral desk API: rich console plus one file per business day."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional
from zoneinfo import ZoneInfo

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import RequestContextFilter, log_context
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "log_context",
    "timeit",
]

CONSOLE_FORMAT = "%(request)s%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(request)s%(message)s"


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    app_name: str = "funeral_desk"
    level: str | int = "INFO"
    log_dir: Optional[Path] = Path("logs")
    timezone: str = "Asia/Taipei"
    console: bool = True


_config_lock = RLock()
_config: LoggingConfig | None = None
_listener: QueueListener | None = None
_request_filter = RequestContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class BusinessDayFileHandler(logging.FileHandler):
    """Write ``<app>_YYYY-MM-DD.log`` files, rolling over at local midnight.

    The day is taken in the business timezone so a log file lines up with
    the reminders and digests sent for that date.
    """

    def __init__(self, directory: Path, app_name: str, zone: tzinfo) -> None:
        self.directory = directory
        self.app_name = app_name
        self.zone = zone
        self.directory.mkdir(parents=True, exist_ok=True)
        self._current_day: date = datetime.now(tz=zone).date()
        super().__init__(self._path_for(self._current_day), mode="a", encoding="utf-8")

    def _path_for(self, day: date) -> Path:
        return self.directory / f"{self.app_name}_{day.isoformat()}.log"

    def emit(self, record: logging.LogRecord) -> None:
        record_day = datetime.fromtimestamp(record.created, tz=self.zone).date()
        if record_day != self._current_day:
            self._current_day = record_day
            if self.stream:
                self.stream.close()
            self.baseFilename = os.fspath(self._path_for(record_day))
            self.stream = self._open()
        super().emit(record)


class BusinessTimeFormatter(logging.Formatter):
    """Stamp file records in business time rather than the host's zone."""

    def __init__(self, fmt: str, zone: tzinfo) -> None:
        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")
        self.zone = zone

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=self.zone)
        return moment.strftime(datefmt or self.default_time_format)


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    zone = ZoneInfo(cfg.timezone)

    if cfg.console:
        install_rich_traceback(show_locals=False)
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        rich_handler.setLevel(level)
        rich_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(rich_handler)

    if cfg.log_dir:
        file_handler = BusinessDayFileHandler(Path(cfg.log_dir), cfg.app_name, zone)
        file_handler.setLevel(level)
        file_handler.setFormatter(BusinessTimeFormatter(FILE_FORMAT, zone))
        handlers.append(file_handler)

    return handlers


def init_logging(**kwargs: object) -> None:
    """Route every record through a queue to the console and daily file.

    Repeated calls with the same options are no-ops; different options
    rebuild the handlers.
    """

    with _config_lock:
        global _config, _listener

        cfg = LoggingConfig()
        for key, value in kwargs.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)  # type: ignore[arg-type]

        if _config == cfg:
            return

        root = logging.getLogger()
        if _listener:
            _listener.stop()
            _listener = None
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        level = _parse_level(cfg.level)
        root.setLevel(logging.NOTSET)
        handlers = _build_handlers(cfg, level)
        if handlers:
            log_queue: SimpleQueue = SimpleQueue()
            queue_handler = QueueHandler(log_queue)
            queue_handler.setLevel(level)
            # The request context lives in a contextvar, so it is rendered on
            # the emitting thread before the record crosses the queue.
            queue_handler.addFilter(_request_filter)
            root.addHandler(queue_handler)
            _listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
            _listener.start()

        _config = cfg


def get_logger(name: str | None = None) -> logging.Logger:
    with _config_lock:
        if _config is None:
            init_logging()
    return logging.getLogger(name or LoggingConfig.app_name)

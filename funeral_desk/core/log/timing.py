"""Timing helper that logs how long a batch operation took."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    total: Optional[int] = None
    start: float = field(default_factory=perf_counter)

    def set_total(self, total: int) -> None:
        self.total = total

    def finish(self, success: bool = True) -> None:
        elapsed = perf_counter() - self.start
        if not success:
            self.logger.error("%s failed after %.2fs", self.label, elapsed)
            return

        if self.total is None:
            self.logger.log(self.level, "%s completed in %.2fs", self.label, elapsed)
            return
        rate = self.total / elapsed if elapsed > 0 else 0
        self.logger.log(
            self.level,
            "%s completed in %.2fs (%s %s @ %s %s/s)",
            self.label,
            elapsed,
            f"{self.total:,}",
            self.unit,
            f"{rate:,.0f}",
            self.unit,
        )


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "rows",
) -> Iterator[_Timer]:
    """Time the enclosed block and log its duration and throughput.

    Call ``set_total`` on the yielded timer once the number of processed
    ``unit`` is known; failures are logged at ERROR and re-raised.
    """
    timer = _Timer(
        label=label,
        logger=logger or logging.getLogger("funeral_desk.timer"),
        level=level,
        unit=unit,
    )

    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)

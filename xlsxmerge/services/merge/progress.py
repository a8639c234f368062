"""Progress reporting for long-running merges."""

from __future__ import annotations

import logging
import queue
from typing import Any, Optional

from .models import ProgressCallback

LOGGER = logging.getLogger(__name__)


class ProgressReporter:
    """Turn completed-step counts into non-decreasing percentages.

    The callback is treated as a side channel: its exceptions are logged and
    never interrupt the caller.
    """

    def __init__(self, callback: Optional[ProgressCallback], total: int) -> None:
        self._callback = callback
        self._total = max(total, 1)
        self._completed = 0
        self._last = 0

    @property
    def last_reported(self) -> int:
        return self._last

    def advance(self, steps: int = 1) -> int:
        self._completed += steps
        return self.report(self._completed * 100 // self._total)

    def finish(self) -> int:
        return self.report(100)

    def report(self, percent: int) -> int:
        value = max(self._last, min(100, max(0, int(percent))))
        self._last = value
        if self._callback is not None:
            try:
                self._callback(value)
            except Exception:  # noqa: BLE001
                LOGGER.warning("Progress callback failed at %s%%", value, exc_info=True)
        return value


class QueueProgressSink:
    """Progress callback that hands values to another thread without blocking."""

    def __init__(self, target: "queue.Queue[tuple[str, Any]]", kind: str = "progress") -> None:
        self.queue = target
        self.kind = kind

    def __call__(self, percent: int) -> None:
        self.queue.put_nowait((self.kind, percent))

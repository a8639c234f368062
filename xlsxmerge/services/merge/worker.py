"""Run one merge request on a background thread."""

from __future__ import annotations

import logging
import queue
import threading
from pathlib import Path
from typing import Any, Optional, Sequence

from xlsxmerge.core.errors import XlsxMergeError

from .api import MergeOutcome, run_merge
from .engine import MergeOptions
from .models import InputFile
from .progress import QueueProgressSink

LOGGER = logging.getLogger(__name__)

MergeEvent = tuple[str, Any]


class MergeWorker(threading.Thread):
    """Background unit of work for one merge request.

    Events are published on ``events`` as ``("progress", int)`` followed by
    exactly one terminal ``("done", MergeOutcome)`` or ``("error", str)``.
    """

    def __init__(
        self,
        files: Sequence[InputFile],
        output_path: str | Path,
        *,
        options: Optional[MergeOptions] = None,
        events: Optional["queue.Queue[MergeEvent]"] = None,
    ) -> None:
        super().__init__(name="xlsxmerge-worker", daemon=True)
        self.files = list(files)
        self.output_path = Path(output_path)
        self.options = options
        self.events: "queue.Queue[MergeEvent]" = events if events is not None else queue.Queue()
        self.outcome: Optional[MergeOutcome] = None
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self.outcome = run_merge(
                self.files,
                self.output_path,
                QueueProgressSink(self.events),
                options=self.options,
            )
        except (XlsxMergeError, ValueError) as exc:
            LOGGER.error("Merge failed: %s", exc)
            self.error = exc
            self.events.put_nowait(("error", str(exc)))
        else:
            self.events.put_nowait(("done", self.outcome))

    def iter_events(self, poll_interval: float = 0.1):
        """Yield events until the terminal one has been delivered."""

        while True:
            try:
                kind, payload = self.events.get(timeout=poll_interval)
            except queue.Empty:
                if not self.is_alive() and self.events.empty():
                    return
                continue
            yield kind, payload
            if kind in {"done", "error"}:
                return

"""Thread-safe aggregation of command output lines."""

from __future__ import annotations

import io
import threading


class OutputAggregator:
    """Single text buffer fed with whole lines from stdout and stderr.

    Each append holds the lock for the complete write, so a line is never
    split or fused with another one. Lines from one stream keep their order;
    the relative order of stdout and stderr lines reflects whichever append
    took the lock first and is not deterministic.

    An aggregator belongs to one command run and is never reused.
    """

    def __init__(self) -> None:
        self._buffer = io.StringIO()
        self._lock = threading.Lock()
        self._count = 0

    def append_line(self, text: str) -> None:
        with self._lock:
            self._buffer.write(text)
            self._buffer.write("\n")
            self._count += 1

    @property
    def line_count(self) -> int:
        with self._lock:
            return self._count

    def text(self) -> str:
        with self._lock:
            return self._buffer.getvalue()

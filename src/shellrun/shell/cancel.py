"""Cancellation signal for running commands."""

from __future__ import annotations

import threading


class CancelToken:
    """Set from any thread to kill the command a run is waiting on."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

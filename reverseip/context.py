"""Per-call cancellation scope."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .errors import CancelledError, DeadlineExceededError


class Context:
    """Cancellation flag plus an optional deadline for one API call.

    ``cancel()`` is safe to call from another thread. Callbacks registered
    with :meth:`on_cancel` run in the cancelling thread; the client uses
    them to abort a response that is still being read.
    """

    def __init__(self, timeout: float | None = None):
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run *callback* on cancellation; returns a function that unregisters it.

        An already cancelled context runs *callback* at once.
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def _discard(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def has_deadline(self) -> bool:
        return self._deadline is not None

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def error(self) -> CancelledError | None:
        """The error the context is done with, if it is done."""
        if self.cancelled:
            return CancelledError()
        if self.expired():
            return DeadlineExceededError()
        return None

    def check(self) -> None:
        err = self.error()
        if err is not None:
            raise err

"""Trailing-edge debounce for breakdown notifications.

Kept apart from the calculation so `compute` stays pure. The scheduler is
injectable; tests drive it by hand instead of waiting on real timers.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]

_EMPTY = object()


def thread_timer(delay: float, fn: Callable[[], None]) -> threading.Timer:
    """Default scheduler: run `fn` once on a daemon timer thread."""
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()
    return timer


class Debouncer:
    """Deliver only the newest submitted value once submissions go quiet.

    Every `submit` restarts the quiet window, so continuous editing produces
    no deliveries until it pauses for `wait` seconds. The last value is never
    dropped: it is delivered when the window closes or on `flush()`.
    """

    def __init__(
        self,
        callback: Callable[[Any], None],
        wait: float = 0.1,
        schedule: Optional[Scheduler] = None,
    ) -> None:
        self._callback = callback
        self._wait = wait
        self._schedule = schedule or thread_timer
        self._lock = threading.Lock()
        self._pending: Any = _EMPTY
        self._handle: Optional[Cancellable] = None

    @property
    def wait(self) -> float:
        return self._wait

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not _EMPTY

    def submit(self, value: Any) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._pending = value
            self._handle = self._schedule(self._wait, self._fire)

    def flush(self) -> None:
        """Deliver the pending value now, if there is one."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            value, self._pending = self._pending, _EMPTY
        if value is not _EMPTY:
            self._deliver(value)

    def cancel(self) -> None:
        """Drop the pending value without delivering it."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            self._pending = _EMPTY

    def _fire(self) -> None:
        with self._lock:
            self._handle = None
            value, self._pending = self._pending, _EMPTY
        if value is _EMPTY:
            return
        # Runs on the scheduler's thread, where a raised error has no caller
        try:
            self._deliver(value)
        except Exception:
            logger.exception("Debounced callback %r failed", self._callback)

    def _deliver(self, value: Any) -> None:
        logger.debug("Delivering debounced value")
        self._callback(value)

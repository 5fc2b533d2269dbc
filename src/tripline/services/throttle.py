"""Throttling of container resize events."""

import threading
import time
from typing import Any, Callable, Optional


class ResizeThrottle:
    """Coalesces bursts of resize events into at most one call per interval.

    The first event after a quiet period is delivered immediately. Events
    arriving inside the interval only replace the pending value; one
    trailing call delivers the most recent value when the interval ends.
    """

    def __init__(
        self,
        callback: Callable[[Any], None],
        interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[[float, Callable[[], None]], Any] = threading.Timer,
    ):
        """
        Args:
            callback: Called with the latest value
            interval: Minimum seconds between two calls
            clock: Monotonic clock
            timer_factory: Creates a startable, cancellable timer
        """
        self.callback = callback
        self.interval = interval
        self._clock = clock
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._last_call: Optional[float] = None
        self._pending: Any = None
        self._has_pending = False
        self._timer: Any = None

    def submit(self, value: Any) -> None:
        """Request a call with `value`."""
        fire_now = False
        with self._lock:
            self._pending = value
            self._has_pending = True
            if self._timer is not None:
                return
            now = self._clock()
            elapsed = None if self._last_call is None else now - self._last_call
            if elapsed is None or elapsed >= self.interval:
                fire_now = True
            else:
                self._timer = self._timer_factory(self.interval - elapsed, self._on_timer)
                self._timer.daemon = True
                self._timer.start()

        if fire_now:
            self._fire()

    def flush(self) -> None:
        """Deliver the pending value immediately, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._fire()

    def cancel(self) -> None:
        """Drop the pending value."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
            self._has_pending = False

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._has_pending

    def _on_timer(self) -> None:
        with self._lock:
            self._timer = None
        self._fire()

    def _fire(self) -> None:
        with self._lock:
            if not self._has_pending:
                return
            value = self._pending
            self._pending = None
            self._has_pending = False
            self._last_call = self._clock()
        self.callback(value)

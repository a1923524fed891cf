"""Leading-edge debouncing for hot reloads."""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ReloadDebouncer:
    """
    Gate that lets at most one reload through per interval.

    PATTERN: Leading edge - the first request in a quiet period fires,
    the rest of the burst is dropped.
    CRITICAL: last_reload only moves once a reload has actually been sent,
    so callers check() first and record() after the write succeeds.
    """

    def __init__(
        self,
        debounce_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize debouncer.

        The interval counts from construction, so a request arriving within
        debounce_seconds of startup is suppressed.

        Args:
            debounce_seconds: Minimum time between two dispatched reloads
            clock: Monotonic clock returning seconds
        """
        self.debounce_seconds = debounce_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_reload = clock()

    @property
    def last_reload(self) -> float:
        """Clock reading of the last dispatched reload (or of startup)."""
        with self._lock:
            return self._last_reload

    def check(self) -> Optional[float]:
        """
        Decide whether a reload requested now may go ahead.

        Returns:
            The current clock reading if the reload is due, None if it
            falls inside the debounce window
        """
        with self._lock:
            now = self._clock()
            elapsed = now - self._last_reload
            if elapsed < self.debounce_seconds:
                logger.debug(
                    f"Reload suppressed: {elapsed:.3f}s since last reload "
                    f"(window {self.debounce_seconds:.3f}s)"
                )
                return None
            return now

    def record(self, timestamp: float) -> None:
        """
        Record a dispatched reload.

        Args:
            timestamp: Value returned by check() for that reload
        """
        with self._lock:
            # Never move backwards
            if timestamp > self._last_reload:
                self._last_reload = timestamp

"""Request pacing for the WaniKani API.

WaniKani allows 60 requests per minute per account. Every request of a run
goes through one RateLimiter, which admits a single call at a time and keeps
a minimum interval between the starts of consecutive calls.
"""

import threading
import time
from typing import Any, Callable, Optional


class RateLimiter:
    """Run callables one at a time, at least min_interval_s apart."""

    def __init__(
        self,
        min_interval_s: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval_s = min_interval_s
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_start: Optional[float] = None

    def schedule(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Wait for admission, then run fn while holding the single slot."""
        with self._lock:
            self._wait_turn()
            return fn(*args, **kwargs)

    def _wait_turn(self) -> None:
        if self._last_start is not None:
            wait_s = self._last_start + self.min_interval_s - self._clock()
            if wait_s > 0:
                self._sleep(wait_s)
        self._last_start = self._clock()

"""Rate limiting utilities for API calls."""

from __future__ import annotations

import threading
import time
from typing import Callable


class RateLimiter:
    """Spaces calls at least ``1 / rate_per_second`` apart across threads.

    Keeps the operator from overwhelming the Kubernetes API server when many
    reconciles run at once. Calls are delayed, never retried.
    """

    def __init__(self, rate_per_second: float, clock: Callable[[], float] = time.monotonic):
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")
        self.min_interval = 1.0 / rate_per_second
        self._clock = clock
        self._lock = threading.Lock()
        self._last_call_time = float("-inf")

    def acquire(self) -> None:
        with self._lock:
            time_since_last_call = self._clock() - self._last_call_time
            if time_since_last_call < self.min_interval:
                time.sleep(self.min_interval - time_since_last_call)
            self._last_call_time = self._clock()

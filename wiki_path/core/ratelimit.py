"""
Request spacing for the Wikimedia hourly request budget.
"""

import time
from typing import Callable

from wiki_path.config import HOUR_SECS
from wiki_path.utils.log import log


class RateLimiter:
    """Keeps at least *interval* seconds between successive requests.

    The first call never blocks: the previous request is assumed to have
    happened exactly *interval* seconds before the limiter was created.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._prev = clock() - interval

    @classmethod
    def from_hourly_budget(cls, requests_per_hour: int, **kwargs) -> "RateLimiter":
        if requests_per_hour <= 0:
            raise ValueError(f"requests_per_hour must be positive, got {requests_per_hour}")
        return cls(HOUR_SECS / requests_per_hour, **kwargs)

    def wait_if_needed(self) -> float:
        """Block until the interval has passed, then mark now as the
        previous request. Returns the number of seconds slept."""
        elapsed = self._clock() - self._prev
        waited = 0.0
        if elapsed < self.interval:
            waited = self.interval - elapsed
            log.debug("[WAIT] Sleeping %.2f s before next request", waited)
            self._sleep(waited)
        self._prev = self._clock()
        return waited

"""
Sliding Window Rate Limiter

Per-client request budgets over a rolling time window.

Example:
    >>> limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=900)
    >>> status = limiter.hit("203.0.113.7")   # counts the request
    >>> status.remaining
    4
"""

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional

from src.infrastructure.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Too many requests, please try again later."

# Sweep idle clients after this many hits to bound memory
SWEEP_INTERVAL_HITS = 1000


@dataclass(frozen=True)
class RateLimitStatus:
    """
    Budget left for a client after a counted request.

    Attributes:
        limit: Maximum requests per window
        remaining: Requests still allowed in the current window
        reset_after: Seconds until the oldest counted request expires
    """

    limit: int
    remaining: int
    reset_after: int


class SlidingWindowRateLimiter:
    """
    Sliding-log rate limiter keyed by client identity.

    Keeps the timestamps of accepted requests per key. A request is accepted
    while fewer than max_requests timestamps fall inside the window. Rejected
    requests are not recorded, so a client that keeps hammering regains
    capacity as soon as its oldest accepted request leaves the window.

    State is process-wide (one instance per limiter policy) and guarded by a
    lock; reset() clears it between tests.

    Attributes:
        max_requests: Requests allowed per window
        window_seconds: Rolling window length
        message: Client-facing message when the budget is exhausted
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        message: str = DEFAULT_MESSAGE,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize the limiter.

        Args:
            max_requests: Requests allowed per window (must be positive)
            window_seconds: Window length in seconds (must be positive)
            message: Message carried by RateLimitExceededError
            clock: Monotonic time source (tests inject a fake clock)

        Raises:
            ValueError: If max_requests or window_seconds is not positive
        """
        if max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {max_requests}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be positive, got {window_seconds}")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock or time.monotonic
        self._hits: dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._hits_since_sweep = 0

        logger.debug(
            f"SlidingWindowRateLimiter initialized: {max_requests} requests / {window_seconds}s"
        )

    def _prune(self, timestamps: Deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()

    def _reset_after(self, timestamps: Deque[float], now: float) -> int:
        if not timestamps:
            return int(self.window_seconds)
        return max(1, int(round(timestamps[0] + self.window_seconds - now)))

    def _sweep(self, now: float) -> None:
        idle = [
            key
            for key, timestamps in self._hits.items()
            if not timestamps or timestamps[-1] <= now - self.window_seconds
        ]
        for key in idle:
            del self._hits[key]
        if idle:
            logger.debug(f"Rate limiter swept {len(idle)} idle clients")

    def hit(self, key: str) -> RateLimitStatus:
        """
        Count one request for `key`.

        Returns:
            RateLimitStatus after counting this request

        Raises:
            RateLimitExceededError: If the budget for the window is exhausted
                (the request is not counted)
        """
        with self._lock:
            now = self._clock()

            self._hits_since_sweep += 1
            if self._hits_since_sweep >= SWEEP_INTERVAL_HITS:
                self._sweep(now)
                self._hits_since_sweep = 0

            timestamps = self._hits.setdefault(key, deque())
            self._prune(timestamps, now)

            if len(timestamps) >= self.max_requests:
                retry_after = self._reset_after(timestamps, now)
                logger.warning(
                    f"Rate limit exceeded for {key}: "
                    f"{self.max_requests}/{self.window_seconds}s, retry after {retry_after}s"
                )
                raise RateLimitExceededError(
                    self.message, limit=self.max_requests, retry_after=retry_after
                )

            timestamps.append(now)
            return RateLimitStatus(
                limit=self.max_requests,
                remaining=self.max_requests - len(timestamps),
                reset_after=self._reset_after(timestamps, now),
            )

    def reset(self, key: Optional[str] = None) -> None:
        """Forget counted requests for one key, or for every key."""
        with self._lock:
            if key is None:
                self._hits.clear()
                self._hits_since_sweep = 0
            else:
                self._hits.pop(key, None)

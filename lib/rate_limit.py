# =============================================================================
# lib/rate_limit.py - Sliding Window Rate Limiter
# =============================================================================
# Caps attempts per client over a rolling window. Each key keeps a log of
# its attempt times; attempts older than the window fall out of the log.
#
# Usage:
#   limiter = SlidingWindowRateLimiter(limit=10, window_seconds=900)
#   allowed, retry_after = await limiter.hit("203.0.113.7")
# =============================================================================

import asyncio
import time
from collections import deque
from typing import Callable


class SlidingWindowRateLimiter:
    """
    Async sliding-window-log rate limiter.

    Every call to hit() counts as an attempt, whether or not it is allowed
    and whatever the request goes on to do. A key is allowed while it has
    fewer than `limit` attempts inside the last `window_seconds`.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._attempts: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()
        self._last_prune = clock()

    async def hit(self, key: str) -> tuple[bool, int]:
        """
        Record an attempt for `key`.

        Returns:
            Tuple of (allowed, retry_after_seconds). retry_after is 0
            when the attempt is allowed.
        """
        async with self._lock:
            now = self._clock()
            attempts = self._attempts.setdefault(key, deque())
            self._expire(attempts, now)

            if len(attempts) >= self.limit:
                retry_after = attempts[0] + self.window_seconds - now
                return False, max(1, int(retry_after + 0.999))

            attempts.append(now)
            if now - self._last_prune >= self.window_seconds:
                self._prune(now)
            return True, 0

    def remaining(self, key: str) -> int:
        """Attempts left for `key` in the current window."""
        attempts = self._attempts.get(key)
        if not attempts:
            return self.limit
        self._expire(attempts, self._clock())
        return max(0, self.limit - len(attempts))

    def reset(self) -> None:
        """Forget every key."""
        self._attempts.clear()

    def _expire(self, attempts: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while attempts and attempts[0] <= cutoff:
            attempts.popleft()

    def _prune(self, now: float) -> None:
        # Drop keys whose whole log has aged out; runs at most once a window
        self._last_prune = now
        stale = [
            key for key, attempts in self._attempts.items()
            if not attempts or attempts[-1] <= now - self.window_seconds
        ]
        for key in stale:
            del self._attempts[key]

"""
Fixed window request counter.

Counts requests per client key inside a fixed time window. The counter is a
plain object handed to the middleware, so each application (and each test)
owns its own table and can supply its own clock.
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, NamedTuple


class RateLimitSnapshot(NamedTuple):
    """Immutable result of counting one request."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Thread-safe per-key request counter with a fixed window.

    The first request from a key opens a window of ``window_seconds``; every
    request in that window increments the key's count, and requests beyond
    ``limit`` are refused until the window closes. Closed windows are evicted
    lazily when their key comes back, and swept in bulk once the table holds
    ``max_tracked_keys`` entries.
    """

    def __init__(
        self,
        limit: int = 100,
        window_seconds: float = 15 * 60,
        *,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
        max_tracked_keys: int = 10_000,
    ):
        if limit < 1:
            raise ValueError("Rate limit must be at least 1 request per window")
        if window_seconds <= 0:
            raise ValueError("Rate limit window must be positive")

        self._lock = Lock()
        self._enabled = enabled
        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._max_tracked_keys = max_tracked_keys
        self._windows: dict[str, _Window] = {}

    @property
    def enabled(self) -> bool:
        """Check if rate limiting is currently enabled."""
        with self._lock:
            return self._enabled

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def get_settings(self) -> dict:
        """
        Get atomic snapshot of current rate limit settings.

        Returns:
            Dictionary with enabled, limit and window_seconds keys
        """
        with self._lock:
            return {
                "enabled": self._enabled,
                "limit": self._limit,
                "window_seconds": self._window_seconds,
            }

    def hit(self, key: str) -> RateLimitSnapshot:
        """Count one request for ``key`` and report whether it may proceed."""
        with self._lock:
            now = self._clock()
            window = self._windows.get(key)

            if window is None or now >= window.reset_at:
                if window is None and len(self._windows) >= self._max_tracked_keys:
                    self._evict_expired(now)
                window = _Window(count=0, reset_at=now + self._window_seconds)
                self._windows[key] = window

            window.count += 1
            return RateLimitSnapshot(
                allowed=window.count <= self._limit,
                limit=self._limit,
                remaining=max(self._limit - window.count, 0),
                reset_after=max(window.reset_at - now, 0.0),
            )

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now >= w.reset_at]
        for k in expired:
            del self._windows[k]

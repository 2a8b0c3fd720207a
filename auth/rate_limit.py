"""Fixed-window request rate limiting with a pluggable counter store."""

import time
from dataclasses import dataclass
from typing import Callable, Protocol

import config


class RateLimitStore(Protocol):
    async def increment(self, key: str, *, window_seconds: float, now: float) -> int:
        """
        Count one request for ``key`` and return the count in the current window.

        A key whose window has expired starts a new window at 1.
        """


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimitStore:
    """Process-local counters. Suitable for a single instance only."""

    def __init__(self):
        self._windows: dict[str, _Window] = {}
        self._next_sweep_at: float | None = None

    @property
    def size(self) -> int:
        """Number of keys currently tracked."""
        return len(self._windows)

    def _sweep(self, now: float, window_seconds: float) -> None:
        # Runs at most once per window
        if self._next_sweep_at is not None and now < self._next_sweep_at:
            return
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]
        self._next_sweep_at = now + window_seconds

    async def increment(self, key: str, *, window_seconds: float, now: float) -> int:
        self._sweep(now, window_seconds)
        window = self._windows.get(key)
        if window is None or now > window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + window_seconds)
            return 1
        window.count += 1
        return window.count

    def clear(self) -> None:
        self._windows.clear()
        self._next_sweep_at = None


class RateLimiter:
    """Allow at most ``max_requests`` per key per window."""

    def __init__(
        self,
        store: RateLimitStore,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock

    async def allow(self, key: str) -> bool:
        count = await self.store.increment(
            key,
            window_seconds=self.window_seconds,
            now=self.clock(),
        )
        return count <= self.max_requests


def build_rate_limiter(settings: config.Settings) -> RateLimiter | None:
    """Create the process rate limiter, or None when limiting is disabled."""
    if not settings.RATE_LIMIT_ENABLED:
        return None
    return RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )

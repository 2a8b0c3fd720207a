"""Unit tests for the fixed-window rate limiter."""

import pytest

import config
from auth.rate_limit import InMemoryRateLimitStore, RateLimiter, build_rate_limiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_allows_up_to_max_then_rejects():
    limiter = RateLimiter(InMemoryRateLimitStore(), max_requests=3, window_seconds=60, clock=FakeClock())

    assert [await limiter.allow("10.0.0.1") for _ in range(5)] == [True, True, True, False, False]


@pytest.mark.asyncio
async def test_keys_are_counted_separately():
    limiter = RateLimiter(InMemoryRateLimitStore(), max_requests=1, window_seconds=60, clock=FakeClock())

    assert await limiter.allow("10.0.0.1") is True
    assert await limiter.allow("10.0.0.2") is True
    assert await limiter.allow("10.0.0.1") is False


@pytest.mark.asyncio
async def test_window_resets_after_expiry():
    clock = FakeClock()
    limiter = RateLimiter(InMemoryRateLimitStore(), max_requests=1, window_seconds=60, clock=clock)

    assert await limiter.allow("10.0.0.1") is True
    assert await limiter.allow("10.0.0.1") is False

    clock.now += 61
    assert await limiter.allow("10.0.0.1") is True


@pytest.mark.asyncio
async def test_store_clear_forgets_counts():
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, max_requests=1, window_seconds=60, clock=FakeClock())

    await limiter.allow("10.0.0.1")
    store.clear()
    assert await limiter.allow("10.0.0.1") is True


def test_build_rate_limiter_from_settings():
    assert build_rate_limiter(config.Settings(RATE_LIMIT_ENABLED=False)) is None

    limiter = build_rate_limiter(
        config.Settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=5, RATE_LIMIT_WINDOW_SECONDS=30)
    )
    assert limiter.max_requests == 5
    assert limiter.window_seconds == 30


@pytest.mark.asyncio
async def test_expired_windows_are_evicted():
    """Clients that stop sending requests do not stay in memory."""
    clock = FakeClock()
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, max_requests=5, window_seconds=60, clock=clock)

    for address in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
        await limiter.allow(address)
    assert store.size == 3

    clock.now += 61
    assert await limiter.allow("10.0.0.4") is True
    assert store.size == 1

    # A returning client starts a fresh window
    assert await limiter.allow("10.0.0.1") is True
    assert store.size == 2

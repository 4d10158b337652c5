"""Tests for the in-memory rate limiter."""

import asyncio

import pytest

from wrapped_bot.services.rate_limiter import SimpleRateLimiter
from wrapped_bot.utils.error_embeds import ErrorEmbeds


@pytest.fixture
def limiter(clock):
    return SimpleRateLimiter(clock=clock)


def test_allows_up_to_limit_then_blocks(limiter):
    async def scenario():
        return [await limiter.is_allowed(1, "wrapped-preview", 2, 60) for _ in range(3)]

    assert asyncio.run(scenario()) == [True, True, False]


def test_limits_are_per_user_and_command(limiter):
    async def scenario():
        await limiter.is_allowed(1, "wrapped-preview", 1, 60)
        return (
            await limiter.is_allowed(2, "wrapped-preview", 1, 60),
            await limiter.is_allowed(1, "wrapped-home", 1, 60),
            await limiter.is_allowed(1, "wrapped-preview", 1, 60),
        )

    assert asyncio.run(scenario()) == (True, True, False)


def test_invalid_limits_deny(limiter):
    async def scenario():
        return await limiter.is_allowed(1, "x", 0, 60), await limiter.is_allowed(1, "x", 1, 0)

    assert asyncio.run(scenario()) == (False, False)
    assert len(limiter) == 0


def test_calls_allowed_again_once_window_passes(limiter, clock):
    async def scenario():
        await limiter.is_allowed(1, "wrapped-home", 1, 60)
        clock.advance(30)
        blocked = await limiter.is_allowed(1, "wrapped-home", 1, 60)
        clock.advance(30)
        return blocked, await limiter.is_allowed(1, "wrapped-home", 1, 60)

    assert asyncio.run(scenario()) == (False, True)


def test_expired_keys_are_evicted(limiter, clock):
    async def scenario():
        for user_id in range(1000):
            await limiter.is_allowed(user_id, "wrapped-preview", 1, 1)
        retained = len(limiter)
        clock.advance(2)
        await limiter.is_allowed(5000, "wrapped-home", 1, 60)
        return retained, len(limiter)

    assert asyncio.run(scenario()) == (1000, 1)


def test_blocked_call_does_not_create_entry(limiter):
    async def scenario():
        await limiter.is_allowed(1, "x", 0, 60)
        return await limiter.retry_after(1, "x")

    assert asyncio.run(scenario()) is None


def test_retry_after(limiter, clock):
    async def scenario():
        await limiter.is_allowed(1, "wrapped-preview", 1, 60)
        clock.advance(45)
        return await limiter.retry_after(1, "wrapped-preview")

    assert asyncio.run(scenario()) == pytest.approx(15)


def test_rate_limited_embed_mentions_wait():
    assert "in 15s" in ErrorEmbeds.rate_limited("wrapped-preview", 14.2).description
    assert "in a moment" in ErrorEmbeds.rate_limited("wrapped-home").description

"""Tests for RetryPolicy construction and the tenacity controller it builds."""

from __future__ import annotations

import pytest
from tenacity import RetryError, retry_if_result, wait_exponential

from core.config import Settings
from services.generation.retry import RetryPolicy


def test_defaults() -> None:
    policy = RetryPolicy()
    assert (policy.max_attempts, policy.delay_seconds) == (3, 1.0)


def test_from_settings() -> None:
    policy = RetryPolicy.from_settings(
        Settings(RETRY_MAX_ATTEMPTS=4, RETRY_DELAY_SECONDS=0.5)
    )
    assert (policy.max_attempts, policy.delay_seconds) == (4, 0.5)


@pytest.mark.parametrize(("attempts", "delay"), [(0, 1.0), (3, -1.0)])
def test_invalid_values_rejected(attempts: int, delay: float) -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=attempts, delay_seconds=delay)


@pytest.mark.asyncio
async def test_stops_after_max_attempts(recording_sleep) -> None:
    calls = 0

    async def always_none() -> None:
        nonlocal calls
        calls += 1

    retrying = RetryPolicy(max_attempts=2, sleep=recording_sleep).retrying(
        retry_if_result(lambda result: result is None)
    )

    with pytest.raises(RetryError):
        await retrying(always_none)
    assert calls == 2
    assert recording_sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_custom_wait_overrides_fixed_delay(recording_sleep) -> None:
    async def always_none() -> None:
        return None

    policy = RetryPolicy(
        max_attempts=3,
        wait=wait_exponential(multiplier=1, min=0, max=10),
        sleep=recording_sleep,
    )

    with pytest.raises(RetryError):
        await policy.retrying(retry_if_result(lambda result: result is None))(always_none)
    assert recording_sleep.delays == [1, 2]

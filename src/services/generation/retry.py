"""Retry policy for generation jobs, built on tenacity."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_fixed,
)
from tenacity.retry import retry_base
from tenacity.wait import wait_base

from core.config import Settings


logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many attempts a job gets and how long to wait between them.

    ``wait`` overrides the fixed ``delay_seconds`` when a backoff curve is
    wanted. ``sleep`` is injectable so tests can run without real delays.
    """

    max_attempts: int = 3
    delay_seconds: float = 1.0
    wait: wait_base | None = None
    sleep: SleepFn = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds cannot be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            delay_seconds=settings.RETRY_DELAY_SECONDS,
        )

    def retrying(self, retry: retry_base) -> AsyncRetrying:
        """Build a fresh tenacity controller that retries when ``retry`` says so."""
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait or wait_fixed(self.delay_seconds),
            sleep=self.sleep,
            retry=retry,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

"""Async per-provider rate limiting and retry helpers for model calls."""

from __future__ import annotations

import asyncio
from collections import deque
import logging
import random
import time
from typing import Awaitable, Callable, TypeVar


T = TypeVar("T")

WINDOW_SECONDS = 60.0


class AsyncRateLimiter:
    """Rolling-window RPM limiter keyed by ``provider:model``."""

    def __init__(self) -> None:
        self._calls: dict[str, deque[float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def acquire(self, key: str, rpm: int) -> None:
        """Wait until a call slot is free for ``key``. ``rpm <= 0`` disables limiting."""
        if rpm <= 0:
            return

        calls = self._calls.setdefault(key, deque())
        lock = self._locks.setdefault(key, asyncio.Lock())

        async with lock:
            while True:
                now = time.monotonic()
                while calls and now - calls[0] > WINDOW_SECONDS:
                    calls.popleft()

                if len(calls) < rpm:
                    calls.append(now)
                    return

                await asyncio.sleep(max(0.01, WINDOW_SECONDS - (now - calls[0])))


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    base_delay: float = 1.0,
    retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
    logger: logging.Logger | None = None,
) -> T:
    """Retry an awaitable factory with exponential backoff and jitter.

    The last exception is re-raised once ``max_retries`` is exhausted.
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except retryable_exceptions as exc:
            attempt += 1
            if attempt > max_retries:
                raise
            sleep_seconds = base_delay * (2 ** (attempt - 1))
            jitter = random.uniform(0.0, 0.25 * sleep_seconds)
            if logger is not None:
                logger.warning(
                    "Attempt %d/%d failed (%s); retrying in %.2fs",
                    attempt,
                    max_retries,
                    exc,
                    sleep_seconds + jitter,
                )
            await asyncio.sleep(sleep_seconds + jitter)

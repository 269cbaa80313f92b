"""
Caller-side retries for PDF Services calls.

The client never repeats a request. Samples that want to ride out a flaky
network wrap a call with ``retry_call`` or decorate a coroutine with
``with_retry``; only a PDFServicesError flagged ``retryable`` (transport
failures, 5xx) earns another attempt.
"""

from __future__ import annotations

import asyncio
import functools
import random
from typing import Any, Awaitable, Callable, Iterator, TypeVar

from loguru import logger
from pydantic import BaseModel, Field

from .errors import PDFServicesError

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
OnRetry = Callable[[int, PDFServicesError, float], None]


class RetryPolicy(BaseModel):
    """Exponential backoff for retryable client errors.

    Attempt ``n`` (0-indexed) waits ``base_delay * backoff ** n`` seconds,
    capped at ``max_delay``, plus up to 25% jitter when enabled.
    """

    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=60.0, ge=0)
    backoff: float = Field(default=2.0, ge=1)
    jitter: bool = True

    model_config = {"frozen": True}

    def delay_for(self, attempt: int) -> float:
        delay = min(self.base_delay * (self.backoff**attempt), self.max_delay)
        if self.jitter:
            delay += delay * 0.25 * random.random()
        return delay

    def delays(self) -> Iterator[float]:
        """Waits between attempts; one fewer than ``max_attempts``."""
        for attempt in range(self.max_attempts - 1):
            yield self.delay_for(attempt)

    def should_retry(self, error: Exception) -> bool:
        return isinstance(error, PDFServicesError) and error.retryable


DEFAULT_RETRY_POLICY = RetryPolicy()


async def retry_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy | None = None,
    on_retry: OnRetry | None = None,
    sleep: Sleep = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)``, repeating it on retryable errors.

    Args:
        func: Coroutine function to call, e.g. ``client.upload_file``.
        policy: Backoff settings; DEFAULT_RETRY_POLICY if None.
        on_retry: Called with (attempt, error, delay) before each wait.
        sleep: Awaitable sleep used between attempts.

    Raises:
        PDFServicesError: The first non-retryable error, or the last
            retryable one once attempts run out.
    """
    policy = policy or DEFAULT_RETRY_POLICY
    name = getattr(func, "__name__", repr(func))
    delays = policy.delays()

    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except PDFServicesError as e:
            if not policy.should_retry(e):
                raise
            delay = next(delays, None)
            if delay is None:
                logger.warning(f"[{e.debug_id}] {name} failed after {policy.max_attempts} attempt(s): {e}")
                raise
            attempt += 1
            logger.info(f"[{e.debug_id}] Retry {attempt}/{policy.max_attempts - 1} of {name} in {delay:.2f}s: {e}")
            if on_retry:
                on_retry(attempt, e, delay)
            await sleep(delay)


def with_retry(
    policy: RetryPolicy | None = None,
    on_retry: OnRetry | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator form of ``retry_call``.

    Example:
        @with_retry(RetryPolicy(max_attempts=5))
        async def upload(client, path):
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await retry_call(func, *args, policy=policy, on_retry=on_retry, sleep=sleep, **kwargs)

        return wrapper

    return decorator

"""Bounded retry combinator for flaky async operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many times to try, how long each try may take, and the pause between."""

    attempts: int = 3
    backoff: float = 2.0
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")
        if self.backoff < 0:
            raise ValueError("backoff must be >= 0")


async def retry_async(
    operation: Callable[[int], Awaitable[T]],
    policy: RetryPolicy,
    on_failure: Callable[[int, BaseException], Exception],
    on_retry: Callable[[int, BaseException], None] | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``policy.attempts`` are used up.

    ``operation`` receives the 1-based attempt number. Each attempt is bounded by
    ``policy.timeout`` when set. After the final failure ``on_failure`` builds the
    terminal exception, which is raised chained to the last cause.
    Cancellation is never retried.
    """
    attempt = 1
    while True:
        try:
            if policy.timeout is not None:
                return await asyncio.wait_for(operation(attempt), timeout=policy.timeout)
            return await operation(attempt)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.debug("Attempt %d/%d failed: %s", attempt, policy.attempts, exc)
            if attempt >= policy.attempts:
                raise on_failure(attempt, exc) from exc
            if on_retry:
                on_retry(attempt, exc)
        await sleep(policy.backoff)
        attempt += 1

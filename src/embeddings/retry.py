# src/embeddings/retry.py - v1
"""Bounded retry with capped exponential backoff.

Delays are applied only between attempts: attempt 1 runs immediately,
attempt n waits ``min(base * factor**(n-2), cap)`` first. Errors whose
``is_retryable`` is false (or that are not EmbeddingErrors) propagate at once.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from originality_guard.embeddings.errors import EmbeddingError, ExhaustedRetriesError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration for provider calls."""

    max_attempts: int = 3
    base_delay_s: float = 1.0
    backoff_factor: float = 2.0
    max_delay_s: float = 5.0

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given failed attempt (1-based)."""
        return min(self.base_delay_s * (self.backoff_factor ** (attempt - 1)), self.max_delay_s)


DEFAULT_RETRY_POLICY = RetryPolicy()


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    operation: str = "Embedding generation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run an async callable, retrying retryable EmbeddingErrors.

    Raises:
        ExhaustedRetriesError: If every attempt failed with a retryable error.
    """
    attempts = max(1, policy.max_attempts)
    last_error: EmbeddingError | None = None

    for attempt in range(1, attempts + 1):
        try:
            return await fn()
        except EmbeddingError as e:
            if not e.is_retryable:
                raise
            last_error = e
            logger.warning(
                "%s attempt %d/%d failed: %s", operation, attempt, attempts, e,
            )
            if attempt < attempts:
                await sleep(policy.delay_for(attempt))

    if last_error is None:
        raise RuntimeError(f"{operation} ran no attempts")
    logger.error("%s failed after %d attempts", operation, attempts)
    raise ExhaustedRetriesError(operation, attempts, last_error) from last_error

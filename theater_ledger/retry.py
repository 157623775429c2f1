"""Retry policy for ledger writes.

The blob store never retries on its own; whether a failed write is attempted
again is decided by the lifecycle manager through a RetryPolicy.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Coroutine, TypeVar

from theater_ledger.exceptions import TheaterLedgerError
from theater_ledger.logging import get_ledger_logger
from theater_ledger.settings import Settings

logger = get_ledger_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy for async operations with exponential backoff.

    Args:
        attempts: Maximum number of attempts (1 means no retry)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries
    """

    attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            attempts=settings.write_attempts,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
        )

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * (2**attempt), self.max_delay)


def retry_async(
    policy: RetryPolicy,
) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """Decorator retrying an async function on retryable ledger errors.

    Only errors whose ``retryable`` flag is set (transport failures) are
    retried. User rejections, authorization and validation errors propagate
    on the first attempt.
    """

    def decorator(
        func: Callable[..., Coroutine[Any, Any, T]],
    ) -> Callable[..., Coroutine[Any, Any, T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(policy.attempts):
                try:
                    return await func(*args, **kwargs)
                except TheaterLedgerError as e:
                    if not e.retryable or attempt >= policy.attempts - 1:
                        if e.retryable and policy.attempts > 1:
                            logger.error(f"Ledger operation failed after {policy.attempts} attempts: {e}")
                        raise
                    delay = policy.delay_for(attempt)
                    logger.warning(
                        f"Ledger operation failed: {e}. Retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{policy.attempts})"
                    )
                    await asyncio.sleep(delay)
            raise RuntimeError("Retry logic error: no exception but no result")

        return wrapper

    return decorator

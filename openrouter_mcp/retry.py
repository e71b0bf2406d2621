"""Exponential-backoff retry for transient gateway failures."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Collection
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS = frozenset({429, 402})

_STATUS_LABELS = {
    429: "Rate limited",
    402: "Payment required (free model limit)",
}


def failure_status(exc: BaseException) -> int | None:
    """HTTP status carried by an exception, if any."""
    status = getattr(exc, "status_code", None)
    return status if isinstance(status, int) else None


def is_transient(exc: BaseException, retry_on_status: Collection[int] = RETRYABLE_STATUS) -> bool:
    return failure_status(exc) in retry_on_status


def backoff_delay_ms(attempt: int, base_delay_ms: float, max_jitter_ms: float = 1000) -> float:
    """Delay before retry number ``attempt + 1`` (attempt is 0-based)."""
    return base_delay_ms * (2 ** attempt) + random.uniform(0, max_jitter_ms)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay_ms: float = 1000,
    max_jitter_ms: float = 1000,
    retry_on_status: Collection[int] = RETRYABLE_STATUS,
) -> T:
    """Await ``operation()``, retrying transient failures with backoff.

    Only failures whose status is in ``retry_on_status`` are retried; anything
    else propagates immediately. After ``max_retries`` transient failures the
    last one propagates, so the operation runs at most ``max_retries + 1``
    times.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per call.
        max_retries: Retries allowed after the first attempt.
        base_delay_ms: Delay before the first retry; doubles on each retry.
        max_jitter_ms: Upper bound of the random jitter added to every delay.
        retry_on_status: HTTP statuses treated as transient.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            if not is_transient(exc, retry_on_status) or attempt >= max_retries:
                raise
            delay_ms = backoff_delay_ms(attempt, base_delay_ms, max_jitter_ms)
            label = _STATUS_LABELS.get(failure_status(exc), "Transient failure")
            logger.warning(
                "%s (attempt %d/%d), retrying in %dms",
                label, attempt + 1, max_retries + 1, round(delay_ms),
            )
            await asyncio.sleep(delay_ms / 1000)
            attempt += 1

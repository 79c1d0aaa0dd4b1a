"""Retry with exponential backoff using tenacity."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tubescribe.errors import TransientProviderError
from tubescribe.utils.progress import log_warning

T = TypeVar("T")


def _log_retry(label: str) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0.0
        log_warning(
            f"{label} attempt {state.attempt_number} failed: {error}. "
            f"Retrying in {delay:.1f}s"
        )

    return before_sleep


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    retry_on: tuple[type[BaseException], ...] = (TransientProviderError,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    label: str = "Request",
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` is reached.

    The delay before retry ``n`` is ``initial_delay * 2 ** (n - 1)``.
    Exceptions outside ``retry_on`` propagate immediately; after the last
    attempt the final exception is re-raised unchanged.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=initial_delay, min=0),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry(label),
        sleep=sleep,
        reraise=True,
    )
    return await retrying(operation)

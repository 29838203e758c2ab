"""
Retry combinator used by the Selector.

Waits go through ``asyncio.sleep`` so cancelling the calling task aborts a
pending backoff immediately.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from .exceptions import SelectionExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Backoff = Callable[[int], float]
Sleep = Callable[[float], Awaitable[None]]


def linear_backoff(step_seconds: float) -> Backoff:
    """``attempt * step_seconds`` (0.5s, 1.0s, ... for step 0.5)."""
    return lambda attempt: attempt * step_seconds


async def with_retry(
    attempt: Callable[[int], Awaitable[T]],
    max_attempts: int,
    backoff: Backoff,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Sleep = asyncio.sleep,
    name: str = "operation",
) -> T:
    """
    Run ``attempt(n)`` for n = 1..max_attempts until it returns.

    Exceptions listed in ``retry_on`` trigger a backoff wait and another
    attempt; anything else propagates untouched. After the last failed
    attempt ``SelectionExhaustedError`` is raised, chained to the last error.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error = None
    for attempt_number in range(1, max_attempts + 1):
        try:
            return await attempt(attempt_number)
        except retry_on as e:
            last_error = e
            if attempt_number == max_attempts:
                break
            delay = backoff(attempt_number)
            logger.warning(
                f"{name} attempt {attempt_number}/{max_attempts} failed: {e}. "
                f"Retrying in {delay:.2f}s"
            )
            await sleep(delay)

    logger.warning(f"{name} exhausted after {max_attempts} attempts: {last_error}")
    raise SelectionExhaustedError(max_attempts, last_error) from last_error

"""Retry helper for operations that lost a race in the store."""

import functools
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import structlog

from academy.domain.common.exceptions import ConcurrencyError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry_on_concurrency(
    max_retries: int = 3,
    backoff_seconds: float = 0.05,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Retry a call when it raises ConcurrencyError.

    Every other error propagates immediately. The delay doubles after each
    attempt (``backoff_seconds``, ``2 * backoff_seconds``, ...). Once
    ``max_retries`` retries are spent the last ConcurrencyError is re-raised.

    Example:
        @retry_on_concurrency(max_retries=settings.CONCURRENCY_MAX_RETRIES)
        def confirm(payment_id: int) -> Payment:
            return container.payment_use_case().confirm_payment(payment_id)
    """
    if max_retries < 0:
        raise ValueError("max_retries cannot be negative")

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except ConcurrencyError as e:
                    if attempt >= max_retries:
                        logger.warning(
                            "concurrency_retries_exhausted",
                            operation=func.__name__,
                            attempts=attempt + 1,
                            error=str(e),
                        )
                        raise
                    delay = backoff_seconds * (2**attempt)
                    attempt += 1
                    logger.info(
                        "concurrency_conflict_retrying",
                        operation=func.__name__,
                        attempt=attempt,
                        delay=delay,
                    )
                    sleep(delay)

        return wrapper

    return decorator

"""Retry decorators for retryable driver errors."""

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_exponential_jitter,
)

from ..config import get_diagnostics_config
from ..exceptions import is_normalized
from ..metrics import get_db_metrics

logger = logging.getLogger(__name__)

# Type variables
F = TypeVar("F", bound=Callable[..., Any])


def is_retryable_error(error: BaseException) -> bool:
    """Check if an error is a normalized exception worth retrying."""
    return is_normalized(error) and bool(getattr(error, "retryable", False))


def before_retry_callback(retry_state: RetryCallState) -> None:
    """Callback to execute before sleeping for the next attempt."""
    attempt = retry_state.attempt_number
    error = retry_state.outcome.exception() if retry_state.outcome else None

    logger.warning(
        "Retrying %s after attempt %d failed with %s",
        getattr(retry_state.fn, "__qualname__", retry_state.fn),
        attempt,
        type(error).__name__,
    )
    get_db_metrics().record_retry(attempt, error)


def _retrying(
    max_attempts: int | None,
    min_wait: float | None,
    max_wait: float | None,
    multiplier: float,
    randomize: bool,
):
    config = get_diagnostics_config()
    attempts = max_attempts or config.retry_max_attempts
    low = config.retry_min_wait if min_wait is None else min_wait
    high = config.retry_max_wait if max_wait is None else max_wait

    if randomize:
        wait = wait_exponential_jitter(initial=low, max=high, exp_base=multiplier, jitter=low)
    else:
        wait = wait_exponential(multiplier=low, min=low, max=high, exp_base=multiplier)

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait,
        retry=retry_if_exception(is_retryable_error),
        before_sleep=before_retry_callback,
        reraise=True,
    )


def db_retry(
    max_attempts: int | None = None,
    min_wait: float | None = None,
    max_wait: float | None = None,
    multiplier: float = 2.0,
    randomize: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for retrying database operations with exponential backoff.

    Only deadlocks, lock wait timeouts and lost connections are retried.
    Unset arguments fall back to the diagnostics configuration.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Minimum wait time between retries (seconds)
        max_wait: Maximum wait time between retries (seconds)
        multiplier: Multiplier for exponential backoff
        randomize: Add jitter to wait times
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            retrying = _retrying(max_attempts, min_wait, max_wait, multiplier, randomize)
            try:
                return retrying(func)(*args, **kwargs)
            except Exception as e:
                if is_retryable_error(e):
                    # Max retries exceeded
                    get_db_metrics().record_retry_exhausted(e)
                raise

        return wrapper  # type: ignore

    return decorator


def async_db_retry(
    max_attempts: int | None = None,
    min_wait: float | None = None,
    max_wait: float | None = None,
    multiplier: float = 2.0,
    randomize: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for retrying async database operations with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Minimum wait time between retries (seconds)
        max_wait: Maximum wait time between retries (seconds)
        multiplier: Multiplier for exponential backoff
        randomize: Add jitter to wait times
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            retrying = _retrying(max_attempts, min_wait, max_wait, multiplier, randomize)
            try:
                return await retrying(func)(*args, **kwargs)
            except Exception as e:
                if is_retryable_error(e):
                    # Max retries exceeded
                    get_db_metrics().record_retry_exhausted(e)
                raise

        return wrapper  # type: ignore

    return decorator

"""
Retry logic with exponential backoff for transient HTTP failures.
"""
import logging
from typing import Callable, Any

import requests
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

import config

logger = logging.getLogger(__name__)


def is_retryable_error(exception: BaseException) -> bool:
    """Check if an exception is retryable."""
    if isinstance(exception, requests.exceptions.HTTPError):
        response = exception.response
        status_code = response.status_code if response is not None else None
        return status_code in config.RETRYABLE_STATUS_CODES
    # Retry on connection errors, timeouts
    return isinstance(exception, (
        requests.exceptions.ConnectionError,
        requests.exceptions.Timeout,
        requests.exceptions.ChunkedEncodingError
    ))


def retry_with_backoff(
    max_retries: int = config.MAX_RETRIES,
    initial_delay: float = config.RETRY_DELAY,
    max_delay: float = config.MAX_RETRY_DELAY,
    exponential_base: float = 2.0
):
    """
    Decorator for retrying functions with exponential backoff.

    Only errors accepted by ``is_retryable_error`` are retried; anything else
    is raised on the first attempt.

    Args:
        max_retries: Maximum number of retry attempts
        initial_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential backoff
    """
    def decorator(func: Callable) -> Callable:
        @retry(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(
                multiplier=initial_delay,
                max=max_delay,
                exp_base=exponential_base
            ),
            retry=retry_if_exception(is_retryable_error),
            reraise=True
        )
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except requests.exceptions.RequestException as e:
                if is_retryable_error(e):
                    logger.warning(
                        f"Retryable error in {func.__name__}: {e}. Retrying..."
                    )
                else:
                    logger.error(
                        f"Non-retryable error in {func.__name__}: {e}"
                    )
                raise

        return wrapper
    return decorator

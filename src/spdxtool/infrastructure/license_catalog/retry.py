"""Retry configuration and logic for the license catalog client."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, TypeVar

from .errors import LicenseCatalogError, NonRetryableError, RetryableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Maximum number of retry attempts for transient errors.
        base_delay: Initial delay in seconds before first retry.
        max_delay: Maximum delay in seconds between retries.
        exponential_base: Base for exponential backoff calculation.
    """

    max_retries: int = 2
    base_delay: float = 0.5
    max_delay: float = 10.0
    exponential_base: float = 2.0


def with_retry(
    operation: Callable[[], T],
    config: RetryConfig,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Execute an operation with exponential backoff retry.

    Args:
        operation: Callable to execute
        config: Retry configuration
        sleep: Sleep function, replaceable in tests

    Returns:
        Result of the operation

    Raises:
        LicenseCatalogError: If all retries are exhausted
    """
    last_error: Optional[Exception] = None

    for attempt in range(config.max_retries + 1):
        try:
            return operation()
        except NonRetryableError:
            raise
        except RetryableError as e:
            last_error = e

            if attempt == config.max_retries:
                logger.error(f"All {config.max_retries + 1} attempts failed. Last error: {e}")
                raise LicenseCatalogError(
                    f"Failed after {config.max_retries + 1} attempts: {e}"
                ) from e

            delay = min(
                config.base_delay * (config.exponential_base**attempt),
                config.max_delay,
            )

            logger.warning(f"Attempt {attempt + 1} failed: {e}. Retrying in {delay:.1f}s...")

            sleep(delay)

    raise LicenseCatalogError(f"Unexpected retry loop exit: {last_error}")

"""
License catalog module for spdxtool.

Provides an HTTP client for the SPDX license list with an on-disk cache
and exponential backoff retry logic.
"""

from .cache import CatalogCache, get_default_cache_dir
from .client import LicenseCatalogClient, LicenseTemplate
from .errors import (
    LicenseCatalogError,
    LicenseNotFoundError,
    NonRetryableError,
    RetryableError,
)
from .retry import RetryConfig, with_retry

__all__ = [
    "CatalogCache",
    "get_default_cache_dir",
    "LicenseCatalogClient",
    "LicenseTemplate",
    "LicenseCatalogError",
    "LicenseNotFoundError",
    "NonRetryableError",
    "RetryableError",
    "RetryConfig",
    "with_retry",
]

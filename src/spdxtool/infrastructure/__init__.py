"""
Infrastructure Layer - license catalog client and git configuration reader.
"""

from spdxtool.infrastructure.git_config import (
    read_git_config,
    read_git_homepage,
    read_git_user_name,
)
from spdxtool.infrastructure.license_catalog import (
    CatalogCache,
    LicenseCatalogClient,
    LicenseCatalogError,
    LicenseNotFoundError,
    LicenseTemplate,
    RetryConfig,
    get_default_cache_dir,
)

__all__ = [
    "CatalogCache",
    "LicenseCatalogClient",
    "LicenseCatalogError",
    "LicenseNotFoundError",
    "LicenseTemplate",
    "RetryConfig",
    "get_default_cache_dir",
    "read_git_config",
    "read_git_homepage",
    "read_git_user_name",
]

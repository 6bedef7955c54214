"""Exception types for the license catalog client."""


class LicenseCatalogError(Exception):
    """Base exception for license catalog errors."""

    pass


class RetryableError(LicenseCatalogError):
    """Error that can be retried (rate limits, temporary failures)."""

    pass


class NonRetryableError(LicenseCatalogError):
    """Error that should not be retried (missing resources, invalid responses)."""

    pass


class LicenseNotFoundError(LicenseCatalogError):
    """The requested SPDX id is not in the catalog."""

    def __init__(self, spdx_id: str):
        super().__init__(f"Unknown SPDX license id: {spdx_id}")
        self.spdx_id = spdx_id

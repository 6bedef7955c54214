"""Exception types for spdxtool configuration."""


class ConfigurationUnresolvedError(ValueError):
    """Required header configuration (SPDX id, copyright) could not be resolved."""

    pass

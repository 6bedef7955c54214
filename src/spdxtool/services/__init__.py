"""
Service Layer - settings resolution, header reconciliation and license initialization.
"""

from spdxtool.services.license_init import (
    InitResult,
    LicenseInitError,
    fill_license_template,
    initialize_license,
)
from spdxtool.services.reconciliation import (
    ProcessResult,
    ReconcileMode,
    ReconcileSummary,
    ReconciliationDriver,
    run,
)
from spdxtool.services.settings_resolver import resolve_header_fields, resolve_year

__all__ = [
    # Settings
    "resolve_header_fields",
    "resolve_year",
    # Reconciliation
    "ProcessResult",
    "ReconcileMode",
    "ReconcileSummary",
    "ReconciliationDriver",
    "run",
    # Init
    "InitResult",
    "LicenseInitError",
    "fill_license_template",
    "initialize_license",
]

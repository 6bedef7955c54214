"""
License initialization: write LICENSE and LICENSE.spdx for a project.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from spdxtool.core.spdx_document import SPDX_DOCUMENT_FILENAME, SpdxDocument
from spdxtool.infrastructure.license_catalog import LicenseCatalogClient

logger = logging.getLogger(__name__)

LICENSE_FILENAME = "LICENSE"

_YEAR_PLACEHOLDER = re.compile(r"<year>|\[year\]|\[yyyy\]", re.IGNORECASE)
_HOLDER_PLACEHOLDER = re.compile(
    r"<copyright holders?>|<copyright holder\(s\)>|\[fullname\]|\[name of copyright owner\]",
    re.IGNORECASE,
)


def fill_license_template(text: str, year: str, copyright_holder: str) -> str:
    """Substitute year and copyright holder placeholders in license text."""
    text = _YEAR_PLACEHOLDER.sub(lambda _: year, text)
    return _HOLDER_PLACEHOLDER.sub(lambda _: copyright_holder, text)


@dataclass
class InitResult:
    """Files written by ``initialize_license``."""

    spdx_id: str
    license_path: Path
    spdx_document_path: Path


class LicenseInitError(OSError):
    """Writing the license files failed."""

    pass


def initialize_license(
    catalog: LicenseCatalogClient,
    spdx_id: str,
    copyright_holder: str,
    year: str,
    target_dir: Path,
    homepage: Optional[str] = None,
) -> InitResult:
    """
    Fetch a license template and write LICENSE plus LICENSE.spdx.

    Args:
        catalog: License catalog client
        spdx_id: Requested SPDX id (resolved case-insensitively)
        copyright_holder: Copyright holder substituted into the template
        year: Copyright year substituted into the template
        target_dir: Directory receiving both files
        homepage: Optional PackageHomePage value

    Raises:
        LicenseNotFoundError: If the id is not in the catalog
        LicenseCatalogError: If the catalog cannot be fetched
        LicenseInitError: If a file cannot be written
    """
    template = catalog.get_license(spdx_id)
    target_dir = Path(target_dir)

    document = SpdxDocument(
        package_name=target_dir.name,
        package_originator=copyright_holder,
        package_license_declared=template.spdx_id,
        package_home_page=homepage,
    )

    license_path = target_dir / LICENSE_FILENAME
    spdx_path = target_dir / SPDX_DOCUMENT_FILENAME

    for path, content in (
        (license_path, fill_license_template(template.text, year, copyright_holder)),
        (spdx_path, document.render()),
    ):
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise LicenseInitError(f"Cannot write {path}: {e}") from e
        logger.info(f"Wrote {path}")

    return InitResult(
        spdx_id=template.spdx_id,
        license_path=license_path,
        spdx_document_path=spdx_path,
    )

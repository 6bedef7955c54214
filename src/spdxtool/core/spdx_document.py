"""
LICENSE.spdx tag-value document.

Only the package-level fields this tool writes and reads are modelled:

    SPDXVersion: SPDX-2.3
    DataLicense: CC0-1.0
    PackageName: my-project
    PackageOriginator: ACME Corp
    PackageHomePage: https://example.com/my-project
    PackageLicenseDeclared: MIT
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SPDX_DOCUMENT_FILENAME = "LICENSE.spdx"
SPDX_VERSION = "SPDX-2.3"
DATA_LICENSE = "CC0-1.0"

_ORIGINATOR_KINDS = ("Person:", "Organization:")


@dataclass(frozen=True)
class SpdxDocument:
    """Package metadata stored in LICENSE.spdx."""

    package_name: str
    package_originator: Optional[str]
    package_license_declared: Optional[str]
    package_home_page: Optional[str] = None
    spdx_version: str = SPDX_VERSION
    data_license: str = DATA_LICENSE

    def render(self) -> str:
        """Render the document in tag-value format."""
        fields = [
            ("SPDXVersion", self.spdx_version),
            ("DataLicense", self.data_license),
            ("PackageName", self.package_name),
            ("PackageOriginator", self.package_originator),
            ("PackageHomePage", self.package_home_page),
            ("PackageLicenseDeclared", self.package_license_declared),
        ]
        return "".join(f"{tag}: {value}\n" for tag, value in fields if value)

    @classmethod
    def parse(cls, text: str) -> "SpdxDocument":
        """
        Parse tag-value text.

        Unknown tags are ignored. A ``Person:``/``Organization:`` prefix on
        the originator is stripped.
        """
        values: dict[str, str] = {}
        for line in text.splitlines():
            tag, sep, value = line.partition(":")
            if not sep or line.startswith("#"):
                continue
            values.setdefault(tag.strip(), value.strip())

        originator = values.get("PackageOriginator")
        if originator:
            for kind in _ORIGINATOR_KINDS:
                if originator.startswith(kind):
                    originator = originator[len(kind):].strip()
                    break

        return cls(
            package_name=values.get("PackageName", ""),
            package_originator=originator or None,
            package_license_declared=values.get("PackageLicenseDeclared") or None,
            package_home_page=values.get("PackageHomePage") or None,
            spdx_version=values.get("SPDXVersion", SPDX_VERSION),
            data_license=values.get("DataLicense", DATA_LICENSE),
        )


def read_spdx_document(directory: Path) -> Optional[SpdxDocument]:
    """
    Read ``directory/LICENSE.spdx``.

    Returns:
        The parsed document, or None if it is missing or unreadable.
    """
    path = Path(directory) / SPDX_DOCUMENT_FILENAME
    if not path.is_file():
        return None
    try:
        return SpdxDocument.parse(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error reading {path}: {e}")
        return None

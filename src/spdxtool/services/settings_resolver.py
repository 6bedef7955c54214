"""
Header settings resolution.

Resolution order for each field:

1. explicit value (CLI flag, environment or config file)
2. ``LICENSE.spdx`` in the detected project root
3. ``LICENSE.spdx`` in the current directory
4. git ``user.name`` (copyright only)

The SPDX id and copyright are required; the year defaults to the current
calendar year.
"""

import logging
import re
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Optional

from spdxtool.core.config import HeaderConfig
from spdxtool.core.errors import ConfigurationUnresolvedError
from spdxtool.core.header_codec import HeaderFields
from spdxtool.core.project_root import ProjectContext
from spdxtool.core.spdx_document import SpdxDocument, read_spdx_document

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"[0-9]{4}")


def project_documents(context: ProjectContext) -> list[SpdxDocument]:
    """LICENSE.spdx documents in precedence order: project root, then cwd."""
    directories: list[Path] = []
    if context.project_root is not None:
        directories.append(context.project_root)
    if context.cwd not in directories:
        directories.append(context.cwd)

    documents = []
    for directory in directories:
        document = read_spdx_document(directory)
        if document is not None:
            logger.debug(f"Using LICENSE.spdx from {directory}")
            documents.append(document)
    return documents


def resolve_spdx_id(explicit: Optional[str], documents: list[SpdxDocument]) -> Optional[str]:
    if explicit:
        return explicit
    for document in documents:
        if document.package_license_declared:
            return document.package_license_declared
    return None


def resolve_copyright(
    explicit: Optional[str],
    documents: list[SpdxDocument],
    git_user_name: Callable[[], Optional[str]],
) -> Optional[str]:
    if explicit:
        return explicit
    for document in documents:
        if document.package_originator:
            return document.package_originator
    return git_user_name()


def resolve_year(explicit: Optional[str | int], today: Optional[date] = None) -> str:
    """
    Resolve the copyright year.

    Raises:
        ConfigurationUnresolvedError: If an explicit year is not four digits
    """
    if explicit is None or str(explicit).strip() == "":
        return str((today or date.today()).year)
    year = str(explicit).strip()
    if not _YEAR_RE.fullmatch(year):
        raise ConfigurationUnresolvedError(f"Invalid year '{year}': expected four digits")
    return year


def resolve_header_fields(
    overrides: HeaderConfig,
    context: ProjectContext,
    git_user_name: Callable[[], Optional[str]],
    today: Optional[date] = None,
) -> HeaderFields:
    """
    Resolve the header values for one invocation.

    Args:
        overrides: Explicit values (None fields fall through)
        context: Project context used to locate LICENSE.spdx
        git_user_name: Lazily called fallback for the copyright holder
        today: Date used for the default year

    Raises:
        ConfigurationUnresolvedError: If the SPDX id or copyright cannot be resolved
    """
    documents = project_documents(context)

    spdx_id = resolve_spdx_id(overrides.spdx_id, documents)
    if not spdx_id:
        raise ConfigurationUnresolvedError(
            "No SPDX license id: pass --spdx-id or create LICENSE.spdx with 'spdx init'"
        )

    copyright_holder = resolve_copyright(overrides.copyright, documents, git_user_name)
    if not copyright_holder:
        raise ConfigurationUnresolvedError(
            "No copyright holder: pass --copyright, add LICENSE.spdx or set git user.name"
        )

    return HeaderFields(
        copyright=copyright_holder,
        year=resolve_year(overrides.year, today),
        spdx_id=spdx_id,
    )

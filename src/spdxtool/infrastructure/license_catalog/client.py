"""SPDX license catalog client backed by the license-list JSON API."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .cache import CatalogCache
from .errors import LicenseNotFoundError, NonRetryableError, RetryableError
from .retry import RetryConfig, with_retry

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "licenses.json"
RETRYABLE_STATUS_CODES = frozenset([429, 500, 502, 503, 504])


@dataclass(frozen=True)
class LicenseTemplate:
    """License text as published in the catalog."""

    spdx_id: str
    name: str
    text: str


class LicenseCatalogClient:
    """
    Client for the SPDX license catalog.

    Every document is looked up in the on-disk cache first and only fetched
    over HTTP on a miss. Fetched documents are written back to the cache on a
    best-effort basis.
    """

    def __init__(
        self,
        base_url: str,
        cache: CatalogCache,
        timeout: float = 30.0,
        retry_config: Optional[RetryConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the catalog client.

        Args:
            base_url: Base URL of the license-list JSON documents
            cache: Cache consulted before any network request
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        self._cache = cache
        self._timeout = timeout
        self._retry_config = retry_config or RetryConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._index: Optional[dict[str, dict[str, Any]]] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "LicenseCatalogClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _fetch(self, url: str) -> dict[str, Any]:
        """Perform one GET request and decode the JSON body."""
        try:
            response = self._get_client().get(url)
        except httpx.TransportError as e:
            raise RetryableError(f"Request to {url} failed: {e}") from e

        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RetryableError(f"HTTP {response.status_code} from {url}")
        if response.status_code >= 400:
            raise NonRetryableError(f"HTTP {response.status_code} from {url}")

        try:
            data = response.json()
        except ValueError as e:
            raise NonRetryableError(f"Invalid JSON from {url}: {e}") from e
        if not isinstance(data, dict):
            raise NonRetryableError(f"Unexpected JSON document from {url}")
        return data

    def _get_document(self, cache_name: str, url: str) -> dict[str, Any]:
        cached = self._cache.read(cache_name)
        if cached is not None:
            return cached

        logger.info(f"Fetching {url}")
        data = with_retry(lambda: self._fetch(url), self._retry_config)
        self._cache.write(cache_name, data)
        return data

    def _load_index(self) -> dict[str, dict[str, Any]]:
        if self._index is None:
            document = self._get_document(INDEX_DOCUMENT, f"{self._base_url}/{INDEX_DOCUMENT}")
            entries = document.get("licenses") or []
            self._index = {
                entry["licenseId"]: entry
                for entry in entries
                if isinstance(entry, dict) and entry.get("licenseId")
            }
        return self._index

    def license_ids(self) -> list[str]:
        """Return all SPDX ids in the catalog, sorted."""
        return sorted(self._load_index())

    def canonical_id(self, spdx_id: str) -> str:
        """
        Resolve an id against the catalog, exactly first, then ignoring case.

        Raises:
            LicenseNotFoundError: If the id is not in the catalog
        """
        index = self._load_index()
        if spdx_id in index:
            return spdx_id
        folded = spdx_id.casefold()
        for known in index:
            if known.casefold() == folded:
                return known
        raise LicenseNotFoundError(spdx_id)

    def get_license(self, spdx_id: str) -> LicenseTemplate:
        """
        Fetch the license template for an SPDX id.

        Raises:
            LicenseNotFoundError: If the id is not in the catalog
            LicenseCatalogError: If the catalog cannot be fetched
        """
        canonical = self.canonical_id(spdx_id)
        entry = self._index[canonical] if self._index else {}

        try:
            details = self._get_document(
                f"details/{canonical}.json", f"{self._base_url}/{canonical}.json"
            )
        except NonRetryableError as e:
            logger.error(f"License details unavailable for {canonical}: {e}")
            raise LicenseNotFoundError(canonical) from e

        text = details.get("licenseText")
        if not isinstance(text, str):
            raise NonRetryableError(f"License details for {canonical} have no licenseText")

        return LicenseTemplate(
            spdx_id=canonical,
            name=str(details.get("name") or entry.get("name") or canonical),
            text=text,
        )

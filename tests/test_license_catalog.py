"""
Tests for the SPDX license catalog client, cache and retry logic.
"""

import json

import httpx
import pytest

from spdxtool.infrastructure.license_catalog import (
    CatalogCache,
    LicenseCatalogClient,
    LicenseCatalogError,
    LicenseNotFoundError,
    NonRetryableError,
    RetryableError,
    RetryConfig,
    get_default_cache_dir,
    with_retry,
)

BASE_URL = "https://catalog.test/licenses"

INDEX = {
    "licenseListVersion": "3.23",
    "licenses": [
        {"licenseId": "MIT", "name": "MIT License"},
        {"licenseId": "EPL-2.0", "name": "Eclipse Public License 2.0"},
        {"licenseId": "Broken-1.0", "name": "Broken"},
    ],
}

MIT_DETAILS = {
    "licenseId": "MIT",
    "name": "MIT License",
    "licenseText": "MIT License\n\nCopyright (c) <year> <copyright holders>\n",
}


class FakeCatalog:
    """Serves catalog documents and records requested paths."""

    def __init__(self, failures_before_success: int = 0, status: int = 503):
        self.requests: list[str] = []
        self._failures = failures_before_success
        self._status = status

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if self._failures > 0:
            self._failures -= 1
            return httpx.Response(self._status)
        path = request.url.path
        if path.endswith("/licenses.json"):
            return httpx.Response(200, json=INDEX)
        if path.endswith("/MIT.json"):
            return httpx.Response(200, json=MIT_DETAILS)
        return httpx.Response(404)


def _client(tmp_path, handler, max_retries=2):
    return LicenseCatalogClient(
        base_url=BASE_URL,
        cache=CatalogCache(tmp_path / "cache"),
        retry_config=RetryConfig(max_retries=max_retries, base_delay=0.0),
        transport=httpx.MockTransport(handler),
    )


class TestLicenseCatalogClient:
    def test_fetches_index_and_details(self, tmp_path):
        catalog = FakeCatalog()
        with _client(tmp_path, catalog) as client:
            template = client.get_license("MIT")

        assert template.spdx_id == "MIT"
        assert template.name == "MIT License"
        assert "<copyright holders>" in template.text
        assert catalog.requests == ["/licenses/licenses.json", "/licenses/MIT.json"]

    def test_documents_are_cached(self, tmp_path):
        with _client(tmp_path, FakeCatalog()) as client:
            client.get_license("MIT")

        assert (tmp_path / "cache" / "licenses.json").is_file()
        assert (tmp_path / "cache" / "details" / "MIT.json").is_file()

        offline = FakeCatalog()
        with _client(tmp_path, offline) as client:
            assert client.get_license("MIT").spdx_id == "MIT"
        assert offline.requests == []

    def test_id_lookup_ignores_case(self, tmp_path):
        with _client(tmp_path, FakeCatalog()) as client:
            assert client.canonical_id("epl-2.0") == "EPL-2.0"
            assert client.get_license("mit").spdx_id == "MIT"

    def test_unknown_id(self, tmp_path):
        with _client(tmp_path, FakeCatalog()) as client:
            with pytest.raises(LicenseNotFoundError, match="Unknown SPDX license id: Nope-1.0"):
                client.get_license("Nope-1.0")

    def test_missing_details_document(self, tmp_path):
        with _client(tmp_path, FakeCatalog()) as client:
            with pytest.raises(LicenseNotFoundError):
                client.get_license("Broken-1.0")

    def test_license_ids_sorted(self, tmp_path):
        with _client(tmp_path, FakeCatalog()) as client:
            assert client.license_ids() == ["Broken-1.0", "EPL-2.0", "MIT"]

    def test_retries_transient_status(self, tmp_path):
        catalog = FakeCatalog(failures_before_success=2)
        with _client(tmp_path, catalog) as client:
            assert client.get_license("MIT").spdx_id == "MIT"
        assert catalog.requests.count("/licenses/licenses.json") == 3

    def test_gives_up_after_max_retries(self, tmp_path):
        catalog = FakeCatalog(failures_before_success=10)
        with _client(tmp_path, catalog, max_retries=1) as client:
            with pytest.raises(LicenseCatalogError, match="after 2 attempts"):
                client.license_ids()
        assert len(catalog.requests) == 2

    def test_client_error_is_not_retried(self, tmp_path):
        catalog = FakeCatalog(failures_before_success=1, status=403)
        with _client(tmp_path, catalog) as client:
            with pytest.raises(NonRetryableError):
                client.license_ids()
        assert len(catalog.requests) == 1

    def test_unwritable_cache_is_ignored(self, tmp_path):
        blocker = tmp_path / "cache"
        blocker.write_text("not a directory", encoding="utf-8")

        with _client(tmp_path, FakeCatalog()) as client:
            assert client.get_license("MIT").spdx_id == "MIT"


class TestCatalogCache:
    def test_miss(self, tmp_path):
        assert CatalogCache(tmp_path).read("licenses.json") is None

    def test_corrupt_entry_is_a_miss(self, tmp_path):
        (tmp_path / "licenses.json").write_text("{not json", encoding="utf-8")
        assert CatalogCache(tmp_path).read("licenses.json") is None

    def test_write_then_read(self, tmp_path):
        cache = CatalogCache(tmp_path)
        assert cache.write("details/MIT.json", MIT_DETAILS)
        assert json.loads((tmp_path / "details" / "MIT.json").read_text()) == MIT_DETAILS
        assert cache.read("details/MIT.json") == MIT_DETAILS

    def test_default_dir_honors_xdg(self, tmp_path):
        assert get_default_cache_dir({"XDG_CACHE_HOME": str(tmp_path)}) == tmp_path / "spdxtool"


class TestWithRetry:
    def test_backoff_delays(self):
        delays = []
        attempts = []

        def operation():
            attempts.append(1)
            if len(attempts) < 3:
                raise RetryableError("busy")
            return "ok"

        config = RetryConfig(max_retries=3, base_delay=1.0, max_delay=1.5)
        assert with_retry(operation, config, sleep=delays.append) == "ok"
        assert delays == [1.0, 1.5]

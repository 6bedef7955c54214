"""
Tests for LICENSE and LICENSE.spdx initialization.
"""

import httpx
import pytest

from spdxtool.core.spdx_document import read_spdx_document
from spdxtool.infrastructure.license_catalog import (
    CatalogCache,
    LicenseCatalogClient,
    LicenseNotFoundError,
)
from spdxtool.services.license_init import (
    LicenseInitError,
    fill_license_template,
    initialize_license,
)

TEMPLATE = "Copyright (c) <year> <copyright holders>\n\nPermission is hereby granted...\n"


def _catalog(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/licenses.json"):
            return httpx.Response(200, json={"licenses": [{"licenseId": "MIT", "name": "MIT"}]})
        if request.url.path.endswith("/MIT.json"):
            return httpx.Response(200, json={"name": "MIT License", "licenseText": TEMPLATE})
        return httpx.Response(404)

    return LicenseCatalogClient(
        base_url="https://catalog.test",
        cache=CatalogCache(tmp_path / "cache"),
        transport=httpx.MockTransport(handler),
    )


class TestFillLicenseTemplate:
    @pytest.mark.parametrize(
        "template",
        [
            "Copyright (c) <year> <copyright holders>",
            "Copyright (c) [year] [fullname]",
            "Copyright [yyyy] [name of copyright owner]",
            "Copyright (C) <YEAR> <Copyright Holder>",
            "Copyright <year> <copyright holder(s)>",
        ],
    )
    def test_placeholders(self, template):
        filled = fill_license_template(template, "2024", "ACME")
        assert "2024" in filled
        assert "ACME" in filled
        assert "<" not in filled and "[" not in filled

    def test_text_without_placeholders_unchanged(self):
        text = "Mozilla Public License Version 2.0\n"
        assert fill_license_template(text, "2024", "ACME") == text


class TestInitializeLicense:
    def test_writes_both_files(self, tmp_path):
        project = tmp_path / "widgets"
        project.mkdir()

        with _catalog(tmp_path) as catalog:
            result = initialize_license(
                catalog,
                spdx_id="mit",
                copyright_holder="ACME",
                year="2024",
                target_dir=project,
                homepage="https://example.com/widgets",
            )

        assert result.spdx_id == "MIT"
        assert result.license_path == project / "LICENSE"
        assert result.license_path.read_text(encoding="utf-8").startswith(
            "Copyright (c) 2024 ACME\n"
        )

        document = read_spdx_document(project)
        assert document.package_name == "widgets"
        assert document.package_originator == "ACME"
        assert document.package_license_declared == "MIT"
        assert document.package_home_page == "https://example.com/widgets"

    def test_unknown_id_writes_nothing(self, tmp_path):
        project = tmp_path / "widgets"
        project.mkdir()

        with _catalog(tmp_path) as catalog:
            with pytest.raises(LicenseNotFoundError):
                initialize_license(catalog, "GPL-9.0", "ACME", "2024", project)

        assert list(project.iterdir()) == []

    def test_missing_target_directory(self, tmp_path):
        with _catalog(tmp_path) as catalog:
            with pytest.raises(LicenseInitError):
                initialize_license(catalog, "MIT", "ACME", "2024", tmp_path / "missing")

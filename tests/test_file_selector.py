"""
Tests for file selection: directory expansion, extension filtering,
exclusions, and dropping files whose header already matches.
"""

import logging
from pathlib import Path

import pytest

from spdxtool.core.exclusion import ExclusionRuleSet
from spdxtool.core.file_selector import (
    FileSelector,
    FileTarget,
    extension_of,
    select_files,
    walk_files,
)
from spdxtool.core.header_codec import HeaderFields, render

FIELDS = HeaderFields(copyright="ACME", year="2024", spdx_id="MIT")
CLJ_HEADER = render(FIELDS.spec_for("clj"))


@pytest.fixture
def project(tmp_path):
    """A small Clojure project tree."""
    root = tmp_path.resolve()
    (root / "src" / "app").mkdir(parents=True)
    (root / "test").mkdir()
    (root / "target").mkdir()
    (root / "src" / "app" / "core.clj").write_text("(ns app.core)\n", encoding="utf-8")
    (root / "src" / "app" / "ui.cljs").write_text("(ns app.ui)\n", encoding="utf-8")
    (root / "src" / "app" / "README.md").write_text("# app\n", encoding="utf-8")
    (root / "test" / "core_test.clj").write_text("(ns core-test)\n", encoding="utf-8")
    (root / "target" / "out.clj").write_text("(ns out)\n", encoding="utf-8")
    (root / "foo.generated.clj").write_text("(ns gen)\n", encoding="utf-8")
    return root


def _selector(root: Path, extensions=("clj", "cljc", "cljs"), extra=None) -> FileSelector:
    return FileSelector(
        extensions=extensions,
        exclusion=ExclusionRuleSet.from_base_dir(root, extra),
        fields=FIELDS,
        cwd=root,
    )


def _relative(targets: list[FileTarget], root: Path) -> list[str]:
    return [t.path.relative_to(root).as_posix() for t in targets]


class TestExtensionOf:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("core.clj", "clj"),
            ("archive.tar.gz", "gz"),
            ("Makefile", ""),
            (".bashrc", "bashrc"),
            ("Core.CLJ", "CLJ"),
        ],
    )
    def test_suffix_after_final_dot(self, name, expected):
        assert extension_of(Path("dir") / name) == expected


class TestWalkFiles:
    def test_filters_by_extension(self, project):
        found = sorted(p.relative_to(project).as_posix() for p in walk_files(project, {"cljs"}))
        assert found == ["src/app/ui.cljs"]

    def test_extension_match_is_case_sensitive(self, tmp_path):
        (tmp_path / "A.CLJ").write_text("", encoding="utf-8")
        assert list(walk_files(tmp_path, {"clj"})) == []

    def test_handles_deep_trees(self, tmp_path):
        current = tmp_path
        for i in range(200):
            current = current / f"d{i}"
        current.mkdir(parents=True)
        (current / "leaf.clj").write_text("", encoding="utf-8")
        assert list(walk_files(tmp_path, {"clj"})) == [current / "leaf.clj"]


class TestFileSelector:
    def test_directory_expansion_with_exclusions(self, project):
        (project / ".gitignore").write_text("target/*\n", encoding="utf-8")
        selector = _selector(project, extra=["*.generated.clj"])

        selected = _relative(selector.select([project]), project)

        assert selected == ["src/app/core.clj", "src/app/ui.cljs", "test/core_test.clj"]
        assert "target/out.clj" not in selected
        assert "foo.generated.clj" not in selected

    def test_relative_inputs_resolve_against_cwd(self, project):
        selected = _relative(_selector(project).select(["test"]), project)
        assert selected == ["test/core_test.clj"]

    def test_explicit_file_ignores_extension_filter(self, project):
        readme = project / "src" / "app" / "README.md"
        selected = _selector(project).select([readme])
        assert selected == [FileTarget(path=readme, extension="md")]

    def test_explicit_file_is_still_excluded(self, project):
        selector = _selector(project, extra=["*.md"])
        assert selector.select([project / "src" / "app" / "README.md"]) == []

    def test_matching_files_are_dropped(self, project):
        core = project / "src" / "app" / "core.clj"
        core.write_text(CLJ_HEADER + "(ns app.core)\n", encoding="utf-8")

        selected = _relative(_selector(project).select(["src"]), project)

        assert selected == ["src/app/ui.cljs"]

    def test_stale_files_are_kept(self, project):
        core = project / "src" / "app" / "core.clj"
        core.write_text(
            ";; Copyright © 2001 Old\n;; SPDX-License-Identifier: EPL-1.0\n", encoding="utf-8"
        )
        assert "src/app/core.clj" in _relative(_selector(project).select(["src"]), project)

    def test_missing_path_is_skipped(self, project, caplog):
        with caplog.at_level(logging.WARNING):
            assert _selector(project).select(["does-not-exist"]) == []
        assert any("does not exist" in r.message for r in caplog.records)

    def test_duplicate_inputs_are_selected_once(self, project):
        core = project / "src" / "app" / "core.clj"
        selected = _selector(project).select([core, "src", core])
        assert [t.path for t in selected].count(core) == 1

    def test_unreadable_files_are_kept_for_reporting(self, project):
        binary = project / "src" / "app" / "blob.clj"
        binary.write_bytes(b"\xff\xfe\x00")
        assert "src/app/blob.clj" in _relative(_selector(project).select(["src"]), project)

    def test_custom_extensions(self, project):
        selected = _relative(_selector(project, extensions=["md"]).select(["."]), project)
        assert selected == ["src/app/README.md"]

    def test_select_files_wrapper(self, project):
        targets = select_files(
            [project / "test"],
            ["clj"],
            ExclusionRuleSet.from_base_dir(project),
            FIELDS,
            cwd=project,
        )
        assert _relative(targets, project) == ["test/core_test.clj"]

"""
Tests for project root detection.
"""

from spdxtool.core.project_root import (
    ProjectContext,
    detect_project_context,
    find_project_root,
    is_project_root,
)


def test_vcs_directory_marks_root(tmp_path):
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "src" / "app"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == tmp_path.resolve()


def test_build_manifest_marks_root(tmp_path):
    (tmp_path / "deps.edn").write_text("{}", encoding="utf-8")
    nested = tmp_path / "src"
    nested.mkdir()
    assert find_project_root(nested) == tmp_path.resolve()


def test_nearest_root_wins(tmp_path):
    (tmp_path / ".git").mkdir()
    module = tmp_path / "modules" / "lib"
    module.mkdir(parents=True)
    (module / "project.clj").write_text("", encoding="utf-8")
    assert find_project_root(module) == module.resolve()


def test_git_file_is_not_a_vcs_directory(tmp_path):
    (tmp_path / ".git").write_text("gitdir: elsewhere", encoding="utf-8")
    assert not is_project_root(tmp_path)


def test_context_falls_back_to_cwd(tmp_path):
    context = ProjectContext(cwd=tmp_path)
    assert context.root_or_cwd == tmp_path
    assert context.base_dir == tmp_path


def test_detect_project_context(tmp_path):
    (tmp_path / "bb.edn").write_text("{}", encoding="utf-8")
    sub = tmp_path / "scripts"
    sub.mkdir()
    context = detect_project_context(sub)
    assert context.cwd == sub.resolve()
    assert context.project_root == tmp_path.resolve()
    assert context.root_or_cwd == tmp_path.resolve()

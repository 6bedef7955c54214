"""
Unit tests for the loose gitignore-style pattern matcher.
"""

import pytest

from spdxtool.core.pattern_matcher import is_wildcard_pattern, matches


class TestIgnoredPatterns:
    """Blank and comment patterns never match."""

    @pytest.mark.parametrize("pattern", ["", "   ", "#", "# build/", "#*.clj"])
    def test_blank_and_comment_patterns_never_match(self, pattern):
        assert not matches("src/core.clj", pattern)
        assert not matches("", pattern)


class TestDirectoryPatterns:
    """Trailing-slash patterns match by substring containment."""

    def test_directory_prefix_matches(self):
        assert matches("build/x", "build/")

    def test_nested_directory_matches(self):
        assert matches("a/build/x.clj", "build/")

    def test_substring_over_match_is_preserved(self):
        assert matches("my-build/file.clj", "build/")

    def test_unrelated_path_does_not_match(self):
        assert not matches("src/core.clj", "build/")


class TestWildcardPatterns:
    """Wildcard patterns are end-anchored regular expressions."""

    def test_star_suffix(self):
        assert matches("src/foo.tmp", "*.tmp")

    def test_dot_is_literal(self):
        assert not matches("src/fooxtmp", "*.tmp")

    def test_question_mark_matches_single_character(self):
        assert matches("a/b1.clj", "b?.clj")
        assert not matches("a/b12.clj", "b?.clj")

    def test_not_anchored_at_start(self):
        assert matches("deep/target/out.clj", "target/*")

    def test_anchored_at_end(self):
        assert not matches("src/foo.tmp.bak", "*.tmp")

    def test_star_crosses_directories(self):
        assert matches("target/a/b/c.clj", "target/*")

    def test_generated_suffix(self):
        assert matches("foo.generated.clj", "*.generated.clj")
        assert not matches("foo.clj", "*.generated.clj")

    def test_invalid_expression_does_not_match(self):
        assert not matches("src/(a.clj", "(*.clj")


class TestExactPatterns:
    """Patterns without wildcards require full equality."""

    def test_exact_match(self):
        assert matches("test.clj", "test.clj")

    def test_basename_is_not_enough(self):
        assert not matches("a/b/test.clj", "test.clj")

    def test_full_relative_path(self):
        assert matches("a/b/test.clj", "a/b/test.clj")


def test_is_wildcard_pattern():
    assert is_wildcard_pattern("*.clj")
    assert is_wildcard_pattern("a?.clj")
    assert not is_wildcard_pattern("build/")

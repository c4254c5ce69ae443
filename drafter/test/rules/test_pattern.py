from __future__ import annotations

import re

from drafter.core.result import Err, Ok
from drafter.rules.pattern import compile_pattern, match_glob


def test_js_literal_with_flags() -> None:
    result = compile_pattern("/(fix|bug)/i")
    assert isinstance(result, Ok)
    assert result.value.pattern == "(fix|bug)"
    assert result.value.flags & re.IGNORECASE
    assert result.value.search("FIX the thing")


def test_global_flag_is_ignored() -> None:
    result = compile_pattern("/bump/gi")
    assert isinstance(result, Ok)
    assert result.value.search("Bump pyyaml")


def test_plain_string_is_case_sensitive_regex() -> None:
    result = compile_pattern("^docs:")
    assert isinstance(result, Ok)
    assert result.value.search("docs: typo")
    assert result.value.search("Docs: typo") is None


def test_slashes_inside_literal() -> None:
    result = compile_pattern("/src/api/")
    assert isinstance(result, Ok)
    assert result.value.pattern == "src/api"


def test_invalid_regex() -> None:
    result = compile_pattern("/(oops/")
    assert isinstance(result, Err)
    assert "missing" in result.error or "unterminated" in result.error


def test_glob_without_slash_matches_basename() -> None:
    assert match_glob("*.md", "README.md")
    assert match_glob("*.md", "docs/guide/intro.md")
    assert not match_glob("*.md", "src/main.rs")


def test_glob_with_slash_matches_full_path() -> None:
    assert match_glob("docs/*.md", "docs/intro.md")
    assert not match_glob("docs/*.md", "src/intro.md")


def test_directory_prefix() -> None:
    assert match_glob("docs/", "docs/a/b.txt")
    assert not match_glob("docs/", "src/docs.txt")


def test_path_with_non_flag_tail_is_plain_regex() -> None:
    result = compile_pattern("/src/main")
    assert isinstance(result, Ok)
    assert result.value.pattern == "/src/main"
    assert result.value.search("repo/src/main.py")
    assert result.value.search("src/main.py") is None

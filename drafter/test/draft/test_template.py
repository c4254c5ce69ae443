from __future__ import annotations

from drafter.draft.template import escape_title, format_contributors, render_template


def test_render_known_and_unknown_variables() -> None:
    out = render_template("- $TITLE (#$NUMBER) $UNKNOWN", {"TITLE": "Fix it", "NUMBER": 12})
    assert out == "- Fix it (#12) $UNKNOWN"


def test_substituted_values_are_not_reexpanded() -> None:
    out = render_template("$CHANGES", {"CHANGES": "costs $TITLE"})
    assert out == "costs $TITLE"


def test_braced_variables() -> None:
    assert render_template("v${RESOLVED_VERSION}rc", {"RESOLVED_VERSION": "1.0.0"}) == "v1.0.0rc"


def test_escape_title() -> None:
    assert escape_title("Use <T> & *args_here", "\\<*_&") == "Use \\<T> \\& \\*args\\_here"
    assert escape_title("a\\b", "\\") == "a\\\\b"
    assert escape_title("untouched *", "") == "untouched *"


def test_format_contributors() -> None:
    assert format_contributors([], "No contributors") == "No contributors"
    assert format_contributors(["a"], "-") == "@a"
    assert format_contributors(["a", "b"], "-") == "@a and @b"
    assert format_contributors(["a", "b", "c"], "-") == "@a, @b and @c"


def test_double_dollar_is_literal() -> None:
    out = render_template("costs $$5, total $$$AMOUNT", {"AMOUNT": 7})
    assert out == "costs $$5, total $$7"


def test_trailing_dollar_is_kept() -> None:
    assert render_template("price in $", {}) == "price in $"

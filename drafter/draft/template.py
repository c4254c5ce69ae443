"""`$VARIABLE` substitution for release-drafter templates."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from string import Template


class _DraftTemplate(Template):
    """`$NAME` and `${NAME}` only; `$$` is literal text, not an escape."""

    pattern = r"""
    \$(?:
      (?P<escaped>(?!))                       |
      (?P<named>(?a:[_a-z][_a-z0-9]*))        |
      {(?P<braced>(?a:[_a-z][_a-z0-9]*))}     |
      (?P<invalid>)
    )
    """


def render_template(template: str, variables: Mapping[str, object]) -> str:
    """Substitute `$NAME` / `${NAME}` placeholders.

    Unknown placeholders are left untouched. Substituted values are not
    re-expanded, so a change title containing `$CHANGES` stays literal.
    """
    return _DraftTemplate(template).safe_substitute({k: str(v) for k, v in variables.items()})


def escape_title(title: str, escapes: str) -> str:
    """Backslash-escape every character of `escapes` found in the title."""
    if not escapes:
        return title
    return "".join(f"\\{ch}" if ch in escapes else ch for ch in title)


def format_contributors(logins: Sequence[str], empty: str) -> str:
    """`@a`, `@a and @b`, `@a, @b and @c`; `empty` when nobody is credited."""
    handles = [f"@{login}" for login in logins]
    if not handles:
        return empty
    if len(handles) == 1:
        return handles[0]
    return f"{', '.join(handles[:-1])} and {handles[-1]}"

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal


Severity = Literal["major", "minor", "patch"]
SortBy = Literal["merged_at", "title"]
SortDirection = Literal["ascending", "descending"]

# Highest precedence first.
SEVERITIES: tuple[Severity, ...] = ("major", "minor", "patch")

_RANK: dict[Severity, int] = {"patch": 1, "minor": 2, "major": 3}


def severity_rank(severity: Severity) -> int:
    return _RANK[severity]


def highest_severity(severities: Iterable[Severity]) -> Severity | None:
    """Return the highest-precedence severity, or None for an empty input."""
    best: Severity | None = None
    for s in severities:
        if best is None or _RANK[s] > _RANK[best]:
            best = s
    return best


@dataclass(frozen=True, slots=True)
class Category:
    title: str
    labels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AutolabelRule:
    """Adds `label` to a change when any of its matchers hits."""

    label: str
    title: tuple[re.Pattern[str], ...] = ()
    body: tuple[re.Pattern[str], ...] = ()
    branch: tuple[re.Pattern[str], ...] = ()
    files: tuple[str, ...] = ()  # glob patterns


@dataclass(frozen=True, slots=True)
class Templates:
    name: str = "v$RESOLVED_VERSION"
    tag: str = "v$RESOLVED_VERSION"
    version: str = "$MAJOR.$MINOR.$PATCH"
    change: str = "* $TITLE @$AUTHOR (#$NUMBER)"
    category: str = "## $TITLE"
    no_changes: str = "* No changes"
    no_contributors: str = "No contributors"
    body: str = "$CHANGES"


def _empty_severities() -> dict[str, Severity]:
    return {}


def _empty_categories() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Validated release-drafter rules.

    `category_by_label` and `severity_by_label` are derived from `categories`
    and the version resolver by the loader; each label maps to at most one
    category and to its highest listed severity.
    """

    templates: Templates = field(default_factory=Templates)
    categories: tuple[Category, ...] = ()
    autolabel: tuple[AutolabelRule, ...] = ()
    default_severity: Severity = "patch"
    title_escapes: str = ""
    exclude_contributors: tuple[str, ...] = ()
    exclude_labels: tuple[str, ...] = ()
    include_labels: tuple[str, ...] = ()
    sort_by: SortBy = "merged_at"
    sort_direction: SortDirection = "descending"
    category_by_label: dict[str, str] = field(default_factory=_empty_categories)
    severity_by_label: dict[str, Severity] = field(default_factory=_empty_severities)

    def category_for(self, label: str) -> str | None:
        return self.category_by_label.get(label)

    def severity_for(self, label: str) -> Severity | None:
        return self.severity_by_label.get(label)

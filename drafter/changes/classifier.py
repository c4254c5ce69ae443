"""Autolabeling, category assignment and severity resolution.

Classification is a pure function of a record and a RuleSet: the same input
always yields the same labels, category and severity, whatever order the
record's labels were given in.
"""

from __future__ import annotations

from collections.abc import Iterable

from drafter.changes.model import ChangeRecord, ClassifiedChange
from drafter.rules.model import AutolabelRule, RuleSet, Severity, highest_severity
from drafter.rules.pattern import match_glob


def rule_matches(rule: AutolabelRule, change: ChangeRecord) -> bool:
    if any(p.search(change.title) for p in rule.title):
        return True
    if change.body and any(p.search(change.body) for p in rule.body):
        return True
    if change.branch and any(p.search(change.branch) for p in rule.branch):
        return True
    return any(match_glob(glob, path) for glob in rule.files for path in change.files)


def autolabels(change: ChangeRecord, rules: RuleSet) -> tuple[str, ...]:
    """Labels the autolabeler adds to a change, in rule order."""
    added: list[str] = []
    for rule in rules.autolabel:
        if rule.label in change.labels or rule.label in added:
            continue
        if rule_matches(rule, change):
            added.append(rule.label)
    return tuple(added)


def category_for(labels: frozenset[str], rules: RuleSet) -> str | None:
    """First configured category holding any of the labels."""
    for category in rules.categories:
        if any(label in labels for label in category.labels):
            return category.title
    return None


def severity_for(labels: Iterable[str], rules: RuleSet) -> Severity | None:
    """Highest severity among the labels, None when no label has one."""
    return highest_severity(s for s in (rules.severity_for(label) for label in labels) if s is not None)


def classify(change: ChangeRecord, rules: RuleSet) -> ClassifiedChange:
    added = autolabels(change, rules)
    labels = change.labels | frozenset(added)
    severity = severity_for(labels, rules)
    return ClassifiedChange(
        record=change,
        labels=labels,
        added_labels=added,
        category=category_for(labels, rules),
        severity=severity or rules.default_severity,
        defaulted=severity is None,
    )


def classify_all(changes: Iterable[ChangeRecord], rules: RuleSet) -> tuple[ClassifiedChange, ...]:
    return tuple(classify(change, rules) for change in changes)

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from drafter.changes.model import ClassifiedChange
from drafter.core.result import Err, Ok, Result
from drafter.draft.errors import DraftError
from drafter.draft.semver import INITIAL_VERSION, SemVer, coerce_version, render_version
from drafter.draft.template import escape_title, format_contributors, render_template
from drafter.rules.model import RuleSet, Severity, highest_severity


@dataclass(frozen=True, slots=True)
class DraftSection:
    title: str
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Draft:
    """A composed release draft.

    `sections` follow the configured category order and never include an
    empty category. Uncategorized lines are rendered first, without heading.
    """

    sections: tuple[DraftSection, ...]
    uncategorized: tuple[str, ...]
    previous_tag: str | None
    severity: Severity
    resolved_version: str
    contributors: tuple[str, ...]
    changes: tuple[ClassifiedChange, ...]
    name: str
    tag: str
    body: str

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "tag": self.tag,
            "resolved_version": self.resolved_version,
            "previous_tag": self.previous_tag,
            "severity": self.severity,
            "contributors": list(self.contributors),
            "uncategorized": list(self.uncategorized),
            "sections": [{"title": s.title, "lines": list(s.lines)} for s in self.sections],
            "changes": [
                {
                    "number": c.record.number,
                    "title": c.record.title,
                    "author": c.record.author,
                    "labels": sorted(c.labels),
                    "category": c.category,
                    "severity": c.severity,
                }
                for c in self.changes
            ],
            "body": self.body,
        }


def _keep(change: ClassifiedChange, rules: RuleSet) -> bool:
    if any(label in change.labels for label in rules.exclude_labels):
        return False
    if rules.include_labels:
        return any(label in change.labels for label in rules.include_labels)
    return True


def _sorted(changes: list[ClassifiedChange], rules: RuleSet) -> list[ClassifiedChange]:
    reverse = rules.sort_direction == "descending"
    if rules.sort_by == "title":
        return sorted(
            changes,
            key=lambda c: (c.record.title.casefold(), c.record.number),
            reverse=reverse,
        )

    # Changes without a merge time keep their input order, after the dated ones.
    dated = [c for c in changes if c.record.merged_at is not None]
    undated = [c for c in changes if c.record.merged_at is None]

    def merged_key(c: ClassifiedChange) -> tuple[datetime, int]:
        assert c.record.merged_at is not None
        return (c.record.merged_at, c.record.number)

    return sorted(dated, key=merged_key, reverse=reverse) + undated


def render_change_line(change: ClassifiedChange, rules: RuleSet) -> str:
    record = change.record
    return render_template(
        rules.templates.change,
        {
            "TITLE": escape_title(record.title, rules.title_escapes),
            "NUMBER": record.number,
            "AUTHOR": record.author,
            "URL": record.url or "",
            "BODY": record.body,
        },
    )


def _contributors(changes: Iterable[ClassifiedChange], rules: RuleSet) -> tuple[str, ...]:
    excluded = set(rules.exclude_contributors)
    seen: dict[str, None] = {}
    for change in changes:
        author = change.record.author
        if author not in excluded:
            seen.setdefault(author, None)
    return tuple(seen)


def _render_changes(
    uncategorized: tuple[str, ...],
    sections: tuple[DraftSection, ...],
    rules: RuleSet,
) -> str:
    blocks: list[str] = []
    if uncategorized:
        blocks.append("\n".join(uncategorized))
    for section in sections:
        heading = render_template(rules.templates.category, {"TITLE": section.title})
        blocks.append(heading + "\n\n" + "\n".join(section.lines))
    if not blocks:
        return rules.templates.no_changes
    return "\n\n".join(blocks)


def compose_draft(
    changes: Iterable[ClassifiedChange],
    rules: RuleSet,
    *,
    previous_tag: str | None = None,
    owner: str | None = None,
    repository: str | None = None,
) -> Result[Draft, DraftError]:
    """Group classified changes into a release draft.

    The next version is the previous tag's version bumped by the highest
    severity among the kept changes (the default severity when none are
    kept). Without a previous tag the version starts from 0.0.0.
    """
    previous: SemVer = INITIAL_VERSION
    if previous_tag:
        parsed = coerce_version(previous_tag)
        if parsed is None:
            return Err(
                DraftError(
                    kind="invalid_tag",
                    message=f"previous tag has no version: {previous_tag!r}",
                    hint="expected something like v1.2.3",
                )
            )
        previous = parsed

    kept = _sorted([c for c in changes if _keep(c, rules)], rules)

    grouped: dict[str, list[str]] = {category.title: [] for category in rules.categories}
    uncategorized: list[str] = []
    for change in kept:
        line = render_change_line(change, rules)
        bucket = grouped.get(change.category) if change.category is not None else None
        if bucket is None:
            uncategorized.append(line)
        else:
            bucket.append(line)

    sections = tuple(
        DraftSection(title=title, lines=tuple(lines)) for title, lines in grouped.items() if lines
    )

    severity = highest_severity(c.severity for c in kept) or rules.default_severity
    version_template = rules.templates.version
    resolved = render_version(previous.bump(severity), version_template)
    contributors = _contributors(kept, rules)

    variables: dict[str, object] = {
        "RESOLVED_VERSION": resolved,
        "NEXT_MAJOR_VERSION": render_version(previous.bump("major"), version_template),
        "NEXT_MINOR_VERSION": render_version(previous.bump("minor"), version_template),
        "NEXT_PATCH_VERSION": render_version(previous.bump("patch"), version_template),
        "PREVIOUS_TAG": previous_tag or "",
        "OWNER": owner or "",
        "REPOSITORY": repository or "",
    }
    name = render_template(rules.templates.name, variables)
    tag = render_template(rules.templates.tag, variables)

    body_variables = dict(variables)
    body_variables["CHANGES"] = _render_changes(tuple(uncategorized), sections, rules)
    body_variables["CONTRIBUTORS"] = format_contributors(contributors, rules.templates.no_contributors)
    body = render_template(rules.templates.body, body_variables)

    return Ok(
        Draft(
            sections=sections,
            uncategorized=tuple(uncategorized),
            previous_tag=previous_tag,
            severity=severity,
            resolved_version=resolved,
            contributors=contributors,
            changes=tuple(kept),
            name=name,
            tag=tag,
            body=body,
        )
    )


def write_draft(draft: Draft, path: Path) -> Result[Path, DraftError]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(draft.body, encoding="utf-8")
    except OSError as e:
        return Err(
            DraftError(
                kind="write_failed",
                message=f"failed to write draft: {e}",
                hint=str(path),
            )
        )
    return Ok(path)

"""Load and validate release-drafter style rule documents."""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import cast

import yaml

from drafter.core.result import Err, Ok, Result
from drafter.core.structured import StrDict, as_obj_list, as_str_dict, get_raw_str, get_str, get_str_list
from drafter.rules.errors import ConfigError, PatternError, RuleError
from drafter.rules.model import (
    SEVERITIES,
    AutolabelRule,
    Category,
    RuleSet,
    Severity,
    SortBy,
    SortDirection,
    Templates,
    severity_rank,
)
from drafter.rules.pattern import compile_pattern


_TEMPLATE_KEYS: dict[str, str] = {
    "name-template": "name",
    "tag-template": "tag",
    "version-template": "version",
    "change-template": "change",
    "category-template": "category",
    "no-changes-template": "no_changes",
    "no-contributors-template": "no_contributors",
    "template": "body",
}

_SORT_BY: tuple[SortBy, ...] = ("merged_at", "title")
_SORT_DIRECTIONS: tuple[SortDirection, ...] = ("ascending", "descending")


def _parse_templates(doc: StrDict) -> Result[Templates, RuleError]:
    if get_raw_str(doc, "template") is None:
        return Err(
            ConfigError(
                "missing required key: template",
                hint="add a body template, e.g. `template: $CHANGES`",
            )
        )

    values: dict[str, str] = {}
    for key, attr in _TEMPLATE_KEYS.items():
        if key not in doc:
            continue
        value = get_raw_str(doc, key)
        if value is None:
            return Err(ConfigError(f"{key} must be a string"))
        values[attr] = value
    return Ok(Templates(**values))


def _parse_categories(doc: StrDict) -> Result[tuple[Category, ...], RuleError]:
    if "categories" not in doc:
        return Ok(())
    items = as_obj_list(doc["categories"])
    if items is None:
        return Err(ConfigError("categories must be a list"))

    out: list[Category] = []
    for i, item in enumerate(items):
        entry = as_str_dict(item)
        if entry is None:
            return Err(ConfigError(f"categories[{i}] must be a mapping"))
        title = get_str(entry, "title")
        if title is None:
            return Err(ConfigError(f"categories[{i}] is missing a title"))

        labels: list[str] = []
        for key in ("label", "labels"):
            if key not in entry:
                continue
            values = get_str_list(entry, key)
            if values is None:
                return Err(ConfigError(f"categories[{i}].{key} must be a string or list of strings"))
            labels.extend(values)
        if not labels:
            return Err(ConfigError(f"category {title!r} has no labels"))
        out.append(Category(title=title, labels=tuple(dict.fromkeys(labels))))
    return Ok(tuple(out))


def _index_categories(categories: tuple[Category, ...]) -> Result[dict[str, str], RuleError]:
    by_label: dict[str, str] = {}
    for category in categories:
        for label in category.labels:
            existing = by_label.get(label)
            if existing is not None:
                return Err(
                    ConfigError(
                        f"label {label!r} is mapped to two categories: {existing!r} and {category.title!r}"
                    )
                )
            by_label[label] = category.title
    return Ok(by_label)


def _parse_version_resolver(doc: StrDict) -> Result[tuple[dict[str, Severity], Severity], RuleError]:
    if "version-resolver" not in doc:
        return Ok(({}, "patch"))
    resolver = as_str_dict(doc["version-resolver"])
    if resolver is None:
        return Err(ConfigError("version-resolver must be a mapping"))

    default: Severity = "patch"
    if "default" in resolver:
        raw = get_str(resolver, "default")
        if raw not in SEVERITIES:
            return Err(
                ConfigError(
                    f"version-resolver.default must be one of {', '.join(SEVERITIES)}",
                    hint=f"got {resolver['default']!r}",
                )
            )
        default = cast(Severity, raw)

    by_label: dict[str, Severity] = {}
    for key, value in resolver.items():
        if key == "default":
            continue
        if key not in SEVERITIES:
            return Err(ConfigError(f"unknown version-resolver level: {key!r}"))
        severity = cast(Severity, key)
        level = as_str_dict(value)
        labels = get_str_list(level, "labels") if level is not None else None
        if labels is None:
            return Err(ConfigError(f"version-resolver.{key}.labels must be a list of strings"))
        for label in labels:
            current = by_label.get(label)
            if current is None or severity_rank(severity) > severity_rank(current):
                by_label[label] = severity
    return Ok((by_label, default))


def _compile_all(label: str, raw: list[str]) -> Result[tuple[re.Pattern[str], ...], RuleError]:
    compiled: list[re.Pattern[str]] = []
    for pattern in raw:
        result = compile_pattern(pattern)
        if isinstance(result, Err):
            return Err(PatternError(label=label, pattern=pattern, reason=result.error))
        compiled.append(result.value)
    return Ok(tuple(compiled))


def _parse_autolabeler(doc: StrDict) -> Result[tuple[AutolabelRule, ...], RuleError]:
    if "autolabeler" not in doc:
        return Ok(())
    items = as_obj_list(doc["autolabeler"])
    if items is None:
        return Err(ConfigError("autolabeler must be a list"))

    rules: list[AutolabelRule] = []
    for i, item in enumerate(items):
        entry = as_str_dict(item)
        if entry is None:
            return Err(ConfigError(f"autolabeler[{i}] must be a mapping"))
        label = get_str(entry, "label")
        if label is None:
            return Err(ConfigError(f"autolabeler[{i}] is missing a label"))

        matchers: dict[str, list[str]] = {}
        for key in ("title", "body", "branch", "files"):
            if key not in entry:
                continue
            values = get_str_list(entry, key)
            if values is None:
                return Err(ConfigError(f"autolabeler[{i}].{key} must be a string or list of strings"))
            matchers[key] = values
        if not matchers:
            return Err(ConfigError(f"autolabeler rule for {label!r} has no title, body, branch or files"))

        title = _compile_all(label, matchers.get("title", []))
        if isinstance(title, Err):
            return title
        body = _compile_all(label, matchers.get("body", []))
        if isinstance(body, Err):
            return body
        branch = _compile_all(label, matchers.get("branch", []))
        if isinstance(branch, Err):
            return branch

        rules.append(
            AutolabelRule(
                label=label,
                title=title.value,
                body=body.value,
                branch=branch.value,
                files=tuple(matchers.get("files", [])),
            )
        )
    return Ok(tuple(rules))


def _check_label_mappings(
    autolabel: tuple[AutolabelRule, ...],
    category_by_label: dict[str, str],
    severity_by_label: dict[str, Severity],
) -> Result[None, RuleError]:
    for rule in autolabel:
        if rule.label not in category_by_label:
            return Err(
                ConfigError(
                    f"autolabeler label {rule.label!r} has no category",
                    hint="list it under one of the categories",
                )
            )
        if rule.label not in severity_by_label:
            return Err(
                ConfigError(
                    f"autolabeler label {rule.label!r} has no version-resolver severity",
                    hint="list it under version-resolver major, minor or patch",
                )
            )
    for label in severity_by_label:
        if label not in category_by_label:
            return Err(
                ConfigError(
                    f"version-resolver label {label!r} has no category",
                    hint="list it under one of the categories",
                )
            )
    return Ok(None)


def _parse_str_tuple(doc: StrDict, key: str) -> Result[tuple[str, ...], RuleError]:
    if key not in doc:
        return Ok(())
    values = get_str_list(doc, key)
    if values is None:
        return Err(ConfigError(f"{key} must be a string or list of strings"))
    return Ok(tuple(values))


def _parse_sorting(doc: StrDict) -> Result[tuple[SortBy, SortDirection], RuleError]:
    sort_by = get_str(doc, "sort-by") or "merged_at"
    if sort_by not in _SORT_BY:
        return Err(ConfigError(f"sort-by must be one of {', '.join(_SORT_BY)}", hint=f"got {sort_by!r}"))
    direction = get_str(doc, "sort-direction") or "descending"
    if direction not in _SORT_DIRECTIONS:
        return Err(
            ConfigError(
                f"sort-direction must be one of {', '.join(_SORT_DIRECTIONS)}",
                hint=f"got {direction!r}",
            )
        )
    return Ok((cast(SortBy, sort_by), cast(SortDirection, direction)))


def parse_rules(data: object) -> Result[RuleSet, RuleError]:
    """Validate an already-parsed rule document."""
    doc = as_str_dict(data)
    if doc is None:
        return Err(ConfigError("rule document must be a mapping"))

    templates = _parse_templates(doc)
    if isinstance(templates, Err):
        return templates

    categories = _parse_categories(doc)
    if isinstance(categories, Err):
        return categories
    category_by_label = _index_categories(categories.value)
    if isinstance(category_by_label, Err):
        return category_by_label

    resolver = _parse_version_resolver(doc)
    if isinstance(resolver, Err):
        return resolver
    severity_by_label, default_severity = resolver.value

    autolabel = _parse_autolabeler(doc)
    if isinstance(autolabel, Err):
        return autolabel

    checked = _check_label_mappings(autolabel.value, category_by_label.value, severity_by_label)
    if isinstance(checked, Err):
        return checked

    escapes = doc.get("change-title-escapes", "")
    if not isinstance(escapes, str):
        return Err(ConfigError("change-title-escapes must be a string"))

    lists: dict[str, tuple[str, ...]] = {}
    for key in ("exclude-contributors", "exclude-labels", "include-labels"):
        parsed = _parse_str_tuple(doc, key)
        if isinstance(parsed, Err):
            return parsed
        lists[key] = parsed.value

    sorting = _parse_sorting(doc)
    if isinstance(sorting, Err):
        return sorting
    sort_by, sort_direction = sorting.value

    return Ok(
        RuleSet(
            templates=templates.value,
            categories=categories.value,
            autolabel=autolabel.value,
            default_severity=default_severity,
            title_escapes=escapes,
            exclude_contributors=lists["exclude-contributors"],
            exclude_labels=lists["exclude-labels"],
            include_labels=lists["include-labels"],
            sort_by=sort_by,
            sort_direction=sort_direction,
            category_by_label=category_by_label.value,
            severity_by_label=severity_by_label,
        )
    )


def parse_rules_text(text: str) -> Result[RuleSet, RuleError]:
    """Parse and validate a YAML rule document."""
    try:
        data: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return Err(ConfigError(f"invalid YAML syntax: {e}"))
    return parse_rules(data)


def load_rules(path: Path) -> Result[RuleSet, RuleError]:
    """Read, parse and validate a rule file.

    Args:
        path: Path to a release-drafter YAML document

    Returns:
        Ok(RuleSet) on success, Err(ConfigError | PatternError) on failure
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"rule file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"error reading rule file: {e}", path=path))

    result = parse_rules_text(text)
    if isinstance(result, Err):
        return Err(dataclasses.replace(result.error, path=path))
    return result

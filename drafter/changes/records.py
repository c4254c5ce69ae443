"""Read change records from a YAML or JSON file.

Accepted shapes are a top-level list of records or a mapping with a
`changes` list. Labels may be plain strings or GitHub API label objects
(`{name: ...}`).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from pathlib import Path

import yaml

from drafter.changes.model import ChangeRecord
from drafter.core.result import Err, Ok, Result
from drafter.core.structured import StrDict, as_obj_list, as_str_dict, get_int, get_raw_str, get_str, get_str_list


@dataclass(frozen=True, slots=True)
class ChangesError:
    message: str
    path: Path | None = None
    hint: str | None = None


def _parse_labels(entry: StrDict, where: str) -> Result[frozenset[str], ChangesError]:
    if "labels" not in entry:
        return Ok(frozenset())
    items = as_obj_list(entry["labels"])
    if items is None:
        return Err(ChangesError(f"{where}.labels must be a list"))

    labels: set[str] = set()
    for item in items:
        if isinstance(item, str):
            labels.add(item)
            continue
        obj = as_str_dict(item)
        name = get_str(obj, "name") if obj is not None else None
        if name is None:
            return Err(ChangesError(f"{where}.labels items must be strings or {{name: ...}} objects"))
        labels.add(name)
    return Ok(frozenset(labels))


def _parse_merged_at(value: object, where: str) -> Result[datetime | None, ChangesError]:
    if value is None:
        return Ok(None)
    # YAML turns unquoted ISO timestamps into datetimes, and bare dates into dates.
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min, tzinfo=UTC)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return Err(ChangesError(f"{where}.merged_at is not an ISO 8601 timestamp: {value!r}"))
    else:
        return Err(ChangesError(f"{where}.merged_at must be a timestamp string"))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return Ok(parsed)


def parse_change(data: object, index: int = 0) -> Result[ChangeRecord, ChangesError]:
    where = f"changes[{index}]"
    entry = as_str_dict(data)
    if entry is None:
        return Err(ChangesError(f"{where} must be a mapping"))

    number = get_int(entry, "number")
    if number is None:
        return Err(ChangesError(f"{where}.number must be an integer"))
    title = get_str(entry, "title")
    if title is None:
        return Err(ChangesError(f"{where}.title is required"))
    author = get_str(entry, "author")
    if author is None:
        return Err(ChangesError(f"{where}.author is required", hint=f"pull request #{number}"))

    labels = _parse_labels(entry, where)
    if isinstance(labels, Err):
        return labels

    files: list[str] = []
    if "files" in entry:
        parsed_files = get_str_list(entry, "files")
        if parsed_files is None:
            return Err(ChangesError(f"{where}.files must be a list of paths"))
        files = parsed_files

    merged_at = _parse_merged_at(entry.get("merged_at"), where)
    if isinstance(merged_at, Err):
        return merged_at

    return Ok(
        ChangeRecord(
            number=number,
            title=title,
            author=author,
            labels=labels.value,
            body=get_raw_str(entry, "body") or "",
            branch=get_str(entry, "branch"),
            files=tuple(files),
            merged_at=merged_at.value,
            url=get_str(entry, "url"),
        )
    )


def parse_changes(data: object) -> Result[tuple[ChangeRecord, ...], ChangesError]:
    if data is None:
        return Ok(())
    doc = as_str_dict(data)
    items = as_obj_list(doc.get("changes") if doc is not None else data)
    if items is None:
        return Err(ChangesError("changes must be a list, or a mapping with a `changes` list"))

    records: list[ChangeRecord] = []
    for i, item in enumerate(items):
        parsed = parse_change(item, i)
        if isinstance(parsed, Err):
            return parsed
        records.append(parsed.value)
    return Ok(tuple(records))


def load_changes(path: Path) -> Result[tuple[ChangeRecord, ...], ChangesError]:
    """Read change records from a YAML or JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ChangesError(f"changes file not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ChangesError(f"error reading changes file: {e}", path=path))

    try:
        data: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return Err(ChangesError(f"invalid YAML/JSON syntax: {e}", path=path))

    result = parse_changes(data)
    if isinstance(result, Err):
        return Err(dataclasses.replace(result.error, path=path))
    return result

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from drafter.rules.model import Severity


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """A merged change (pull request) as read from the changes file."""

    number: int
    title: str
    author: str
    labels: frozenset[str] = frozenset()
    body: str = ""
    branch: str | None = None
    files: tuple[str, ...] = ()
    merged_at: datetime | None = None  # always timezone-aware
    url: str | None = None


@dataclass(frozen=True, slots=True)
class ClassifiedChange:
    record: ChangeRecord
    labels: frozenset[str]
    added_labels: tuple[str, ...]  # autolabels, in rule order
    category: str | None
    severity: Severity
    defaulted: bool  # severity came from the default, not from a label

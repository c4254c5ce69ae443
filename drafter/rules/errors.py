from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ConfigError:
    """The rule document is malformed or incomplete."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PatternError:
    """An autolabel pattern does not compile."""

    label: str
    pattern: str
    reason: str
    path: Path | None = None


RuleError = ConfigError | PatternError

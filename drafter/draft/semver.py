from __future__ import annotations

import re
from dataclasses import dataclass

from drafter.draft.template import render_template
from drafter.rules.model import Severity


# First numeric run, with optional minor and patch parts.
_COERCE_RE = re.compile(r"(?<!\d)(\d+)(?:\.(\d+))?(?:\.(\d+))?")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: Severity) -> "SemVer":
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


INITIAL_VERSION = SemVer(0, 0, 0)


def coerce_version(tag: str) -> SemVer | None:
    """Find a version inside an arbitrary tag (`release-2.1`, `v3`).

    Missing minor or patch parts are zero.
    """
    m = _COERCE_RE.search(tag)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2) or 0), int(m.group(3) or 0))


def render_version(version: SemVer, template: str) -> str:
    """Render a version template such as `$MAJOR.$MINOR.$PATCH`."""
    return render_template(
        template,
        {"MAJOR": version.major, "MINOR": version.minor, "PATCH": version.patch},
    )

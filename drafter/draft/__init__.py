"""Draft composition: version resolution, templating and grouping."""

from .composer import Draft, DraftSection, compose_draft, render_change_line, write_draft
from .errors import DraftError
from .semver import SemVer, coerce_version, render_version

__all__ = [
    "Draft",
    "DraftError",
    "DraftSection",
    "SemVer",
    "coerce_version",
    "compose_draft",
    "render_change_line",
    "render_version",
    "write_draft",
]

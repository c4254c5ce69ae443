"""Autolabel pattern compilation and matching.

Patterns are written as JavaScript regex literals (`/fix|bug/i`); anything
not in that form is compiled as a plain regular expression. A trailing part
made of anything but `gimsuy` flags, as in `/src/main`, is not a flag list.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase

from drafter.core.result import Err, Ok, Result


_LITERAL_RE = re.compile(r"^/(?P<source>.*)/(?P<flags>[gimsuy]*)$", re.DOTALL)

_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}
# g, u and y are meaningless for a single search over a str.


def compile_pattern(raw: str) -> Result[re.Pattern[str], str]:
    """Compile a pattern; Err carries a human readable reason."""
    source = raw
    flags = re.RegexFlag(0)

    m = _LITERAL_RE.match(raw)
    if m is not None:
        source = m.group("source")
        for ch in m.group("flags"):
            flags |= _FLAGS.get(ch, re.RegexFlag(0))

    try:
        return Ok(re.compile(source, flags))
    except re.error as e:
        return Err(str(e))


def match_glob(pattern: str, path: str) -> bool:
    """Match a changed file path against a glob.

    A pattern without a slash matches the file name at any depth, so `*.md`
    covers `docs/guide/intro.md`. A trailing slash matches a directory prefix.
    """
    path = path.replace("\\", "/").lstrip("/")
    if pattern.endswith("/"):
        return path.startswith(pattern.lstrip("/"))
    if "/" not in pattern:
        name = path.rsplit("/", 1)[-1]
        return fnmatchcase(name, pattern)
    return fnmatchcase(path, pattern.lstrip("/"))

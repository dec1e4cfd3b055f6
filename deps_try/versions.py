"""Comparison of four-part ``major.minor.patch.build`` version strings."""

from __future__ import annotations

import re

from .errors import VersionParseError

VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)\.(\d+)")

VersionTuple = tuple[int, int, int, int]


def parse_version(s: str) -> VersionTuple:
    """Parse the leading ``a.b.c.d`` of ``s``; anything after the fourth group is ignored."""
    match = VERSION_RE.match(s)
    if match is None:
        raise VersionParseError(f"Not a four-part version: {s!r}")
    major, minor, patch, build = (int(group) for group in match.groups())
    return major, minor, patch, build


def at_least(minimum: str, actual: str) -> bool:
    """True if ``actual`` is the same as or newer than ``minimum``."""
    return parse_version(actual) >= parse_version(minimum)

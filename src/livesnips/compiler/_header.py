"""Snippet header parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

# snippet <trigger | `regex`> ["description"] [flags]
HEADER_PATTERN = re.compile(
    r"""
    ^snippet\s+
    (?:`(?P<regex>[^`]+)`|(?P<trigger>\S+))
    (?:\s+"(?P<description>[^"]*)")?
    (?:\s+(?P<flags>\S+))?
    \s*$
    """,
    re.VERBOSE,
)

_HEADER_START = re.compile(r"^snippet(?:\s|$)")


@dataclass(frozen=True, slots=True)
class SnippetHeader:
    """Parsed ``snippet`` line."""

    trigger: str
    regexp: re.Pattern[str] | None
    description: str
    flags: str


def is_header_line(line: str) -> bool:
    """Check whether a line opens a snippet definition."""
    return _HEADER_START.match(line) is not None


def parse_header(line: str) -> SnippetHeader:
    """Parse a snippet header line.

    Pattern triggers get an end anchor appended unless they already end in
    ``$`` and are compiled in multiline mode.

    Raises:
        ValueError: If the line does not follow the header grammar or the
            pattern does not compile.
    """
    match = HEADER_PATTERN.match(line.rstrip())
    if match is None:
        msg = "Invalid snippet header"
        raise ValueError(msg)

    regexp: re.Pattern[str] | None = None
    trigger = match.group("trigger") or ""
    if (source := match.group("regex")) is not None:
        if not source.endswith("$"):
            source += "$"
        try:
            regexp = re.compile(source, re.MULTILINE)
        except re.error as e:
            msg = f"Invalid trigger pattern: {e}"
            raise ValueError(msg) from e
        trigger = ""

    flags = match.group("flags") or ""
    return SnippetHeader(
        trigger=trigger,
        regexp=regexp,
        description=match.group("description") or "",
        flags=flags,
    )

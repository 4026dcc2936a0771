"""Helpers for measuring inserted snippet text."""

import re

from ._position import Position

# Tab-stop syntax understood by templated inserts: $1, ${1} and ${1:default}.
TABSTOP_PATTERN = re.compile(r"(?<!\\)\$(\d+)|(?<!\\)\$\{(\d+)(?::([^}]*))?\}")

_ESCAPE_PATTERN = re.compile(r"\\([$}\\])")


def unescape_snippet_text(text: str) -> str:
    """Resolve the ``\\$``, ``\\}`` and ``\\\\`` escapes of snippet syntax."""
    return _ESCAPE_PATTERN.sub(r"\1", text)


def strip_tabstops(text: str) -> str:
    """Render snippet syntax as the plain text a templated insert produces.

    Tab-stop markers are removed (``${1:default}`` keeps ``default``) and
    escapes are resolved.
    """
    stripped = TABSTOP_PATTERN.sub(lambda m: m.group(3) or "", text)
    return unescape_snippet_text(stripped)


def indent_continuation_lines(text: str, prefix: str) -> str:
    """Prefix every line after the first with ``prefix``."""
    if not prefix:
        return text
    return text.replace("\n", "\n" + prefix)


def apply_offset(position: Position, text: str, indent: int) -> Position:
    """Return the position reached after inserting plain ``text`` at ``position``.

    Continuation lines are assumed to start at column ``indent``, matching
    how hosts re-indent multi-line templated inserts.
    """
    lines = text.split("\n")
    char_offset = len(lines[-1])
    if len(lines) > 1:
        return Position(position.line + len(lines) - 1, indent + char_offset)
    return Position(position.line, position.character + char_offset)

"""Position, range and change primitives shared by every livesnips component."""

from ._change import ContentChange
from ._offsets import (
    TABSTOP_PATTERN,
    apply_offset,
    indent_continuation_lines,
    strip_tabstops,
    unescape_snippet_text,
)
from ._position import Position, Range

__all__ = [
    "TABSTOP_PATTERN",
    "ContentChange",
    "Position",
    "Range",
    "apply_offset",
    "indent_continuation_lines",
    "strip_tabstops",
    "unescape_snippet_text",
]

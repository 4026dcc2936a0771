"""In-memory host for tests and the command line.

MemoryDocument stores text as a list of lines. MemoryEditor applies edits to
it and dispatches change and selection notifications serially to subscribed
listeners: a notification raised while a listener is running is queued and
delivered after the listener returns, as a real editor's event loop would.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from livesnips.enums import GrowthType
from livesnips.text import (
    ContentChange,
    Position,
    Range,
    apply_offset,
    indent_continuation_lines,
    strip_tabstops,
)
from livesnips.tracking import ChangeInfo, DynamicRange

from ._protocol import TextLine

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    ChangeListener = Callable[["MemoryDocument", list[ContentChange]], None]
    SelectionListener = Callable[["MemoryEditor", list[Range]], None]

DEFAULT_WORD_PATTERN = r"\w+"


@dataclass(slots=True)
class MemoryDocument:
    """A mutable text document held in memory.

    Example:
        >>> doc = MemoryDocument.from_text("hello world", language_id="plaintext")
        >>> doc.get_text(Range.from_coordinates(0, 6, 0, 11))
        'world'
    """

    uri: str = "memory://untitled"
    language_id: str = "plaintext"
    lines: list[str] = field(default_factory=lambda: [""])
    word_pattern: str = DEFAULT_WORD_PATTERN

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        uri: str = "memory://untitled",
        language_id: str = "plaintext",
        word_pattern: str = DEFAULT_WORD_PATTERN,
    ) -> MemoryDocument:
        return cls(
            uri=uri,
            language_id=language_id,
            lines=text.replace("\r\n", "\n").split("\n"),
            word_pattern=word_pattern,
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def _clamp(self, position: Position) -> Position:
        line = min(max(position.line, 0), len(self.lines) - 1)
        character = min(max(position.character, 0), len(self.lines[line]))
        return Position(line, character)

    def offset_at(self, position: Position) -> int:
        position = self._clamp(position)
        return sum(len(line) + 1 for line in self.lines[: position.line]) + (
            position.character
        )

    def position_at(self, offset: int) -> Position:
        remaining = max(offset, 0)
        for number, line in enumerate(self.lines):
            if remaining <= len(line):
                return Position(number, remaining)
            remaining -= len(line) + 1
        last = len(self.lines) - 1
        return Position(last, len(self.lines[last]))

    def get_text(self, range_: Range | None = None) -> str:
        text = "\n".join(self.lines)
        if range_ is None:
            return text
        return text[self.offset_at(range_.start) : self.offset_at(range_.end)]

    def line_at(self, line: int) -> TextLine:
        return TextLine(line_number=line, text=self.lines[line])

    def get_word_range_at_position(self, position: Position) -> Range | None:
        position = self._clamp(position)
        text = self.lines[position.line]
        for match in re.finditer(self.word_pattern, text):
            if match.start() <= position.character <= match.end():
                return Range.from_coordinates(
                    position.line, match.start(), position.line, match.end()
                )
        return None

    def apply(self, changes: Sequence[ContentChange]) -> None:
        """Apply a batch of changes expressed in pre-batch coordinates."""
        text = "\n".join(self.lines)
        spans = sorted(
            (
                (self.offset_at(c.range.start), self.offset_at(c.range.end), c.text)
                for c in changes
            ),
            key=lambda span: span[0],
            reverse=True,
        )
        for start, end, inserted in spans:
            text = text[:start] + inserted + text[end:]
        self.lines = text.split("\n")


@dataclass(slots=True)
class MemoryEditor:
    """An editor over a MemoryDocument with serial notification dispatch."""

    document: MemoryDocument
    selections: list[Range] = field(default_factory=list)
    refuse_edits: bool = False
    _change_listeners: list[ChangeListener] = field(default_factory=list)
    _selection_listeners: list[SelectionListener] = field(default_factory=list)
    _pending: deque[Callable[[], None]] = field(default_factory=deque)
    _dispatching: bool = False

    def on_did_change_text_document(self, listener: ChangeListener) -> None:
        self._change_listeners.append(listener)

    def on_did_change_selection(self, listener: SelectionListener) -> None:
        self._selection_listeners.append(listener)

    def _dispatch(self, notify: Callable[[], None]) -> None:
        self._pending.append(notify)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                self._pending.popleft()()
        finally:
            self._dispatching = False

    def _notify_change(self, changes: list[ContentChange]) -> None:
        listeners = list(self._change_listeners)

        def notify() -> None:
            for listener in listeners:
                listener(self.document, changes)

        self._dispatch(notify)

    def _apply(self, batch: list[ContentChange]) -> None:
        self.document.apply(batch)
        # Selections follow the text, as in a real editor.
        moved: list[Range] = []
        for selection in self.selections:
            tracked = DynamicRange.from_range(selection)
            tracked.update(ChangeInfo(change, GrowthType.FIX_RIGHT) for change in batch)
            moved.append(tracked.range)
        self.selections = moved

    def edit(self, changes: Sequence[ContentChange]) -> bool:
        if self.refuse_edits:
            return False
        batch = list(changes)
        if not batch:
            return True
        self._apply(batch)
        self._notify_change(batch)
        return True

    def insert_snippet(self, text: str, range_: Range) -> bool:
        """Insert templated text, re-indenting continuation lines like a host."""
        line = self.document.line_at(range_.start.line)
        prefix = line.text[: line.first_non_whitespace_character_index]
        rendered = indent_continuation_lines(strip_tabstops(text), prefix)
        return self.edit([ContentChange(range_, rendered)])

    def replace_text(self, range_: Range, text: str) -> None:
        """Replace ``range_`` with ``text`` as a user would, cursor after it.

        User edits are never refused. The cursor is placed before listeners
        run, so edits they make in response move it like any other selection.
        """
        change = ContentChange(range_, text)
        self._apply([change])
        end = apply_offset(range_.start, text, 0)
        self.selections = [Range(end, end)]
        self._notify_change([change])
        self.select(*self.selections)

    def type_text(self, text: str, position: Position | None = None) -> None:
        """Insert ``text`` at ``position`` (or the cursor) as a user would."""
        if position is None:
            position = self.cursor
        self.replace_text(Range(position, position), text)

    def backspace(self, count: int = 1) -> None:
        """Delete ``count`` characters before the cursor."""
        end = self.cursor
        offset = self.document.offset_at(end)
        start = self.document.position_at(max(offset - count, 0))
        self.replace_text(Range(start, end), "")

    @property
    def cursor(self) -> Position:
        if self.selections:
            return self.selections[0].end
        last = self.document.line_count - 1
        return Position(last, len(self.document.lines[last]))

    def select(self, *selections: Range) -> None:
        self.selections = list(selections)
        listeners = list(self._selection_listeners)
        current = list(selections)

        def notify() -> None:
            for listener in listeners:
                listener(self, current)

        self._dispatch(notify)

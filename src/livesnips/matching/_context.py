"""Cursor context derived once per match call."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from livesnips.expressions import ScopeContext
from livesnips.text import Position, Range

if TYPE_CHECKING:
    from livesnips.host import ScopeProvider, TextDocument

DEFAULT_LONG_CONTEXT_LINES = 20

_CONTEXT_PATTERN = re.compile(r"\S*$")


@dataclass(slots=True)
class MatchContext:
    """Everything the matcher needs to know about the text before the cursor.

    Attributes:
        document: The document being edited.
        position: The cursor.
        line: Text of the cursor line up to the cursor.
        context: Text from the previous whitespace (or line start) to the cursor.
        context_range: Document range of ``context``.
        word_context: The word under or before the cursor, up to the cursor.
        word_range: Range from the word start to the cursor.
        is_line_start: True if only whitespace precedes ``context`` on the line.
        long_context_lines: How many previous lines the long context covers.
    """

    document: TextDocument
    position: Position
    line: str
    context: str
    context_range: Range
    word_context: str
    word_range: Range
    is_line_start: bool
    long_context_lines: int = DEFAULT_LONG_CONTEXT_LINES
    scope_provider: ScopeProvider | None = None
    _long_context: str | None = field(default=None, repr=False)
    _scope_context: ScopeContext | None = field(default=None, repr=False)

    @classmethod
    def derive(
        cls,
        document: TextDocument,
        position: Position,
        *,
        long_context_lines: int = DEFAULT_LONG_CONTEXT_LINES,
        scope_provider: ScopeProvider | None = None,
    ) -> MatchContext:
        line = document.get_text(Range(Position(position.line, 0), position))
        match = _CONTEXT_PATTERN.search(line)
        context_start = match.start() if match is not None else len(line)
        context_range = Range(Position(position.line, context_start), position)
        context = line[context_start:]

        word_context = context
        word_range = context_range
        found = document.get_word_range_at_position(position)
        if found is not None and found.start <= position:
            word_range = Range(found.start, position)
            word_context = document.get_text(word_range)

        return cls(
            document=document,
            position=position,
            line=line,
            context=context,
            context_range=context_range,
            word_context=word_context,
            word_range=word_range,
            is_line_start=not line[:context_start].strip(),
            long_context_lines=long_context_lines,
            scope_provider=scope_provider,
        )

    @property
    def long_context(self) -> str:
        """Text of the preceding lines up to the cursor, computed on first use."""
        if self._long_context is None:
            first_line = max(self.position.line - self.long_context_lines, 0)
            text = self.document.get_text(Range(Position(first_line, 0), self.position))
            self._long_context = text.replace("\r", "")
        return self._long_context

    @property
    def scope_context(self) -> ScopeContext:
        """Lexical context for context filters, computed on first use."""
        if self._scope_context is None:
            scopes: tuple[str, ...] = ()
            if self.scope_provider is not None:
                scopes = tuple(self.scope_provider.scopes_at(self.document, self.position))
            self._scope_context = ScopeContext(
                language=self.document.language_id,
                scopes=scopes,
                line=self.line,
                word=self.word_context,
                line_number=self.position.line,
                column=self.position.character,
            )
        return self._scope_context

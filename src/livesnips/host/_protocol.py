"""Host editor contracts.

The engine never owns text storage. It reads documents and requests edits
through these runtime-checkable protocols, so any editor integration (or the
in-memory host used by tests and the CLI) can drive it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from livesnips.text import ContentChange, Position, Range


@dataclass(frozen=True, slots=True)
class TextLine:
    """A single document line.

    Attributes:
        line_number: Zero-based line index.
        text: Line text without the line terminator.
    """

    line_number: int
    text: str

    @property
    def first_non_whitespace_character_index(self) -> int:
        return len(self.text) - len(self.text.lstrip())


@runtime_checkable
class TextDocument(Protocol):
    """Read-only view of a document."""

    @property
    def uri(self) -> str:
        """Identity of the document."""
        ...

    @property
    def language_id(self) -> str:
        """Language identifier used to select snippet libraries."""
        ...

    @property
    def line_count(self) -> int: ...

    def get_text(self, range_: Range | None = None) -> str:
        """Return the text inside ``range_``, or the whole document."""
        ...

    def line_at(self, line: int) -> TextLine: ...

    def get_word_range_at_position(self, position: Position) -> Range | None:
        """Return the range of the word at or just before ``position``."""
        ...


@runtime_checkable
class TextEditor(Protocol):
    """An editor showing a document and applying edits to it."""

    @property
    def document(self) -> TextDocument: ...

    @property
    def selections(self) -> Sequence[Range]: ...

    def select(self, *selections: Range) -> None:
        """Replace the selections, notifying selection listeners."""
        ...

    def insert_snippet(self, text: str, range_: Range) -> bool:
        """Replace ``range_`` with templated snippet text.

        Returns:
            True once the host has applied the insert, False if it refused.
        """
        ...

    def edit(self, changes: Sequence[ContentChange]) -> bool:
        """Apply plain replacements as one batch.

        All ranges are expressed in the coordinates of the document before
        the batch.

        Returns:
            True once the host has applied the batch, False if it refused.
        """
        ...


@runtime_checkable
class ScopeProvider(Protocol):
    """Lexical scope lookup used by snippet context filters."""

    def scopes_at(self, document: TextDocument, position: Position) -> Sequence[str]:
        """Return the scope names active at ``position``, outermost first."""
        ...


@runtime_checkable
class WarningSink(Protocol):
    """Receives user-visible, non-fatal warnings."""

    def __call__(self, message: str) -> None: ...

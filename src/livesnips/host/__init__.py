"""Host editor contracts and an in-memory implementation."""

from ._memory import DEFAULT_WORD_PATTERN, MemoryDocument, MemoryEditor
from ._protocol import ScopeProvider, TextDocument, TextEditor, TextLine, WarningSink

__all__ = [
    "DEFAULT_WORD_PATTERN",
    "MemoryDocument",
    "MemoryEditor",
    "ScopeProvider",
    "TextDocument",
    "TextEditor",
    "TextLine",
    "WarningSink",
]

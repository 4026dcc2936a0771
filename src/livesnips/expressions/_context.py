"""Lexical context exposed to snippet context filters."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ScopeContext:
    """Lexical information about the cursor a context filter can inspect.

    Attributes:
        language: Language identifier of the document.
        scopes: Scope names active at the cursor, outermost first. Empty when
            the host provides no scope lookup.
        line: Text of the cursor line up to the cursor.
        word: The word immediately before the cursor.
        line_number: Zero-based cursor line.
        column: Zero-based cursor character.
    """

    language: str = ""
    scopes: tuple[str, ...] = field(default_factory=tuple)
    line: str = ""
    word: str = ""
    line_number: int = 0
    column: int = 0

    def as_dict(self) -> dict[str, object]:
        """Convert to the variable mapping used by rule-engine."""
        return {
            "language": self.language,
            "scopes": list(self.scopes),
            "line": self.line,
            "word": self.word,
            "line_number": self.line_number,
            "column": self.column,
        }

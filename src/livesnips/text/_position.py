"""Document positions and ranges.

Positions are zero-based (line, character) pairs. Both types are immutable;
every operation that "moves" a position returns a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A zero-based line/character location in a document."""

    line: int
    character: int

    def is_before(self, other: Position) -> bool:
        return self < other

    def is_before_or_equal(self, other: Position) -> bool:
        return self <= other

    def is_after(self, other: Position) -> bool:
        return self > other

    def is_after_or_equal(self, other: Position) -> bool:
        return self >= other

    def is_equal(self, other: Position) -> bool:
        return self == other

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> Self:
        """Return a position shifted by the given deltas."""
        return type(self)(self.line + line_delta, self.character + character_delta)

    def with_(self, line: int | None = None, character: int | None = None) -> Self:
        """Return a copy with the line and/or character replaced."""
        return type(self)(
            self.line if line is None else line,
            self.character if character is None else character,
        )


@dataclass(frozen=True, slots=True)
class Range:
    """A span between two positions, with ``start <= end``.

    Construction swaps the endpoints when they are given in reverse order.
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def from_coordinates(
        cls, start_line: int, start_character: int, end_line: int, end_character: int
    ) -> Self:
        return cls(
            Position(start_line, start_character), Position(end_line, end_character)
        )

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def contains(self, other: Position | Range) -> bool:
        """Check whether a position or range lies within this range.

        Both boundaries are inclusive, so an empty range at either end of
        this range is contained.
        """
        if isinstance(other, Range):
            return self.contains(other.start) and self.contains(other.end)
        return self.start <= other <= self.end

    def with_(self, start: Position | None = None, end: Position | None = None) -> Self:
        """Return a copy with the start and/or end replaced."""
        return type(self)(
            self.start if start is None else start,
            self.end if end is None else end,
        )

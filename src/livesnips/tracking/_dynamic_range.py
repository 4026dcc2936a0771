"""Ranges that stay attached to the same text while a document is edited.

A DynamicRange is updated with whole change batches. Every change in a batch
is expressed in the coordinates of the document before the batch, so the
deltas contributed by each change are accumulated separately for the start
and end boundaries and applied once at the end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from livesnips.enums import GrowthType
from livesnips.text import Position, Range

if TYPE_CHECKING:
    from collections.abc import Iterable

    from livesnips.text import ContentChange


@dataclass(frozen=True, slots=True)
class ChangeInfo:
    """A content change paired with the growth policy to apply for it."""

    change: ContentChange
    growth: GrowthType


@dataclass(slots=True)
class PositionDelta:
    """Accumulated line and character shift for one boundary."""

    line_delta: int = 0
    character_delta: int = 0

    def add(self, other: PositionDelta) -> None:
        self.line_delta += other.line_delta
        self.character_delta += other.character_delta

    def apply(self, position: Position) -> Position:
        return position.translate(self.line_delta, self.character_delta)


def _moves_with_change(
    boundary: Position, change_end: Position, *, follows_at_edge: bool
) -> bool:
    """Decide whether a boundary is pushed by a change ending at ``change_end``.

    Boundaries strictly after the change always move. A boundary sitting
    exactly at the change end follows only when ``follows_at_edge`` is set.
    """
    if boundary > change_end:
        return True
    return follows_at_edge and boundary == change_end


def _boundary_delta(
    boundary: Position, change: ContentChange, *, follows_at_edge: bool
) -> PositionDelta:
    change_start, change_end = change.range.start, change.range.end
    if not _moves_with_change(boundary, change_end, follows_at_edge=follows_at_edge):
        if boundary != change_end or change.range.is_empty:
            return PositionDelta()
        # The replaced text is gone; the boundary lands where it started.
        return PositionDelta(
            line_delta=change_start.line - change_end.line,
            character_delta=change_start.character - change_end.character,
        )

    delta = PositionDelta(line_delta=change.line_delta)
    if boundary.line == change_end.line:
        delta.character_delta = change.character_delta
    return delta


def get_range_delta(
    range_: Range, change: ContentChange, growth: GrowthType
) -> tuple[PositionDelta, PositionDelta]:
    """Compute the start and end shifts one change implies for a range.

    Args:
        range_: The range being tracked.
        change: The change, in pre-batch coordinates.
        growth: Policy for boundaries that touch the change end.

    Returns:
        Tuple of (start delta, end delta).
    """
    start_delta = _boundary_delta(
        range_.start, change, follows_at_edge=growth is GrowthType.FIX_RIGHT
    )
    end_delta = _boundary_delta(
        range_.end, change, follows_at_edge=growth is GrowthType.GROW
    )
    return start_delta, end_delta


class DynamicRange:
    """A document span that follows edits according to a growth policy."""

    __slots__ = ("range",)

    def __init__(self, start: Position, end: Position) -> None:
        self.range: Range = Range(start, end)

    @classmethod
    def from_range(cls, range_: Range) -> DynamicRange:
        return cls(range_.start, range_.end)

    @property
    def start(self) -> Position:
        return self.range.start

    @property
    def end(self) -> Position:
        return self.range.end

    def update(self, changes: Iterable[ChangeInfo]) -> None:
        """Shift the range for a batch of changes.

        An empty batch leaves the range untouched. When the shifted end would
        precede the shifted start (an empty range pushed by an insertion at its
        position), the range collapses onto the new start.
        """
        start_delta = PositionDelta()
        end_delta = PositionDelta()

        for info in changes:
            change_start, change_end = get_range_delta(
                self.range, info.change, info.growth
            )
            start_delta.add(change_start)
            end_delta.add(change_end)

        new_start = start_delta.apply(self.range.start)
        new_end = end_delta.apply(self.range.end)
        new_end = max(new_end, new_start)
        self.range = Range(new_start, new_end)

    def contains(self, other: Range | Position) -> bool:
        return self.range.contains(other)

    def __repr__(self) -> str:
        start, end = self.range.start, self.range.end
        return (
            f"DynamicRange(({start.line}, {start.character})"
            f"..({end.line}, {end.character}))"
        )

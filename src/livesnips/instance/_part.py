"""Parts of a live snippet expansion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from livesnips.enums import PartType

if TYPE_CHECKING:
    from livesnips.tracking import ChangeInfo, DynamicRange


@dataclass(slots=True)
class SnippetPart:
    """A placeholder or computed block with its tracked range.

    Updates are queued while a change batch is swept and applied together by
    ``update_range`` so every part sees the batch in pre-edit coordinates.
    """

    type: PartType
    range: DynamicRange
    content: str
    id: int | None = None
    updates: list[ChangeInfo] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return self.type is PartType.PLACEHOLDER

    def update_range(self) -> None:
        if not self.updates:
            return
        self.range.update(self.updates)
        self.updates = []

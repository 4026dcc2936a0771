"""Memory of the most recent text selection for ``${VISUAL}``."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class SelectionMemory:
    """Remembers the last non-empty selection and when it was made.

    Attributes:
        window_seconds: How long a selection stays eligible.
        clock: Monotonic time source.
    """

    window_seconds: float = 5.0
    clock: Callable[[], float] = time.monotonic
    _text: str = ""
    _selected_at: float | None = field(default=None)

    def record(self, text: str) -> None:
        """Remember ``text``; empty selections are ignored."""
        if not text:
            return
        self._text = text
        self._selected_at = self.clock()

    def recent_text(self) -> str:
        """Return the remembered text if it is still within the window."""
        if self._selected_at is None:
            return ""
        if self.clock() - self._selected_at < self.window_seconds:
            return self._text
        return ""

    def clear(self) -> None:
        self._text = ""
        self._selected_at = None

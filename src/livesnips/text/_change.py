"""Document content changes."""

from dataclasses import dataclass

from ._position import Range


@dataclass(frozen=True, slots=True)
class ContentChange:
    """One replacement inside a document change batch.

    Attributes:
        range: The replaced range, in the coordinates of the document
            before the batch was applied.
        text: The text inserted in place of ``range``.
    """

    range: Range
    text: str

    @property
    def line_delta(self) -> int:
        """Number of lines added (negative when removed) by this change."""
        replaced_lines = self.range.end.line - self.range.start.line + 1
        return len(self.text.split("\n")) - replaced_lines

    @property
    def character_delta(self) -> int:
        """Shift applied to a position on the replaced range's end line.

        A position at character ``c`` on the last replaced line ends up at
        ``c + character_delta`` on the last inserted line.
        """
        last_line = self.text.rsplit("\n", 1)[-1]
        delta = len(last_line) - self.range.end.character
        if "\n" not in self.text:
            delta += self.range.start.character
        return delta

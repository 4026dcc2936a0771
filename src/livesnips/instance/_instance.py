"""Live snippet instances.

A SnippetInstance is one expansion in a document. It splits the generator
output into placeholder and block parts, tracks their ranges through every
edit, and when the user changes the selected placeholder it runs the
generator again and patches any block whose text changed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import structlog

from livesnips.compiler import BlockRef, SnippetUtils, stringify_block
from livesnips.enums import GrowthType, InstanceState, PartType
from livesnips.text import (
    TABSTOP_PATTERN,
    ContentChange,
    apply_offset,
    indent_continuation_lines,
    strip_tabstops,
    unescape_snippet_text,
)
from livesnips.tracking import ChangeInfo, DynamicRange

from ._part import SnippetPart

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from structlog.typing import FilteringBoundLogger

    from livesnips.compiler import Section, Template
    from livesnips.host import TextEditor
    from livesnips.text import Position, Range

VISUAL_MARKER = "${VISUAL}"


def _block_index(section: object) -> int | None:
    if isinstance(section, BlockRef):
        return section.block
    if isinstance(section, Mapping) and "block" in section:
        return int(section["block"])  # pyright: ignore[reportUnknownArgumentType]
    return None


def _ignore_warning(message: str) -> None:  # noqa: ARG001
    return


class SnippetInstance:
    """One active expansion of a template.

    Attributes:
        template: The expanded template.
        editor: Editor owning the document.
        match_groups: Groups of the trigger match, group 0 first.
        parts: Placeholder and block parts in document order.
        block_parts: Block parts, aligned with the generator's block values.
        placeholder_ids: Navigation order of placeholder ids, 0 last.
        selected_placeholder: Id of the selected placeholder, or None once
            navigation ran off either end.
        range: Span of the whole expansion.
        snippet_string: Templated text the host inserts.
        block_changed: True while a block patch issued by this instance has
            not yet come back as a change notification.
        state: Lifecycle state.
    """

    def __init__(
        self,
        template: Template,
        editor: TextEditor,
        position: Position,
        match_groups: Sequence[str] = (),
        *,
        workspace_uri: str = "",
        visual_text: str = "",
        warn: Callable[[str], None] | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.template: Template = template
        self.editor: TextEditor = editor
        self.match_groups: list[str] = list(match_groups)
        self.workspace_uri: str = workspace_uri
        self.state: InstanceState = InstanceState.INSTANTIATING
        self.parts: list[SnippetPart] = []
        self.block_parts: list[SnippetPart] = []
        self.placeholder_ids: list[int] = []
        self.selected_placeholder: int | None = 0
        self.block_changed: bool = False
        self._warn: Callable[[str], None] = warn or _ignore_warning
        self._logger: FilteringBoundLogger = logger or structlog.get_logger(
            "livesnips.instance"
        )

        start_line = editor.document.line_at(position.line)
        self._indent: int = start_line.first_non_whitespace_character_index
        self._indent_prefix: str = start_line.text[: self._indent]

        self.snippet_string: str
        empty = [""] * template.placeholders
        sections, blocks = self._first_expansion(empty) or ([], [])
        end = self._build_parts(sections, blocks, position, visual_text)

        # Blocks see the ``${n:default}`` values rather than empty placeholders.
        defaults = [part.content for part in self.parts if part.is_placeholder]
        if any(defaults) and self.block_parts:
            expansion = self._first_expansion(defaults)
            if expansion is not None:
                self.parts, self.block_parts, self.placeholder_ids = [], [], []
                end = self._build_parts(*expansion, position, visual_text)
        self.range: DynamicRange = DynamicRange(position, end)
        self._order_placeholders()

    # =========================================================================
    # Instantiation
    # =========================================================================

    def _invoke(self, contents: Sequence[str]) -> tuple[Sequence[Section], list[str]]:
        sections, blocks = self.template.generator(
            list(contents),
            self.match_groups,
            self.workspace_uri,
            self.editor.document.uri,
            SnippetUtils(),
        )
        return sections, [stringify_block(block) for block in blocks]

    def _first_expansion(
        self, contents: Sequence[str]
    ) -> tuple[Sequence[Section], list[str]] | None:
        try:
            return self._invoke(contents)
        except Exception as e:  # noqa: BLE001 - a broken snippet must not break the editor
            self._report_failure("expand", e)
            return None

    def _report_failure(self, operation: str, error: Exception) -> None:
        description = self.template.description or self.template.display_trigger
        verb = "failed to expand" if operation == "expand" else "failed to update"
        self._warn(f"Snippet {description} {verb} with error: {error}")
        self._logger.warning(
            "snippet_generator_failed",
            operation=operation,
            description=description,
            error=str(error),
        )

    def _build_parts(
        self,
        sections: Sequence[Section],
        blocks: Sequence[str],
        position: Position,
        visual_text: str,
    ) -> Position:
        pieces: list[str] = []

        for section in sections:
            index = _block_index(section)
            if index is not None:
                value = blocks[index] if 0 <= index < len(blocks) else ""
                rendered = strip_tabstops(value)
                end = apply_offset(position, rendered, self._indent)
                part = SnippetPart(
                    type=PartType.BLOCK,
                    range=DynamicRange(position, end),
                    content=indent_continuation_lines(rendered, self._indent_prefix),
                )
                self.parts.append(part)
                self.block_parts.append(part)
                pieces.append(value)
                position = end
                continue

            text = str(section).replace(VISUAL_MARKER, visual_text)
            pieces.append(text)
            position = self._add_placeholders(text, position)

        self.snippet_string = "".join(pieces)
        return position

    def _add_placeholders(self, text: str, position: Position) -> Position:
        last = 0
        for match in TABSTOP_PATTERN.finditer(text):
            literal = unescape_snippet_text(text[last : match.start()])
            position = apply_offset(position, literal, self._indent)

            default = match.group(3) or ""
            end = apply_offset(position, default, self._indent)
            placeholder_id = int(match.group(1) or match.group(2))
            if placeholder_id not in self.placeholder_ids:
                self.placeholder_ids.append(placeholder_id)
            self.parts.append(
                SnippetPart(
                    type=PartType.PLACEHOLDER,
                    range=DynamicRange(position, end),
                    content=default,
                    id=placeholder_id,
                )
            )
            position = end
            last = match.end()

        return apply_offset(position, unescape_snippet_text(text[last:]), self._indent)

    def _order_placeholders(self) -> None:
        ids = sorted(self.placeholder_ids)
        if ids and ids[0] == 0:
            ids.pop(0)
        ids.append(0)
        self.placeholder_ids = ids
        self.selected_placeholder = ids[0]

    def activate(self) -> None:
        self.state = InstanceState.ACTIVE

    def abandon(self) -> None:
        self.state = InstanceState.ABANDONED

    # =========================================================================
    # Navigation
    # =========================================================================

    def advance(self, forward: bool = True) -> bool:  # noqa: FBT001, FBT002
        """Move the selection to the next or previous placeholder.

        Returns:
            True if the new selection is a real tab-stop. False means the
            instance is exhausted (the final stop ``0`` or past either end)
            and navigation belongs to the host again.
        """
        if self.selected_placeholder not in self.placeholder_ids:
            self.selected_placeholder = None
            return False

        index = self.placeholder_ids.index(self.selected_placeholder)
        index += 1 if forward else -1
        if 0 <= index < len(self.placeholder_ids):
            self.selected_placeholder = self.placeholder_ids[index]
        else:
            self.selected_placeholder = None
        return self.selected_placeholder not in (None, 0)

    def next_placeholder(self) -> bool:
        return self.advance(forward=True)

    def prev_placeholder(self) -> bool:
        return self.advance(forward=False)

    def selected_range(self) -> Range | None:
        """Range of the first part belonging to the selected placeholder."""
        for part in self.parts:
            if part.is_placeholder and part.id == self.selected_placeholder:
                return part.range.range
        return None

    # =========================================================================
    # Edit reconciliation
    # =========================================================================

    def _is_growth_target(self, part: SnippetPart, change: ContentChange) -> bool:
        if part.is_placeholder:
            return part.id == self.selected_placeholder and not self.block_changed
        return self.block_changed and part.content == change.text

    def update(self, changes: Sequence[ContentChange]) -> None:
        """Reconcile the instance with one change batch.

        Changes are swept left to right against the parts. The selected
        placeholder (or a block receiving this instance's own patch) grows to
        absorb a change inside it; parts enclosing the change keep their start,
        and every later part is shifted without being stretched. If the
        selected placeholder changed, the generator runs again and blocks
        with new text are patched.
        """
        ordered = sorted(changes, key=lambda change: change.range.end)
        changed_placeholders: list[SnippetPart] = []
        parts = self.parts
        current = 0

        for change in ordered:
            while current < len(parts) and parts[current].range.end < change.range.end:
                current += 1
            if current >= len(parts):
                break

            enclosing: list[SnippetPart] = []
            target: SnippetPart | None = None
            while current < len(parts) and parts[current].range.contains(change.range):
                part = parts[current]
                current += 1
                if self._is_growth_target(part, change):
                    target = part
                    break
                enclosing.append(part)

            for part in enclosing:
                part.updates.append(ChangeInfo(change, GrowthType.FIX_LEFT))
            if target is not None:
                target.updates.append(ChangeInfo(change, GrowthType.GROW))
                if target.is_placeholder:
                    changed_placeholders.append(target)
            for part in parts[current:]:
                part.updates.append(ChangeInfo(change, GrowthType.FIX_RIGHT))

        self.range.update(ChangeInfo(change, GrowthType.GROW) for change in ordered)
        for part in parts:
            part.update_range()

        self.block_changed = False
        if changed_placeholders:
            self._refresh()

    def _refresh(self) -> None:
        document = self.editor.document
        placeholders = [part for part in self.parts if part.is_placeholder]
        for part in placeholders:
            part.content = document.get_text(part.range.range)

        try:
            _, blocks = self._invoke([part.content for part in placeholders])
        except Exception as e:  # noqa: BLE001 - leave the document untouched
            self._report_failure("update", e)
            return

        new_contents = [
            indent_continuation_lines(strip_tabstops(block), self._indent_prefix)
            for block in blocks
        ]
        previous = [part.content for part in self.block_parts]
        edits = [
            ContentChange(part.range.range, content)
            for part, content in zip(self.block_parts, new_contents, strict=False)
            if content != part.content
        ]

        for part, content in zip(self.block_parts, new_contents, strict=False):
            part.content = content
        if not edits:
            return

        # Set before editing: a host may deliver the echo synchronously.
        self.block_changed = True
        if not self.editor.edit(edits):
            self.block_changed = False
            for part, content in zip(self.block_parts, previous, strict=True):
                part.content = content
            self._logger.warning(
                "block_patch_rejected",
                description=self.template.description,
                blocks=len(edits),
            )
            return

        self._logger.debug(
            "blocks_refreshed",
            description=self.template.description,
            patched=len(edits),
        )

    # =========================================================================
    # Debugging
    # =========================================================================

    def describe(self) -> list[dict[str, object]]:
        """Return one row per part with its kind, id, content and range."""
        rows: list[dict[str, object]] = []
        for index, part in enumerate(self.parts):
            start, end = part.range.start, part.range.end
            rows.append({
                "index": index,
                "type": part.type.value,
                "id": part.id,
                "content": part.content,
                "start": (start.line, start.character),
                "end": (end.line, end.character),
            })
        self._logger.debug("snippet_parts", parts=rows)
        return rows

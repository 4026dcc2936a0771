"""Snippet session: the state an editor integration drives.

A session owns the template registry, one instance stack per document and
the last-selection memory. Editor integrations forward completion requests,
navigation commands and change notifications to it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from livesnips.config import Config
from livesnips.instance import InstanceStack, SnippetInstance
from livesnips.matching import match_templates
from livesnips.text import Range

from ._registry import SnippetRegistry
from ._selection import SelectionMemory

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from livesnips.compiler import LibraryLoadResult
    from livesnips.host import MemoryEditor, ScopeProvider, TextDocument, TextEditor
    from livesnips.matching import CompletionItem, MatchResult, SnippetMatch
    from livesnips.text import ContentChange, Position


MAX_WARNINGS = 100


class SnippetSession:
    """Live snippet state for a set of editors.

    Attributes:
        config: Engine settings.
        registry: Loaded templates.
        selection: Last-selection memory for ``${VISUAL}``.
        workspace_uri: Identifier passed to generators as the workspace.
        warnings: The most recent user-visible warnings, oldest first, at most
            MAX_WARNINGS of them. Cleared by reload and teardown.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        workspace_uri: str = "",
        scope_provider: ScopeProvider | None = None,
        warn: Callable[[str], None] | None = None,
        clock: Callable[[], float] | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.config: Config = config if config is not None else Config.from_dict({})
        self.registry: SnippetRegistry = SnippetRegistry()
        self.selection: SelectionMemory = SelectionMemory(
            window_seconds=self.config.visual_window_seconds
        )
        if clock is not None:
            self.selection.clock = clock
        self.workspace_uri: str = workspace_uri
        self.warnings: list[str] = []
        self._scope_provider: ScopeProvider | None = scope_provider
        self._warn_sink: Callable[[str], None] | None = warn
        self._stacks: dict[str, InstanceStack] = {}
        self._directory: Path | None = None
        self._logger: FilteringBoundLogger = logger or structlog.get_logger(
            "livesnips.session"
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self, directory: Path | None = None) -> LibraryLoadResult:
        """Compile the libraries of ``directory`` (default: the configured one).

        The directory is created when missing.
        """
        directory = directory if directory is not None else self.config.snippet_path
        directory.mkdir(parents=True, exist_ok=True)
        self._directory = directory

        result = self.registry.load(directory, logger=self._logger)
        for error in result.errors:
            self._warn(f"Failed to load snippets: {error}")
        self._logger.info(
            "snippets_loaded",
            directory=str(directory),
            languages=self.registry.languages,
            templates=len(self.registry),
            errors=len(result.errors),
        )
        return result

    def reload(self) -> LibraryLoadResult:
        """Drop every template and active instance, then load again."""
        self.registry.clear()
        self.warnings.clear()
        self._clear_stacks()
        return self.load(self._directory)

    def teardown(self) -> None:
        self._clear_stacks()
        self.warnings.clear()
        self.registry.clear()
        self.selection.clear()
        self._logger.debug("session_teardown")

    def _clear_stacks(self) -> None:
        for stack in self._stacks.values():
            stack.clear()
        self._stacks.clear()

    def attach(self, editor: MemoryEditor) -> None:
        """Subscribe to an editor's change and selection notifications."""
        editor.on_did_change_text_document(self.on_did_change_text_document)
        editor.on_did_change_selection(self.on_did_change_selection)

    # =========================================================================
    # Instances
    # =========================================================================

    def stack_for(self, document: TextDocument) -> InstanceStack:
        return self._stacks.setdefault(document.uri, InstanceStack())

    def active_instance(self, document: TextDocument) -> SnippetInstance | None:
        stack = self._stacks.get(document.uri)
        return stack.top if stack is not None else None

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        del self.warnings[:-MAX_WARNINGS]
        if self._warn_sink is not None:
            self._warn_sink(message)

    # =========================================================================
    # Matching and expansion
    # =========================================================================

    def match(self, editor: TextEditor, position: Position | None = None) -> MatchResult:
        """Match the templates of the editor's language at ``position``."""
        document = editor.document
        if position is None:
            if not editor.selections:
                msg = "A position is required when the editor has no selection"
                raise ValueError(msg)
            position = editor.selections[0].end
        return match_templates(
            document,
            position,
            self.registry.templates_for(document.language_id),
            scope_provider=self._scope_provider,
            long_context_lines=self.config.long_context_lines,
            logger=self._logger,
        )

    def provide_completions(
        self, editor: TextEditor, position: Position | None = None
    ) -> list[CompletionItem]:
        """Return completion items, or expand an automatic match directly.

        Returns:
            An empty list when an automatic template was expanded, otherwise
            one item per candidate.
        """
        result = self.match(editor, position)
        if result.expansion is not None:
            self.expand(editor, result.expansion)
            return []
        return result.completion_items()

    def expand(self, editor: TextEditor, match: SnippetMatch) -> SnippetInstance | None:
        """Expand ``match`` in ``editor``.

        The instance is pushed onto the document's stack only once the host
        has applied the insert; a refused insert leaves the stack unchanged.

        Returns:
            The new instance, or None if the host refused the insert.
        """
        instance = SnippetInstance(
            match.template,
            editor,
            match.range.start,
            match.groups,
            workspace_uri=self.workspace_uri,
            visual_text=self.selection.recent_text(),
            warn=self._warn,
            logger=self._logger,
        )

        if not editor.insert_snippet(instance.snippet_string, match.range):
            self._logger.warning(
                "snippet_insert_rejected",
                trigger=match.label,
                description=match.template.description,
            )
            return None

        instance.activate()
        self.stack_for(editor.document).push(instance)
        self._logger.info(
            "snippet_expanded",
            trigger=match.label,
            description=match.template.description,
            parts=len(instance.parts),
        )

        selected = instance.selected_range()
        if selected is None:
            selected = Range(instance.range.end, instance.range.end)
        editor.select(selected)
        return instance

    # =========================================================================
    # Navigation
    # =========================================================================

    def next_placeholder(self, editor: TextEditor) -> bool:
        return self._advance(editor, forward=True)

    def prev_placeholder(self, editor: TextEditor) -> bool:
        return self._advance(editor, forward=False)

    def _advance(self, editor: TextEditor, *, forward: bool) -> bool:
        """Move the top instance's selection, popping it when exhausted.

        Returns:
            False when there is no instance or it was exhausted; the host's
            own tab-stop navigation applies then.
        """
        stack = self._stacks.get(editor.document.uri)
        instance = stack.top if stack is not None else None
        if stack is None or instance is None:
            return False

        moved = instance.advance(forward)
        selected = instance.selected_range()
        if not moved:
            stack.pop()
            self._logger.debug("snippet_exhausted", description=instance.template.description)
        if selected is not None:
            editor.select(selected)
        return moved

    # =========================================================================
    # Host notifications
    # =========================================================================

    def on_did_change_text_document(
        self, document: TextDocument, changes: Sequence[ContentChange]
    ) -> None:
        """Forward a change batch to the document's innermost instance."""
        instance = self.active_instance(document)
        if instance is not None:
            instance.update(changes)

    def on_did_change_selection(
        self, editor: TextEditor, selections: Sequence[Range]
    ) -> None:
        """Remember the selected text and drop instances the cursor left."""
        if selections:
            self.selection.record(editor.document.get_text(selections[0]))

        stack = self._stacks.get(editor.document.uri)
        if stack is None:
            return

        dropped = stack.retain(
            lambda instance: any(instance.range.contains(sel) for sel in selections)
        )
        if dropped:
            self._logger.debug("snippets_abandoned", count=len(dropped))

    def on_did_change_visible_editors(self, editors: Iterable[TextEditor]) -> None:
        """Discard the stacks of documents that are no longer visible."""
        visible = {editor.document.uri for editor in editors}
        for uri in [uri for uri in self._stacks if uri not in visible]:
            self._stacks.pop(uri).clear()

"""Compiled templates indexed by language."""

from __future__ import annotations

from typing import TYPE_CHECKING

from livesnips.compiler import GLOBAL_LANGUAGE, LibraryLoadResult, load_directory

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from livesnips.compiler import Template


class SnippetRegistry:
    """Templates per language identifier.

    Templates registered under ``all`` apply to every language, after the
    language's own templates.
    """

    __slots__ = ("_by_language",)

    def __init__(self) -> None:
        self._by_language: dict[str, list[Template]] = {}

    def add(self, language: str, templates: Sequence[Template]) -> None:
        self._by_language.setdefault(language, []).extend(templates)

    def load(
        self, directory: Path, *, logger: FilteringBoundLogger | None = None
    ) -> LibraryLoadResult:
        """Compile every library in ``directory`` into the registry."""
        result = load_directory(directory, logger=logger)
        for language, templates in result.templates.items():
            self.add(language, templates)
        return result

    def clear(self) -> None:
        self._by_language.clear()

    def templates_for(self, language: str) -> list[Template]:
        """Return the templates that apply to ``language``."""
        shared = self._by_language.get(GLOBAL_LANGUAGE, [])
        if language == GLOBAL_LANGUAGE:
            return list(shared)
        return [*self._by_language.get(language, []), *shared]

    @property
    def languages(self) -> list[str]:
        return sorted(self._by_language)

    def __iter__(self) -> Iterator[tuple[str, list[Template]]]:
        for language in self.languages:
            yield language, list(self._by_language[language])

    def __len__(self) -> int:
        return sum(len(templates) for templates in self._by_language.values())

"""Shared test fixtures for livesnips tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from livesnips.compiler import Template, parse_library
from livesnips.host import MemoryDocument, MemoryEditor
from livesnips.session import SnippetSession
from livesnips.text import Position, Range

type EditorFactory = Callable[..., MemoryEditor]
type LibraryWriter = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config files and LIVESNIPS_* variables out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("LIVESNIPS_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "livesnips.config._models.get_user_config_path",
        lambda: tmp_path / "user-config" / "config.toml",
    )


@pytest.fixture
def console() -> Console:
    return Console(
        width=100,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def make_editor() -> EditorFactory:
    """Return a factory for editors over in-memory documents.

    The cursor starts at the end of the text unless ``cursor`` is given.
    """

    def _make(
        text: str = "",
        *,
        language_id: str = "plaintext",
        uri: str = "memory://test",
        cursor: Position | None = None,
    ) -> MemoryEditor:
        document = MemoryDocument.from_text(text, uri=uri, language_id=language_id)
        editor = MemoryEditor(document)
        if cursor is None:
            cursor = editor.cursor
        editor.selections = [Range(cursor, cursor)]
        return editor

    return _make


@pytest.fixture
def compile_one() -> Callable[[str], Template]:
    """Compile a library holding exactly one snippet."""

    def _compile(text: str) -> Template:
        [template] = parse_library(text)
        return template

    return _compile


@pytest.fixture
def snippet_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "hsnips"
    directory.mkdir()
    return directory


@pytest.fixture
def write_library(snippet_dir: Path) -> LibraryWriter:
    """Write ``<language>.hsnips`` into the snippet directory."""

    def _write(language: str, text: str) -> Path:
        path = snippet_dir / f"{language}.hsnips"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def session() -> SnippetSession:
    return SnippetSession()

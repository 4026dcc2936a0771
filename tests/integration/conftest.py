from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from livesnips.cli import create_app


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def livesnips_cli(console: Console) -> Callable[..., int]:
    """Run the CLI with its global options and return the exit code.

    Output printed by commands is left for ``capsys``.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def configured_snippet_dir(
    snippet_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point the configuration at the test snippet directory."""
    monkeypatch.setenv("LIVESNIPS_SNIPPET_DIR", str(snippet_dir))
    return snippet_dir

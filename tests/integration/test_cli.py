import json
from collections.abc import Callable
from pathlib import Path

import pytest

type Cli = Callable[..., int]
type LibraryWriter = Callable[[str, str], Path]

LATEX = """\
snippet mk "Inline math" A
$$1$
endsnippet

snippet `(\\d+)/` "Fraction" A
\\frac{``m[1]``}{$1}$0
endsnippet

snippet sec "Section" b
\\section{$1}
``t[0].lower().replace(' ', '-')``
endsnippet

snippet hid "Hidden helper" H
x
endsnippet
"""

SHARED = """\
snippet date "Today"
2026-10-18
endsnippet
"""


@pytest.fixture
def libraries(
    configured_snippet_dir: Path, write_library: LibraryWriter
) -> Path:
    write_library("latex", LATEX)
    write_library("all", SHARED)
    return configured_snippet_dir


class TestDirCommand:
    def test_prints_configured_directory(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("dir") == 0

        assert capsys.readouterr().out.strip() == str(configured_snippet_dir)

    def test_create_makes_missing_directory(
        self,
        livesnips_cli: Cli,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        target = tmp_path / "fresh" / "hsnips"
        monkeypatch.setenv("LIVESNIPS_SNIPPET_DIR", str(target))

        assert livesnips_cli("dir", "--create") == 0

        assert target.is_dir()


class TestListCommand:
    def test_json_lists_language_and_shared_templates(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("list", "latex", "--format", "json") == 0

        rows = json.loads(capsys.readouterr().out)["templates"]
        assert [row["trigger"] for row in rows] == ["mk", "`(\\d+)/$`", "sec", "date"]
        assert rows[0]["flags"] == "A"
        assert rows[0]["description"] == "Inline math"
        assert rows[3]["language"] == "latex"

    def test_all_includes_hidden_templates(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("list", "--all", "--format", "json") == 0

        rows = json.loads(capsys.readouterr().out)["templates"]
        assert "hid" in [row["trigger"] for row in rows]
        assert {row["language"] for row in rows} == {"all", "latex"}

    def test_table_output(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("list", "latex") == 0

        out = capsys.readouterr().out
        assert "Inline math" in out
        assert "hid" not in out

    def test_empty_directory(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("list") == 0

        assert "No snippet templates found." in capsys.readouterr().out

    def test_broken_library_warns(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        write_library: LibraryWriter,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_library("broken", "snippet a\nno end\n")

        assert livesnips_cli("list") == 0

        assert "endsnippet" in capsys.readouterr().err

    def test_broken_library_fails_in_strict_mode(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        write_library: LibraryWriter,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        write_library("broken", "snippet a\nno end\n")
        monkeypatch.setenv("LIVESNIPS_STRICT", "true")

        assert livesnips_cli("list") == 1


class TestCheckCommand:
    def test_reports_each_library(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("check") == 0

        out = capsys.readouterr().out
        assert "(4 templates)" in out
        assert "(1 templates)" in out

    def test_compile_errors_fail(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        write_library: LibraryWriter,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = write_library("python", "snippet d\n``1 +``\nendsnippet\n")

        assert livesnips_cli("check", str(path)) == 2

        assert f"error {path}:2" in capsys.readouterr().out

    def test_missing_file(self, livesnips_cli: Cli, tmp_path: Path) -> None:
        assert livesnips_cli("check", str(tmp_path / "nope.hsnips")) == 3

    def test_nothing_to_check(
        self,
        livesnips_cli: Cli,
        configured_snippet_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("check") == 0

        assert "No .hsnips files found." in capsys.readouterr().out


class TestExpandCommand:
    def test_automatic_pattern_expansion(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("expand", "latex", "x = 12/", "-p", "5") == 0

        assert capsys.readouterr().out == "x = \\frac{12}{5}\n"

    def test_placeholders_drive_blocks(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = livesnips_cli(
            "expand", "latex", "sec", "--placeholder", "Getting Started"
        )

        assert code == 0
        assert capsys.readouterr().out == (
            "\\section{Getting Started}\ngetting-started\n"
        )

    def test_partial_trigger_expands_first_candidate(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("expand", "markdown", "da") == 0

        assert capsys.readouterr().out == "2026-10-18\n"

    def test_no_match(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("expand", "latex", "zzz") == 3

        assert "No snippet matches" in capsys.readouterr().err

    def test_verbose_prints_parts(
        self,
        livesnips_cli: Cli,
        libraries: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert livesnips_cli("--verbose", "expand", "latex", "mk") == 0

        captured = capsys.readouterr()
        assert captured.out == "$$\n"
        assert "placeholder" in captured.err


class TestGlobalOptions:
    def test_explicit_config_file(
        self,
        livesnips_cli: Cli,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        config = tmp_path / "config.toml"
        config.write_text(f'snippet_dir = "{tmp_path.as_posix()}/custom"\n', encoding="utf-8")

        assert livesnips_cli("--config", str(config), "dir") == 0

        assert capsys.readouterr().out.strip() == str(tmp_path / "custom")

    def test_missing_config_file_exits(self, livesnips_cli: Cli, tmp_path: Path) -> None:
        assert livesnips_cli("--config", str(tmp_path / "none.toml"), "dir") == 1

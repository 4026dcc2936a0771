from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from livesnips.compiler import discover_libraries, load_directory, load_library
from livesnips.exceptions import CompileError


class TestDiscoverLibraries:
    def test_finds_hsnips_files_sorted(self, tmp_path: Path) -> None:
        for name in ("tex.hsnips", "all.hsnips", "notes.txt", "py.HSNIPS"):
            (tmp_path / name).write_text("", encoding="utf-8")

        found = discover_libraries(tmp_path)

        assert [p.name for p in found] == ["all.hsnips", "py.HSNIPS", "tex.hsnips"]

    def test_missing_directory_yields_nothing(self, tmp_path: Path) -> None:
        assert discover_libraries(tmp_path / "missing") == []


class TestLoadLibrary:
    def test_missing_file_raises_compile_error(self, tmp_path: Path) -> None:
        path = tmp_path / "gone.hsnips"

        with pytest.raises(CompileError, match="Failed to read") as exc_info:
            load_library(path)

        assert exc_info.value.path == path


class TestLoadDirectory:
    def test_keys_templates_by_file_stem(self, tmp_path: Path) -> None:
        (tmp_path / "tex.hsnips").write_text("snippet a\nA\nendsnippet", encoding="utf-8")
        (tmp_path / "all.hsnips").write_text("snippet b\nB\nendsnippet", encoding="utf-8")

        result = load_directory(tmp_path)

        assert sorted(result.templates) == ["all", "tex"]
        assert [t.trigger for t in result.templates["tex"]] == ["a"]
        assert result.errors == []

    def test_broken_file_is_reported_and_others_load(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        (tmp_path / "good.hsnips").write_text("snippet a\nA\nendsnippet", encoding="utf-8")
        (tmp_path / "bad.hsnips").write_text("snippet b\nB\n", encoding="utf-8")
        logger = mocker.MagicMock()

        result = load_directory(tmp_path, logger=logger)

        assert list(result.templates) == ["good"]
        assert len(result.errors) == 1
        assert result.errors[0].path == tmp_path / "bad.hsnips"
        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "library_compile_failed"

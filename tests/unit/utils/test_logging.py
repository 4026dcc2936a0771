import json
from pathlib import Path

import pytest

from livesnips.utils import create_cli_logger, create_logger


class TestCreateLogger:
    def test_text_output_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_logger(level="info")

        logger.info("snippets_loaded", templates=3)

        err = capsys.readouterr().err
        assert "snippets_loaded" in err
        assert "templates=3" in err

    def test_level_filters_messages(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_logger(level="warning")

        logger.info("hidden_event")
        logger.warning("shown_event")

        err = capsys.readouterr().err
        assert "hidden_event" not in err
        assert "shown_event" in err

    def test_debug_environment_overrides_level(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("LIVESNIPS_DEBUG", "1")
        logger = create_logger(level="error")

        logger.debug("debug_event")

        assert "debug_event" in capsys.readouterr().err

    def test_log_level_environment_applies_without_level(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("LIVESNIPS_LOG_LEVEL", "error")
        logger = create_logger()

        logger.warning("warning_event")

        assert "warning_event" not in capsys.readouterr().err

    def test_json_output_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "livesnips.log"
        logger = create_logger(level="debug", log_format="json", log_file=str(log_file))

        logger.debug("blocks_refreshed", patched=2)

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert entry["event"] == "blocks_refreshed"
        assert entry["patched"] == 2
        assert entry["level"] == "debug"
        assert "timestamp" in entry


class TestCreateCliLogger:
    def test_binds_command(self, tmp_path: Path) -> None:
        log_file = tmp_path / "cli.log"
        logger = create_cli_logger(log_file=str(log_file), command="list")

        logger.info("listed")

        entry = json.loads(log_file.read_text(encoding="utf-8"))
        assert entry["command"] == "list"

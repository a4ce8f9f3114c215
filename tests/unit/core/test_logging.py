"""Tests for logging configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from sheetkeeper.core.config import Settings
from sheetkeeper.core.logging import (
    add_app_context,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


class TestAppContext:
    """Tests for the app context processor."""

    def test_adds_app_name(self) -> None:
        """Test every event is tagged with the application."""
        event = add_app_context(None, "info", {"event": "hello"})
        assert event["app"] == "sheetkeeper"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON rendering includes bound context and key/value pairs."""
        configure_logging(level="DEBUG", json_format=True)
        bind_context(character_id="abc123")

        get_logger("tests").info("Level up applied", level=2)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Level up applied"
        assert payload["level"] == 2
        assert payload["character_id"] == "abc123"
        assert payload["app"] == "sheetkeeper"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)

        get_logger("tests").info("Quiet")

        assert "Quiet" not in capsys.readouterr().out

    def test_log_file(self, tmp_path: Path) -> None:
        """Test entries go to the file as JSON lines when one is given."""
        log_path = tmp_path / "logs" / "sheetkeeper.log"
        configure_logging(level="INFO", json_format=True, log_file=log_path)

        get_logger("tests").info("Long rest", character_id="abc123")

        payload = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
        assert payload["event"] == "Long rest"
        assert payload["character_id"] == "abc123"

    def test_unknown_level_falls_back_to_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="chatty", json_format=True)

        get_logger("tests").debug("Hidden")
        get_logger("tests").info("Shown")

        out = capsys.readouterr().out
        assert "Hidden" not in out
        assert "Shown" in out


class TestConfigureFromSettings:
    """Tests for configure_logging_from_settings."""

    def test_uses_settings(self, isolated_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging_from_settings(Settings(log_level="ERROR", log_json=True))

        get_logger("tests").warning("Level cap reached")
        get_logger("tests").error("Store unavailable")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["Store unavailable"]

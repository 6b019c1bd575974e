"""Tests for logging configuration and settings."""

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from record_linkage.logging_config import configure_logging
from record_linkage.settings import Settings, get_settings


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo global logging changes made by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RECORD_LINKAGE_LOG_JSON", raising=False)
        monkeypatch.delenv("RECORD_LINKAGE_LOG_LEVEL", raising=False)
        settings = Settings()
        assert settings.log_json is True
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECORD_LINKAGE_LOG_JSON", "false")
        monkeypatch.setenv("RECORD_LINKAGE_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.log_json is False
        assert settings.log_level == "debug"

    def test_cached(self) -> None:
        assert get_settings() is get_settings()


@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    """Tests for structlog/stdlib wiring."""

    def test_level_from_argument(self) -> None:
        configure_logging(json_output=True, log_level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_level_from_settings(self) -> None:
        configure_logging(settings=Settings(log_json=False, log_level="DEBUG"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, log_level="INFO")
        logging.getLogger("record_linkage.test").info("stdlib message")
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "stdlib message"
        assert record["level"] == "info"

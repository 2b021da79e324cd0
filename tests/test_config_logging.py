"""
Tests for settings and structured logging.
"""
import json
import logging

from shapecast import array, number
from shapecast.config import Settings
from shapecast.logging import (
    LoggerRegistry,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
    validation_logger,
)


class TestSettings:
    """Test SHAPECAST_* configuration."""

    def test_defaults(self, monkeypatch):
        """Test built-in defaults."""
        for name in ("ABORT_EARLY", "RECURSIVE", "LOG_LEVEL", "LOG_JSON"):
            monkeypatch.delenv(f"SHAPECAST_{name}", raising=False)
        settings = Settings(_env_file=None)

        assert settings.ABORT_EARLY is True
        assert settings.RECURSIVE is True
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is False

    def test_environment_overrides(self, monkeypatch, fresh_settings):
        """Test that environment variables are read."""
        monkeypatch.setenv("SHAPECAST_ABORT_EARLY", "false")
        monkeypatch.setenv("SHAPECAST_LOG_JSON", "1")

        settings = fresh_settings()
        assert settings.ABORT_EARLY is False
        assert settings.LOG_JSON is True

    def test_new_schemas_take_settings(self, monkeypatch, fresh_settings):
        """Test that schema flags default from settings."""
        monkeypatch.setenv("SHAPECAST_ABORT_EARLY", "false")
        monkeypatch.setenv("SHAPECAST_RECURSIVE", "false")

        schema = array(number().min(0))
        assert schema.spec.abort_early is False
        assert schema.spec.recursive is False
        assert schema.validate_sync([-1]).is_ok()

    def test_collect_all_from_settings(self, monkeypatch, fresh_settings):
        """Test that ABORT_EARLY=false reports every failure."""
        monkeypatch.setenv("SHAPECAST_ABORT_EARLY", "false")

        result = array(number().min(0)).validate_sync([-1, -2])
        assert result.error.paths == ["[0]", "[1]"]


class TestLogging:
    """Test structlog configuration and library events."""

    def test_json_output(self, capsys, reset_logging):
        """Test JSON rendering through the library handler."""
        configure_logging("DEBUG", json_logs=True)
        get_logger("shapecast.tests").info("hello", answer=42)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "hello"
        assert payload["answer"] == 42
        assert payload["library"] == "shapecast"
        assert payload["level"] == "info"

    def test_bound_context(self, capsys, reset_logging):
        """Test contextvars propagation."""
        configure_logging("INFO", json_logs=True)
        bind_context(request_id="r1")
        try:
            get_logger("shapecast.tests").info("with_context")
        finally:
            clear_context()

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["request_id"] == "r1"

    def test_unbind_context(self, capsys, reset_logging):
        """Test removing one bound key."""
        configure_logging("INFO", json_logs=True)
        bind_context(request_id="r1", tenant="t")
        unbind_context("tenant")
        try:
            get_logger("shapecast.tests").info("partial_context")
        finally:
            clear_context()

        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["request_id"] == "r1"
        assert "tenant" not in payload

    def test_configure_from_settings(self, capsys, monkeypatch, fresh_settings, reset_logging):
        """Test SHAPECAST_LOG_* driven configuration."""
        monkeypatch.setenv("SHAPECAST_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SHAPECAST_LOG_JSON", "true")
        configure_from_settings()

        assert logging.getLogger("shapecast").level == logging.DEBUG
        get_logger("shapecast.tests").debug("from_settings")
        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["event"] == "from_settings"

    def test_level_filtering(self, capsys, reset_logging):
        """Test that events below the level are dropped."""
        configure_logging("WARNING", json_logs=True)
        get_logger("shapecast.tests").info("hidden")
        assert capsys.readouterr().out == ""

    def test_silent_by_default(self, capsys):
        """Test that library debug events are not printed unconfigured."""
        array(number().min(0)).validate_sync([-1, -2], abort_early=False)
        assert capsys.readouterr().out == ""

    def test_validation_failed_event(self, caplog):
        """Test the aggregate failure event."""
        caplog.set_level(logging.DEBUG, logger="shapecast.validation")
        array(number().min(0)).validate_sync([-1, -2], abort_early=False)

        events = [r.msg for r in caplog.records if isinstance(r.msg, dict)]
        failed = [e for e in events if e["event"] == "validation_failed" and e["path"] == "this"]
        assert failed and failed[-1]["error_count"] == 2

    def test_json_cast_failed_event(self, caplog):
        """Test the cast failure event."""
        caplog.set_level(logging.DEBUG, logger="shapecast.schema")
        array().cast("{oops")

        events = [r.msg["event"] for r in caplog.records if isinstance(r.msg, dict)]
        assert "json_cast_failed" in events

    def test_registry_caches_loggers(self):
        """Test that domain loggers are shared."""
        assert LoggerRegistry.get("validation") is validation_logger()

"""Unit tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from directive_agents.observability.logging import add_run_id, configure_logging, get_logger, run_id_ctx


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and structlog defaults after a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestAddRunId:
    """Tests for the add_run_id processor."""

    def test_without_run_id(self):
        """Nothing is added outside a run."""
        assert add_run_id(None, "info", {"event": "x"}) == {"event": "x"}

    def test_with_run_id(self):
        token = run_id_ctx.set("abc123")
        try:
            assert add_run_id(None, "info", {"event": "x"}) == {"event": "x", "run_id": "abc123"}
        finally:
            run_id_ctx.reset(token)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level_and_single_handler(self, restore_logging):
        configure_logging("DEBUG", json_output=True)
        assert restore_logging.level == logging.DEBUG
        assert len(restore_logging.handlers) == 1

    def test_quiets_noisy_loggers(self, restore_logging):
        configure_logging("DEBUG", json_output=False)
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("LiteLLM").level == logging.WARNING

    def test_json_output_includes_run_id(self, restore_logging, capsys):
        """JSON lines carry the event, level, logger name and run id."""
        configure_logging("INFO", json_output=True)
        token = run_id_ctx.set("run-1")
        try:
            get_logger("directive_agents.test").info("hello", tool="calc")
        finally:
            run_id_ctx.reset(token)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "hello"
        assert entry["tool"] == "calc"
        assert entry["level"] == "info"
        assert entry["logger"] == "directive_agents.test"
        assert entry["run_id"] == "run-1"

    def test_auto_format_on_captured_stderr(self, restore_logging, capsys):
        """Without an explicit format, a non-terminal stderr gets JSON and stdout stays empty."""
        configure_logging("INFO")
        get_logger("directive_agents.test").info("auto")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err.strip().splitlines()[-1])["event"] == "auto"

    def test_stdlib_loggers_formatted(self, restore_logging, capsys):
        """Plain logging calls go through the same renderer."""
        configure_logging("INFO", json_output=True)
        logging.getLogger("directive_agents.agent.runner").info("Handing off to %s", "Spanish")
        entry = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert entry["event"] == "Handing off to Spanish"

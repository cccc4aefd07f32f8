"""Unit tests for application settings.

This module tests the Pydantic settings classes, their validators and
loading from nested environment variables.
"""

import pytest
from pydantic import ValidationError

from directive_agents.settings import DEFAULT_MODEL, LlmSettings, LogSettings, RunSettings, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings variables that may leak in from the host environment."""
    for name in ("LLM__MODEL", "LLM__API_KEY", "LLM__API_BASE", "LLM__TEMPERATURE", "LOG__LEVEL", "LOG__JSON_OUTPUT", "RUN__MAX_TOOL_PASSES"):
        monkeypatch.delenv(name, raising=False)


class TestLlmSettings:
    """Tests for LlmSettings configuration."""

    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = LlmSettings()
        assert settings.model == DEFAULT_MODEL
        assert settings.api_key is None
        assert settings.api_base is None
        assert settings.temperature == 0.2

    @pytest.mark.parametrize("temperature", [-1.0, 2.1])
    def test_temperature_range(self, temperature):
        """Temperature outside [0, 2] should raise ValidationError."""
        with pytest.raises(ValidationError):
            LlmSettings(temperature=temperature)


class TestLogSettings:
    """Tests for LogSettings configuration."""

    def test_log_level_validation_valid(self):
        """Valid log levels should be accepted and upper-cased."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "debug", "info"]:
            settings = LogSettings(level=level)
            assert settings.level == level.upper()

    def test_log_level_validation_invalid(self):
        """Invalid log levels should raise ValidationError."""
        with pytest.raises(ValidationError):
            LogSettings(level="INVALID")

    def test_json_output_default_none(self):
        """json_output defaults to automatic detection."""
        assert LogSettings().json_output is None


class TestRunSettings:
    """Tests for RunSettings configuration."""

    def test_default_passes(self):
        assert RunSettings().max_tool_passes == 3

    def test_negative_passes_rejected(self):
        with pytest.raises(ValidationError):
            RunSettings(max_tool_passes=-1)


class TestSettings:
    """Tests for loading the root Settings from the environment."""

    def test_defaults_without_env(self):
        """Every section has defaults."""
        settings = Settings()
        assert settings.llm.model == DEFAULT_MODEL
        assert settings.log.level == "INFO"
        assert settings.run.max_tool_passes == 3

    def test_nested_env_vars(self, monkeypatch):
        """Double underscores select nested fields."""
        monkeypatch.setenv("LLM__MODEL", "gpt-env")
        monkeypatch.setenv("LLM__API_KEY", "sk-env")
        monkeypatch.setenv("LOG__LEVEL", "debug")
        monkeypatch.setenv("LOG__JSON_OUTPUT", "false")
        monkeypatch.setenv("RUN__MAX_TOOL_PASSES", "5")

        settings = Settings()

        assert settings.llm.model == "gpt-env"
        assert settings.llm.api_key == "sk-env"
        assert settings.log.level == "DEBUG"
        assert settings.log.json_output is False
        assert settings.run.max_tool_passes == 5

    def test_invalid_env_value(self, monkeypatch):
        """Invalid environment values fail validation."""
        monkeypatch.setenv("LLM__TEMPERATURE", "9")
        with pytest.raises(ValidationError):
            Settings()

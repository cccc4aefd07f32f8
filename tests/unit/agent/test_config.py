"""Unit tests for agent and LLM configuration."""

from dataclasses import FrozenInstanceError

import pytest

from directive_agents.agent.config import DEFAULT_TEMPERATURE, AgentConfig, LlmConfig
from directive_agents.agent.exceptions import ConfigurationError
from directive_agents.agent.tools import ToolDefinition
from directive_agents.settings import LlmSettings, Settings


def make_tool(name: str, result="ok") -> ToolDefinition:
    return ToolDefinition(name=name, execute=lambda args, ctx: result)


class TestLlmConfig:
    """Tests for LlmConfig dataclass."""

    def test_defaults(self):
        """Only the model is required."""
        config = LlmConfig(model="gpt-4o-mini")
        assert config.api_key is None
        assert config.base_url is None
        assert config.temperature == DEFAULT_TEMPERATURE

    def test_from_settings(self):
        """Settings map onto the config fields."""
        settings = Settings(
            llm=LlmSettings(model="claude-test", api_key="sk-test", api_base="http://proxy:4000", temperature=0.5)
        )
        config = LlmConfig.from_settings(settings)
        assert config == LlmConfig(
            model="claude-test",
            api_key="sk-test",
            base_url="http://proxy:4000",
            temperature=0.5,
        )


class TestAgentConfig:
    """Tests for AgentConfig validation and defaults."""

    def test_defaults(self):
        """An empty config is valid."""
        config = AgentConfig()
        assert config.name is None
        assert config.instructions is None
        assert config.model is None
        assert config.temperature == 0.2
        assert config.tools is None
        assert config.tool_names == []

    def test_blank_name_rejected(self):
        """A whitespace-only name is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            AgentConfig(name="   ")
        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_temperature_out_of_range(self, temperature):
        """Temperature must lie within [0, 2]."""
        with pytest.raises(ConfigurationError, match="temperature"):
            AgentConfig(temperature=temperature)

    @pytest.mark.parametrize("temperature", [0.0, 2.0])
    def test_temperature_bounds_inclusive(self, temperature):
        """The range endpoints are accepted."""
        assert AgentConfig(temperature=temperature).temperature == temperature

    def test_tools_deduplicated(self):
        """Duplicate tool names collapse to the last definition."""
        last = make_tool("search", "second")
        config = AgentConfig(tools=[make_tool("search", "first"), make_tool("calc"), last])
        assert config.tool_names == ["search", "calc"]
        assert config.tools[0] is last

    def test_tools_stored_as_tuple(self):
        """Tool lists are copied into a tuple."""
        tools = [make_tool("a")]
        config = AgentConfig(tools=tools)
        tools.append(make_tool("b"))
        assert config.tool_names == ["a"]

    def test_is_frozen(self):
        """AgentConfig is immutable."""
        config = AgentConfig(name="Helper")
        with pytest.raises(FrozenInstanceError):
            config.name = "Other"  # type: ignore[misc]


class TestAgentConfigExtend:
    """Tests for AgentConfig.extend()."""

    def test_receiver_unchanged(self):
        """Extending returns a new config and leaves the receiver alone."""
        base = AgentConfig(name="Summarizer", instructions="Summarize.")
        derived = base.extend(name="Polisher", instructions="Polish.")
        assert base.name == "Summarizer"
        assert base.instructions == "Summarize."
        assert derived.name == "Polisher"
        assert derived.instructions == "Polish."

    def test_unchanged_fields_inherited(self):
        """Fields not named in changes are kept."""
        base = AgentConfig(name="A", model="gpt-test", temperature=0.9)
        derived = base.extend(instructions="New.")
        assert derived.model == "gpt-test"
        assert derived.temperature == 0.9

    def test_tools_merged_by_name(self):
        """tools is merged into the existing tools, the extension winning."""
        override = make_tool("search", "new")
        base = AgentConfig(tools=[make_tool("search", "old"), make_tool("calc")])
        derived = base.extend(tools=[override, make_tool("weather")])
        assert derived.tool_names == ["search", "calc", "weather"]
        assert derived.tools[0] is override
        assert base.tool_names == ["search", "calc"]
        assert base.tools[0] is not override

    def test_tools_added_to_toolless_config(self):
        """Extending a config without tools adds them."""
        derived = AgentConfig().extend(tools=[make_tool("calc")])
        assert derived.tool_names == ["calc"]

    def test_unknown_field_rejected(self):
        """Misspelled fields raise instead of being dropped."""
        with pytest.raises(ConfigurationError, match="instruction"):
            AgentConfig().extend(instruction="typo")

    def test_validation_applies_to_extension(self):
        """Extended configs are validated like new ones."""
        with pytest.raises(ConfigurationError):
            AgentConfig().extend(temperature=3.0)

"""Configuration dataclasses for agents and LLM clients.

Both are immutable: extending an agent configuration produces a new object
and leaves the receiver untouched.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from directive_agents.agent.exceptions import ConfigurationError
from directive_agents.agent.messages import Message, RunResult
from directive_agents.agent.protocol import TraceObserver
from directive_agents.agent.tools import ToolContext, ToolDefinition, merge_tools

if TYPE_CHECKING:
    from directive_agents.settings import Settings

type InputGuard = Callable[[list[Message]], list[Message] | Awaitable[list[Message]]]
type OutputGuard = Callable[[str], str | Awaitable[str]]
type HandoffHandler = Callable[[str, list[Message], ToolContext], Awaitable[RunResult]]

DEFAULT_TEMPERATURE = 0.2


@dataclass(frozen=True)
class LlmConfig:
    """Configuration for chat provider clients.

    Attributes:
        model: Default model identifier used when an agent does not set one
        api_key: API key for the LLM provider
        base_url: Base URL for the API (e.g., LiteLLM proxy URL)
        temperature: Default sampling temperature
    """

    model: str
    api_key: str | None = None
    base_url: str | None = None
    temperature: float = DEFAULT_TEMPERATURE

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LlmConfig":
        return cls(
            model=settings.llm.model,
            api_key=settings.llm.api_key,
            base_url=settings.llm.api_base,
            temperature=settings.llm.temperature,
        )


@dataclass(frozen=True)
class AgentConfig:
    """Static description of an agent.

    Attributes:
        name: Agent name, used in traces, logs and metrics
        instructions: Rendered as the leading system message of every run
        model: Model identifier; None lets the provider pick its default
        temperature: Sampling temperature
        tools: Tools the model may call, unique by name (last one wins)
        input_guard: Transform applied to the input messages before the run
        output_guard: Transform applied to the final content
        on_trace: Observer receiving trace events; never affects the run
        handoff: Called with (target, history, context) on a handoff directive
    """

    name: str | None = None
    instructions: str | None = None
    model: str | None = None
    temperature: float = DEFAULT_TEMPERATURE
    tools: Sequence[ToolDefinition] | None = None
    input_guard: InputGuard | None = None
    output_guard: OutputGuard | None = None
    on_trace: TraceObserver | None = None
    handoff: HandoffHandler | None = None

    def __post_init__(self) -> None:
        if self.name is not None and not self.name.strip():
            raise ConfigurationError("agent name must not be blank", field="name")
        if not 0.0 <= self.temperature <= 2.0:
            raise ConfigurationError(
                f"temperature must be between 0 and 2, got {self.temperature}",
                field="temperature",
            )
        if self.tools is not None:
            object.__setattr__(self, "tools", merge_tools(self.tools, None))

    def extend(self, **changes: Any) -> "AgentConfig":
        """Return a new config with changes applied.

        Fields are replaced shallowly except ``tools``, which is merged by
        name into the existing tools.

        Raises:
            ConfigurationError: If a change names an unknown field
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"unknown fields: {', '.join(unknown)}")
        if "tools" in changes:
            changes["tools"] = merge_tools(self.tools, changes["tools"])
        return replace(self, **changes)

    @property
    def tool_names(self) -> list[str]:
        return [t.name for t in self.tools or ()]

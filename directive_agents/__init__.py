"""directive-agents - Tool-calling and handoff agents driven by JSON directives in model output."""

from directive_agents.agent import (
    Agent,
    AgentConfig,
    LiteLLMChatProvider,
    Message,
    RunResult,
    ToolContext,
    ToolDefinition,
    from_pydantic,
    handoff_to,
    tool,
)
from directive_agents.settings import Settings

__all__ = [
    "Agent",
    "AgentConfig",
    "LiteLLMChatProvider",
    "Message",
    "RunResult",
    "Settings",
    "ToolContext",
    "ToolDefinition",
    "from_pydantic",
    "handoff_to",
    "tool",
]

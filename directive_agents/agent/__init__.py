"""Agent infrastructure module.

This module provides the core abstractions for running tool-calling agents:
- Agent run loop and configuration
- Message, result and trace event types
- Tool definitions and dispatch
- Directive parsing for model output
- Guards and handoff routing
- Pydantic schemas and the LiteLLM chat provider
"""

from directive_agents.agent.config import AgentConfig, LlmConfig
from directive_agents.agent.directives import Handoff, NoDirective, ToolCall, extract_json, parse_directive
from directive_agents.agent.exceptions import (
    AgentError,
    ChatCancelledError,
    ConfigurationError,
    GuardrailTrippedError,
    ProviderConfigurationError,
    ProviderError,
)
from directive_agents.agent.guards import (
    InputGuardrail,
    OutputGuardrail,
    chain_input_guards,
    input_guard,
    keep_last,
    output_guard,
    strip_output,
)
from directive_agents.agent.handoffs import (
    compose_filters,
    handoff_to,
    keep_conversation_only,
    remove_system_messages,
    remove_tool_messages,
)
from directive_agents.agent.llm_client import LiteLLMChatProvider
from directive_agents.agent.messages import ChatResult, Message, Role, RunResult, TraceEvent, TraceEventType
from directive_agents.agent.protocol import ChatProvider, StructuredSchema
from directive_agents.agent.runner import Agent
from directive_agents.agent.schema import from_pydantic
from directive_agents.agent.tools import (
    ToolContext,
    ToolDefinition,
    maybe_execute_tool,
    merge_tools,
    tool,
    with_error_handling,
)
from directive_agents.agent.tracing import log_trace_event

__all__ = [
    # Core
    "Agent",
    "AgentConfig",
    "LlmConfig",
    # Protocols
    "ChatProvider",
    "StructuredSchema",
    # Messages
    "ChatResult",
    "Message",
    "Role",
    "RunResult",
    "TraceEvent",
    "TraceEventType",
    # Directives
    "Handoff",
    "NoDirective",
    "ToolCall",
    "extract_json",
    "parse_directive",
    # Tools
    "ToolContext",
    "ToolDefinition",
    "maybe_execute_tool",
    "merge_tools",
    "tool",
    "with_error_handling",
    # Guards
    "InputGuardrail",
    "OutputGuardrail",
    "chain_input_guards",
    "input_guard",
    "keep_last",
    "output_guard",
    "strip_output",
    # Handoffs
    "compose_filters",
    "handoff_to",
    "keep_conversation_only",
    "remove_system_messages",
    "remove_tool_messages",
    # Schemas, providers, tracing
    "from_pydantic",
    "LiteLLMChatProvider",
    "log_trace_event",
    # Errors
    "AgentError",
    "ChatCancelledError",
    "ConfigurationError",
    "GuardrailTrippedError",
    "ProviderConfigurationError",
    "ProviderError",
]

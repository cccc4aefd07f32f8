"""Message, result and trace event types.

These types form the common vocabulary of a run: the conversation history
replayed to the provider, the final result handed back to the caller, and the
observation points emitted to a trace observer.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from directive_agents.agent.config import AgentConfig


class Role(StrEnum):
    """Conversation role of a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


@dataclass(frozen=True)
class Message:
    """One turn of conversation.

    Attributes:
        role: Message role ("user", "assistant", "system", "tool")
        content: Message text content
        name: Tool name (for tool messages)
    """

    role: str
    content: str
    name: str | None = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)

    @classmethod
    def tool(cls, content: str, name: str | None = None) -> "Message":
        return cls(role=Role.TOOL, content=content, name=name)


@dataclass(frozen=True)
class RunResult:
    """Result of an agent run.

    Attributes:
        content: Final assistant text, after the output guard
        structured: Parsed object, set only when an output schema was supplied
        messages: Conversation history at loop termination
        turns: Number of provider calls made during the run
    """

    content: str
    structured: Any = None
    messages: tuple[Message, ...] = ()
    turns: int = 0


@dataclass(frozen=True)
class ChatResult:
    """Completion returned by a chat provider.

    Attributes:
        content: Full completion text (accumulated when streaming)
        input_tokens: Prompt tokens reported by the provider, 0 if unknown
        output_tokens: Completion tokens reported by the provider, 0 if unknown
    """

    content: str
    input_tokens: int = 0
    output_tokens: int = 0


class TraceEventType(StrEnum):
    """Observation points emitted during a run."""

    AGENT_START = "agent:start"
    AGENT_STOP = "agent:stop"
    LLM_REQUEST = "llm:request"
    LLM_RESPONSE = "llm:response"
    TOOL_START = "tool:start"
    TOOL_STOP = "tool:stop"
    HANDOFF = "handoff"


@dataclass(frozen=True)
class AgentStart:
    agent_name: str | None
    config: "AgentConfig"
    event_type: TraceEventType = field(default=TraceEventType.AGENT_START, init=False)


@dataclass(frozen=True)
class AgentStop:
    agent_name: str | None
    tokens: int | None = None
    event_type: TraceEventType = field(default=TraceEventType.AGENT_STOP, init=False)


@dataclass(frozen=True)
class LlmRequest:
    model: str | None
    messages: tuple[Message, ...]
    event_type: TraceEventType = field(default=TraceEventType.LLM_REQUEST, init=False)


@dataclass(frozen=True)
class LlmResponse:
    content: str
    event_type: TraceEventType = field(default=TraceEventType.LLM_RESPONSE, init=False)


@dataclass(frozen=True)
class ToolStart:
    name: str
    args: Any
    event_type: TraceEventType = field(default=TraceEventType.TOOL_START, init=False)


@dataclass(frozen=True)
class ToolStop:
    name: str
    result: Any
    event_type: TraceEventType = field(default=TraceEventType.TOOL_STOP, init=False)


@dataclass(frozen=True)
class HandoffEvent:
    to: str
    from_agent: str | None = None
    reason: str | None = None
    event_type: TraceEventType = field(default=TraceEventType.HANDOFF, init=False)


type TraceEvent = AgentStart | AgentStop | LlmRequest | LlmResponse | ToolStart | ToolStop | HandoffEvent

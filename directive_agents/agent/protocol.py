"""Protocols for the collaborators of the run loop.

The loop treats the chat provider, output schemas and trace observers as
opaque; anything satisfying these protocols can be plugged in, whether it is
backed by an HTTP call, a local model or a test double.
"""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from directive_agents.agent.messages import ChatResult, Message, TraceEvent

type DeltaCallback = Callable[[str], None]
type TraceObserver = Callable[[TraceEvent], None]


class ChatProvider(Protocol):
    """Protocol for a chat completion provider."""

    async def chat(
        self,
        *,
        model: str | None,
        messages: Sequence[Message],
        temperature: float,
        signal: asyncio.Event | None = None,
        on_delta: DeltaCallback | None = None,
    ) -> ChatResult:
        """Complete a conversation.

        Args:
            model: Model identifier, None to use the provider default
            messages: Ordered conversation history
            temperature: Sampling temperature
            signal: Optional cancellation event; set means cancelled
            on_delta: Optional callback receiving each streamed text increment

        Returns:
            The full completion, accumulated when streaming
        """
        ...


class StructuredSchema[T](Protocol):
    """Protocol for a validator used for structured output and tool arguments."""

    def parse(self, value: Any) -> T:
        """Return the validated value or raise on invalid input."""
        ...

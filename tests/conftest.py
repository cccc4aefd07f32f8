"""Shared test fixtures.

This module provides a scripted chat provider standing in for a real model,
plus small helpers for collecting trace events.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from directive_agents.agent.messages import ChatResult, Message, TraceEvent


@dataclass
class ChatCall:
    """Arguments of one recorded provider call."""

    model: str | None
    messages: list[Message]
    temperature: float
    signal: asyncio.Event | None
    on_delta: Any


@dataclass
class ScriptedProvider:
    """Chat provider replaying canned replies in order.

    Replies may be strings, ChatResult objects or exceptions (raised).
    Once the script is exhausted the last reply is repeated.
    """

    replies: Sequence[str | ChatResult | Exception]
    calls: list[ChatCall] = field(default_factory=list)

    async def chat(
        self,
        *,
        model: str | None,
        messages: Sequence[Message],
        temperature: float,
        signal: asyncio.Event | None = None,
        on_delta=None,
    ) -> ChatResult:
        self.calls.append(ChatCall(model, list(messages), temperature, signal, on_delta))
        reply = self.replies[min(len(self.calls), len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        result = reply if isinstance(reply, ChatResult) else ChatResult(content=reply)
        if on_delta is not None:
            for word in result.content.split(" "):
                on_delta(word)
        return result


@pytest.fixture
def scripted_provider():
    """Factory creating a ScriptedProvider from replies."""

    def factory(*replies: str | ChatResult | Exception) -> ScriptedProvider:
        return ScriptedProvider(list(replies))

    return factory


@pytest.fixture
def trace_events() -> list[TraceEvent]:
    """List collecting trace events; use ``trace_events.append`` as on_trace."""
    return []

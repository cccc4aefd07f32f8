"""Input and output guards.

A guard is a plain transform (``input_guard(messages) -> messages``,
``output_guard(text) -> text``) configured on an agent. This module provides
ready-made transforms and builders that turn named pass/fail checks into
guards raising ``GuardrailTrippedError``.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from directive_agents.agent.config import InputGuard, OutputGuard
from directive_agents.agent.exceptions import GuardrailTrippedError
from directive_agents.agent.messages import Message, Role
from directive_agents.agent.tools import resolve

logger = logging.getLogger(__name__)

type Check[T] = Callable[[T], bool | Awaitable[bool]]


@dataclass(frozen=True)
class InputGuardrail:
    """Named check applied to the text of the latest user message.

    Attributes:
        name: Guardrail name reported on failure
        check: Returns True when the input is acceptable
        error_message: Message of the raised error; defaults to a generic one
    """

    name: str
    check: Check[str]
    error_message: str | None = None


@dataclass(frozen=True)
class OutputGuardrail:
    """Named check applied to the final content of a run."""

    name: str
    check: Check[str]
    error_message: str | None = None


async def _run_checks(guardrails: tuple[InputGuardrail | OutputGuardrail, ...], text: str) -> None:
    for guardrail in guardrails:
        if not await resolve(guardrail.check(text)):
            logger.warning("Guardrail '%s' tripped", guardrail.name)
            raise GuardrailTrippedError(guardrail.name, guardrail.error_message)


def input_guard(*guardrails: InputGuardrail) -> InputGuard:
    """Build an input guard that checks the latest user message.

    Messages pass through unchanged when all checks succeed.
    """

    async def guard(messages: list[Message]) -> list[Message]:
        latest = next((m for m in reversed(messages) if m.role == Role.USER), None)
        if latest is not None:
            await _run_checks(guardrails, latest.content)
        return messages

    return guard


def output_guard(*guardrails: OutputGuardrail) -> OutputGuard:
    """Build an output guard that checks the final content."""

    async def guard(content: str) -> str:
        await _run_checks(guardrails, content)
        return content

    return guard


def chain_input_guards(*guards: InputGuard) -> InputGuard:
    """Compose input guards, applied left to right."""

    async def guard(messages: list[Message]) -> list[Message]:
        for each in guards:
            messages = await resolve(each(messages))
        return messages

    return guard


def keep_last(n: int) -> InputGuard:
    """Input guard truncating the input to its last n messages."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")

    def guard(messages: list[Message]) -> list[Message]:
        return list(messages[-n:])

    return guard


def strip_output(content: str) -> str:
    """Output guard removing surrounding whitespace."""
    return content.strip()

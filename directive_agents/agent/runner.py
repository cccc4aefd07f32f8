"""Agent run loop.

An ``Agent`` pairs an immutable ``AgentConfig`` with an injected chat
provider. Each ``run`` is an independent bounded loop: the provider is
called, its reply is checked for a handoff or tool directive, at most one
tool is executed per turn and its result is appended to the history, until
the model answers in plain text or the pass budget runs out.
"""

import asyncio
import logging
import uuid
from collections.abc import MutableMapping, Sequence
from typing import Any

import structlog

from directive_agents.agent.config import AgentConfig
from directive_agents.agent.directives import Handoff, ToolCall, extract_json, parse_directive
from directive_agents.agent.messages import (
    AgentStart,
    AgentStop,
    HandoffEvent,
    LlmRequest,
    LlmResponse,
    Message,
    RunResult,
)
from directive_agents.agent.metrics import (
    AgentMetricsLabels,
    LlmMetricsLabels,
    collect_agent_metrics,
    record_agent_tokens,
    record_llm_request,
)
from directive_agents.agent.protocol import ChatProvider, DeltaCallback, StructuredSchema
from directive_agents.agent.tools import ToolContext, ToolDefinition, execute_tool_call, resolve
from directive_agents.agent.tracing import emit_trace
from directive_agents.observability.logging import run_id_ctx

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_PASSES = 3
TOOL_HINT_HEADER = 'You may call tools by responding with JSON {"tool":"NAME","args":OBJECT}. Tools:\n'


def build_tool_hint(tools: Sequence[ToolDefinition]) -> Message:
    """Build the synthetic system message listing the available tools."""
    tool_list = "\n".join(f"- {t.name}: {t.description or ''}" for t in tools)
    return Message.system(TOOL_HINT_HEADER + tool_list)


def with_tool_hint(
    history: Sequence[Message],
    tools: Sequence[ToolDefinition] | None,
    has_instructions: bool,
) -> list[Message]:
    """Return the messages to send, with the tool hint after the instructions.

    Args:
        history: Seeded conversation history
        tools: Configured tools; no hint is added when empty
        has_instructions: Whether history starts with the instructions message

    Returns:
        A new list; history itself is never modified
    """
    messages = list(history)
    if tools:
        messages.insert(1 if has_instructions else 0, build_tool_hint(tools))
    return messages


class Agent:
    """A configured agent bound to a chat provider.

    Example:
        agent = Agent(provider, AgentConfig(name="Helper", instructions="Be concise."))
        result = await agent.run([Message.user("Hello")])
    """

    def __init__(self, provider: ChatProvider, config: AgentConfig | None = None):
        """Initialize the agent.

        Args:
            provider: Chat provider used for every turn
            config: Agent configuration; defaults to an empty configuration
        """
        self._provider = provider
        self._config = config or AgentConfig()

    @property
    def name(self) -> str | None:
        return self._config.name

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def provider(self) -> ChatProvider:
        return self._provider

    def extend(self, **changes: Any) -> "Agent":
        """Return a new agent sharing the provider, with the config extended.

        See ``AgentConfig.extend``; this agent is left unchanged.
        """
        return Agent(self._provider, self._config.extend(**changes))

    async def run(
        self,
        messages: Sequence[Message],
        *,
        expect: StructuredSchema[Any] | None = None,
        context: MutableMapping[str, Any] | None = None,
        signal: asyncio.Event | None = None,
        on_delta: DeltaCallback | None = None,
        max_tool_passes: int = DEFAULT_MAX_TOOL_PASSES,
    ) -> RunResult:
        """Run the agent on new messages.

        Errors raised by guards, the provider, tools or ``expect`` propagate
        unchanged; nothing is retried.

        Args:
            messages: Messages appended after the instructions
            expect: Optional schema the final content is parsed with
            context: Per-run context passed to tools and the handoff callback
            signal: Optional cancellation event forwarded to the provider
            on_delta: Optional streaming callback forwarded to the provider
            max_tool_passes: Provider calls allowed after the first one

        Returns:
            The final result, or the handoff callback's result verbatim
        """
        run_id = uuid.uuid4().hex[:12]
        token = run_id_ctx.set(run_id)
        labels = AgentMetricsLabels(agent=self._config.name or "")
        try:
            with structlog.contextvars.bound_contextvars(agent=self._config.name), collect_agent_metrics(labels):
                return await self._run(
                    messages,
                    expect=expect,
                    context=ToolContext() if context is None else context,
                    signal=signal,
                    on_delta=on_delta,
                    max_tool_passes=max_tool_passes,
                )
        finally:
            run_id_ctx.reset(token)

    async def _run(
        self,
        messages: Sequence[Message],
        *,
        expect: StructuredSchema[Any] | None,
        context: MutableMapping[str, Any],
        signal: asyncio.Event | None,
        on_delta: DeltaCallback | None,
        max_tool_passes: int,
    ) -> RunResult:
        config = self._config
        on_trace = config.on_trace

        guarded = list(messages)
        if config.input_guard is not None:
            guarded = list(await resolve(config.input_guard(guarded)))

        history: list[Message] = []
        if config.instructions:
            history.append(Message.system(config.instructions))
        history.extend(guarded)

        emit_trace(on_trace, AgentStart(agent_name=config.name, config=config))

        max_turns = max(1, max_tool_passes + 1)
        llm_labels = LlmMetricsLabels(agent=config.name or "", model=config.model or "")
        last_content = ""
        turns = 0
        tokens = 0

        for turn in range(max_turns):
            hinted = with_tool_hint(history, config.tools, bool(config.instructions))
            emit_trace(on_trace, LlmRequest(model=config.model, messages=tuple(hinted)))

            response = await self._provider.chat(
                model=config.model,
                messages=hinted,
                temperature=config.temperature,
                signal=signal,
                on_delta=on_delta,
            )
            turns += 1
            tokens += response.input_tokens + response.output_tokens
            record_llm_request(llm_labels)
            record_agent_tokens(llm_labels, response.input_tokens, response.output_tokens)

            last_content = response.content
            emit_trace(on_trace, LlmResponse(content=last_content))

            match parse_directive(last_content):
                case Handoff(to=to, reason=reason):
                    emit_trace(on_trace, HandoffEvent(to=to, from_agent=config.name, reason=reason))
                    if config.handoff is None:
                        logger.info("Handoff to %s requested but no handler configured", to)
                        break
                    logger.info("Handing off to %s", to)
                    result = await config.handoff(to, list(history), context)
                    emit_trace(on_trace, AgentStop(agent_name=config.name, tokens=tokens or None))
                    return result
                case ToolCall(name=name) as call if config.tools:
                    if turn == max_turns - 1:
                        # the result could never be sent back to the model
                        logger.warning("Tool pass budget exhausted, not executing %r", name)
                        break
                    tool_result = await execute_tool_call(call, config.tools, context, on_trace, config.name)
                    if tool_result is None:
                        break
                    history.append(Message.assistant(last_content))
                    history.append(Message.tool(tool_result, name=str(name)))
                    continue
                case _:
                    break

        content = last_content
        if config.output_guard is not None:
            content = await resolve(config.output_guard(content))

        structured = None
        if expect is not None:
            structured = expect.parse(extract_json(content))

        emit_trace(on_trace, AgentStop(agent_name=config.name, tokens=tokens or None))
        logger.debug("Run finished after %d turn(s)", turns)
        return RunResult(content=content, structured=structured, messages=tuple(history), turns=turns)

"""Handoff routing between agents.

``handoff_to`` builds the ``handoff`` callback of a routing agent from a
mapping of target names to agents. The filters below trim the router's history
before it is forwarded, since the receiving agent adds its own instructions.

Example:
    router = Agent(
        provider,
        AgentConfig(
            name="Router",
            instructions='Reply {"handoff":"Spanish"} for Spanish speakers.',
            handoff=handoff_to({"Spanish": spanish_agent}, remove_system_messages),
        ),
    )
"""

import logging
from collections.abc import Callable, Mapping

from directive_agents.agent.config import HandoffHandler
from directive_agents.agent.directives import parse_tool_call
from directive_agents.agent.exceptions import ConfigurationError
from directive_agents.agent.messages import Message, Role, RunResult
from directive_agents.agent.runner import Agent
from directive_agents.agent.tools import ToolContext

logger = logging.getLogger(__name__)

type MessageFilter = Callable[[list[Message]], list[Message]]


def remove_tool_messages(messages: list[Message]) -> list[Message]:
    """Drop tool results and the assistant messages that requested them."""
    return [
        m
        for m in messages
        if m.role != Role.TOOL and not (m.role == Role.ASSISTANT and parse_tool_call(m.content) is not None)
    ]


def remove_system_messages(messages: list[Message]) -> list[Message]:
    return [m for m in messages if m.role != Role.SYSTEM]


def keep_conversation_only(messages: list[Message]) -> list[Message]:
    """Keep only user and assistant messages."""
    return [m for m in messages if m.role in (Role.USER, Role.ASSISTANT)]


def compose_filters(*filters: MessageFilter) -> MessageFilter:
    """Compose message filters, applied left to right."""

    def composed(messages: list[Message]) -> list[Message]:
        for each in filters:
            messages = each(messages)
        return messages

    return composed


def handoff_to(
    agents: Mapping[str, Agent],
    message_filter: MessageFilter | None = None,
    *,
    fallback: Agent | None = None,
) -> HandoffHandler:
    """Build a handoff callback that runs the agent registered under the target name.

    The target agent runs on the (filtered) history with the same context
    object, and its result becomes the routing agent's result.

    Args:
        agents: Target name to agent; names are matched exactly
        message_filter: Optional filter applied to the history before forwarding
        fallback: Agent used for targets missing from agents

    Returns:
        Callback suitable for ``AgentConfig.handoff``

    Raises:
        ConfigurationError: At construction if there is nothing to route to, or
            at handoff time for an unknown target without a fallback
    """
    routes = dict(agents)
    if not routes and fallback is None:
        raise ConfigurationError("at least one handoff target is required", field="handoff")

    async def handoff(to: str, messages: list[Message], context: ToolContext) -> RunResult:
        target = routes.get(to, fallback)
        if target is None:
            known = ", ".join(sorted(routes))
            raise ConfigurationError(f"unknown handoff target '{to}' (known: {known})", field="handoff")
        if to not in routes:
            logger.info("No agent registered for handoff target %s, using fallback %s", to, target.name)

        forwarded = list(messages)
        if message_filter is not None:
            forwarded = message_filter(forwarded)
        logger.info("Routing handoff to %s with %d message(s)", target.name or to, len(forwarded))
        return await target.run(forwarded, context=context)

    return handoff

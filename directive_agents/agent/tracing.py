"""Trace event emission and a logging observer.

Observers are fire-and-forget: an exception raised by an observer is logged
and never reaches the run loop.
"""

import logging

from directive_agents.agent.messages import (
    AgentStart,
    AgentStop,
    HandoffEvent,
    LlmRequest,
    LlmResponse,
    ToolStart,
    ToolStop,
    TraceEvent,
)
from directive_agents.agent.protocol import TraceObserver
from directive_agents.observability.logging import get_logger

logger = logging.getLogger(__name__)
trace_logger = get_logger("directive_agents.trace")


def emit_trace(on_trace: TraceObserver | None, event: TraceEvent) -> None:
    """Deliver an event to the observer, if any, isolating its failures."""
    if on_trace is None:
        return
    try:
        on_trace(event)
    except Exception:
        logger.exception("Trace observer failed on %s", event.event_type)


def log_trace_event(event: TraceEvent) -> None:
    """Observer that writes every trace event to the structured log."""
    match event:
        case AgentStart(agent_name=agent_name):
            trace_logger.info(str(event.event_type), agent=agent_name)
        case AgentStop(agent_name=agent_name, tokens=tokens):
            trace_logger.info(str(event.event_type), agent=agent_name, tokens=tokens)
        case LlmRequest(model=model, messages=messages):
            trace_logger.debug(str(event.event_type), model=model, message_count=len(messages))
        case LlmResponse(content=content):
            trace_logger.debug(str(event.event_type), content_length=len(content))
        case ToolStart(name=name, args=args):
            trace_logger.info(str(event.event_type), tool=name, args=args)
        case ToolStop(name=name):
            trace_logger.info(str(event.event_type), tool=name)
        case HandoffEvent(to=to, from_agent=from_agent, reason=reason):
            trace_logger.info(str(event.event_type), source=from_agent, target=to, reason=reason)

"""Tool definitions, tool set merging and dispatch.

A tool is a named function the model can request by emitting a tool
directive. The dispatcher resolves the name against the configured tools,
runs the tool with the per-run context and serializes its result so it can be
appended to the conversation.
"""

import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from time import monotonic
from typing import Any

from directive_agents.agent.directives import ToolCall, parse_tool_call
from directive_agents.agent.exceptions import ConfigurationError
from directive_agents.agent.messages import ToolStart, ToolStop
from directive_agents.agent.metrics import ToolMetricsLabels, record_tool_call
from directive_agents.agent.protocol import StructuredSchema, TraceObserver
from directive_agents.agent.tracing import emit_trace

logger = logging.getLogger(__name__)


class ToolContext(dict[str, Any]):
    """Per-run metadata shared by reference with every tool call of a run.

    The run loop never reads or writes it; tools may use it to accumulate
    state across turns (e.g. counters or a request id).
    """


type ToolFunction = Callable[[Any, ToolContext], Any]
type ErrorHandler = Callable[[Exception, Any, ToolContext], str | Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    """A tool the model may call.

    Attributes:
        name: Unique tool name
        execute: Callable receiving (args, context); may be sync or async
        description: Human-readable description listed in the tool hint
        schema: Optional validator applied to the arguments before execution
    """

    name: str
    execute: ToolFunction
    description: str | None = None
    schema: StructuredSchema[Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError("tool name must be a non-empty string", field="name")
        if not callable(self.execute):
            raise ConfigurationError(f"tool '{self.name}' execute is not callable", field="execute")


def tool(
    name: str | None = None,
    *,
    description: str | None = None,
    schema: StructuredSchema[Any] | None = None,
) -> Callable[[ToolFunction], ToolDefinition]:
    """Decorator building a ToolDefinition from a function.

    The tool name defaults to the function name and the description to the
    first line of its docstring.

    Example:
        @tool(schema=from_pydantic(CalculatorArgs))
        async def calculator(args, context):
            \"\"\"Evaluate an arithmetic expression.\"\"\"
            ...
    """

    def decorator(func: ToolFunction) -> ToolDefinition:
        doc = inspect.getdoc(func)
        return ToolDefinition(
            name=name or func.__name__,
            execute=func,
            description=description or (doc.splitlines()[0] if doc else None),
            schema=schema,
        )

    return decorator


def with_error_handling(definition: ToolDefinition, handler: ErrorHandler) -> ToolDefinition:
    """Return a copy of a tool whose failures become the handler's result.

    By default a failing tool aborts the run; wrapping it reports the error
    back to the model as the tool result instead.

    Args:
        definition: Tool to wrap
        handler: Called with (error, args, context); returns the result text

    Returns:
        New ToolDefinition with the same name, description and schema
    """
    inner = definition.execute

    async def execute(args: Any, context: ToolContext) -> Any:
        try:
            return await resolve(inner(args, context))
        except Exception as e:
            logger.warning("Tool '%s' failed: %s", definition.name, e)
            return await resolve(handler(e, args, context))

    return replace(definition, execute=execute)


async def resolve(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def merge_tools(
    base: Iterable[ToolDefinition] | None,
    extension: Iterable[ToolDefinition] | None,
) -> tuple[ToolDefinition, ...] | None:
    """Merge two tool sets by name, the last definition of a name winning.

    Args:
        base: Existing tools
        extension: Tools overlaid on top of base

    Returns:
        Deduplicated tools in first-seen name order, or None when both inputs
        are None (no tools configured at all)
    """
    if base is None and extension is None:
        return None
    by_name: dict[str, ToolDefinition] = {}
    for definition in base or ():
        by_name[definition.name] = definition
    for definition in extension or ():
        by_name[definition.name] = definition
    return tuple(by_name.values())


def find_tool(tools: Sequence[ToolDefinition] | None, name: Any) -> ToolDefinition | None:
    for definition in tools or ():
        if definition.name == name:
            return definition
    return None


def serialize_result(result: Any) -> str:
    """Render a tool result for re-insertion into the conversation."""
    if isinstance(result, str):
        return result
    return json.dumps(result, default=str)


async def execute_tool_call(
    call: ToolCall,
    tools: Sequence[ToolDefinition] | None,
    context: ToolContext,
    on_trace: TraceObserver | None = None,
    agent_name: str | None = None,
) -> str | None:
    """Execute a parsed tool call against the configured tools.

    Errors raised by the schema or by the tool propagate to the caller.

    Args:
        call: Parsed tool directive
        tools: Configured tools
        context: Per-run tool context
        on_trace: Optional trace observer
        agent_name: Agent name used for metrics labels

    Returns:
        Serialized tool result, or None if no tool has the requested name
    """
    found = find_tool(tools, call.name)
    if found is None:
        logger.info("Ignoring call to unknown tool %r", call.name)
        return None

    emit_trace(on_trace, ToolStart(name=found.name, args=call.args))
    labels = ToolMetricsLabels(agent=agent_name or "", tool_name=found.name)
    start_time = monotonic()
    try:
        args = found.schema.parse(call.args) if found.schema is not None else call.args
        result = await resolve(found.execute(args, context))
    except Exception:
        record_tool_call(labels, duration=monotonic() - start_time, error=True)
        raise
    record_tool_call(labels, duration=monotonic() - start_time)
    emit_trace(on_trace, ToolStop(name=found.name, result=result))
    return serialize_result(result)


async def maybe_execute_tool(
    content: str,
    tools: Sequence[ToolDefinition] | None,
    context: ToolContext,
    on_trace: TraceObserver | None = None,
) -> str:
    """Execute the tool call embedded in model output, if any.

    Args:
        content: Model output that may contain a tool directive
        tools: Configured tools
        context: Per-run tool context
        on_trace: Optional trace observer

    Returns:
        The serialized tool result, or content unchanged when there are no
        tools, no tool directive, or no tool with the requested name
    """
    if not tools:
        return content
    call = parse_tool_call(content)
    if call is None:
        return content
    result = await execute_tool_call(call, tools, context, on_trace)
    return content if result is None else result

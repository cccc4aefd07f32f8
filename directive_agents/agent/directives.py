"""Detection of tool and handoff directives embedded in model output.

Models request tools and handoffs by writing a JSON object somewhere in their
reply, e.g. ``{"tool": "calculator", "args": {"expression": "2+2"}}`` or
``{"handoff": "SpanishAgent", "reason": "spanish"}``. Free text routinely
fails to parse, so extraction is best-effort and never raises.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoDirective:
    """The text carries no tool or handoff directive."""


@dataclass(frozen=True)
class ToolCall:
    """Request to execute one tool.

    Attributes:
        name: Requested tool name, compared by exact match
        args: Arguments object passed through to the tool
    """

    name: Any
    args: Any = field(default_factory=dict)


@dataclass(frozen=True)
class Handoff:
    """Request to delegate the conversation to another agent.

    Attributes:
        to: Target agent identifier
        reason: Optional explanation given by the model
    """

    to: str
    reason: str | None = None


type Directive = NoDirective | ToolCall | Handoff


def extract_json(text: str) -> Any | None:
    """Best-effort decode of a JSON value from free text.

    Tries the whole string first, then the substring between the first ``{``
    and the last ``}``.

    Args:
        text: Model output

    Returns:
        The decoded value, or None if nothing could be decoded
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError):
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        return json.loads(text[start : end + 1])
    except (ValueError, RecursionError):
        logger.debug("No JSON object found in model output (%d chars)", len(text))
        return None


def _tool_call_from(obj: Any) -> ToolCall | None:
    if isinstance(obj, dict) and "tool" in obj and "args" in obj:
        return ToolCall(name=obj["tool"], args=obj["args"])
    return None


def parse_tool_call(text: str) -> ToolCall | None:
    """Return the tool call embedded in text, ignoring any handoff key."""
    return _tool_call_from(extract_json(text))


def parse_directive(text: str) -> Directive:
    """Classify model output as a handoff, a tool call or plain text.

    A ``handoff`` key wins over ``tool``/``args``; a tool call needs both the
    ``tool`` and the ``args`` keys. A handoff whose target is not a non-empty
    string is no directive at all.

    Args:
        text: Model output

    Returns:
        The detected directive variant
    """
    obj = extract_json(text)
    if not isinstance(obj, dict):
        return NoDirective()

    if "handoff" in obj:
        to = obj["handoff"]
        if not isinstance(to, str) or not to.strip():
            logger.debug("Ignoring handoff directive with invalid target %r", to)
            return NoDirective()
        reason = obj.get("reason")
        return Handoff(to=to, reason=reason if isinstance(reason, str) else None)

    return _tool_call_from(obj) or NoDirective()

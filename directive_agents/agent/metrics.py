"""Prometheus metrics for agent runs, LLM requests and tool calls."""

from collections.abc import Iterator
from contextlib import contextmanager
from time import monotonic
from typing import NamedTuple

import prometheus_client

BUCKETS = (
    # log spaced, 3 per decade
    0.001,  # 1 ms
    0.002,
    0.005,
    0.01,
    0.02,
    0.05,
    0.1,
    0.2,
    0.5,
    1,
    2,
    5,
    10,
    20,
    60,
    float("inf"),
)


class AgentMetricsLabels(NamedTuple):
    agent: str


class LlmMetricsLabels(NamedTuple):
    agent: str
    model: str


class ToolMetricsLabels(NamedTuple):
    agent: str
    tool_name: str


agent_runs_total = prometheus_client.Counter(
    name="agent_runs_total",
    documentation="Completed agent runs by outcome",
    labelnames=AgentMetricsLabels._fields + ("outcome",),
)
agent_run_duration = prometheus_client.Histogram(
    name="agent_run_duration_seconds",
    documentation="Agent run duration (seconds)",
    labelnames=AgentMetricsLabels._fields,
    buckets=BUCKETS,
)
llm_requests_total = prometheus_client.Counter(
    name="agent_llm_requests_total",
    documentation="Chat provider calls made by agents",
    labelnames=LlmMetricsLabels._fields,
)
llm_tokens_total = prometheus_client.Counter(
    name="agent_llm_tokens_total",
    documentation="Tokens reported by the chat provider",
    labelnames=LlmMetricsLabels._fields + ("direction",),
)
tool_calls_total = prometheus_client.Counter(
    name="agent_tool_calls_total",
    documentation="Tool executions by agents",
    labelnames=ToolMetricsLabels._fields + ("status",),
)
tool_call_duration = prometheus_client.Histogram(
    name="agent_tool_call_duration_seconds",
    documentation="Tool execution duration (seconds)",
    labelnames=ToolMetricsLabels._fields,
    buckets=BUCKETS,
)


def record_llm_request(labels: LlmMetricsLabels) -> None:
    llm_requests_total.labels(*labels).inc()


def record_agent_tokens(labels: LlmMetricsLabels, input_tokens: int, output_tokens: int) -> None:
    """Add provider-reported token counts; zero counts are skipped."""
    if input_tokens:
        llm_tokens_total.labels(*labels, "input").inc(input_tokens)
    if output_tokens:
        llm_tokens_total.labels(*labels, "output").inc(output_tokens)


def record_tool_call(labels: ToolMetricsLabels, duration: float, error: bool = False) -> None:
    """Record one tool execution.

    Args:
        labels: Agent and tool name
        duration: Execution time in seconds
        error: Whether the tool (or its argument schema) raised
    """
    tool_calls_total.labels(*labels, "error" if error else "success").inc()
    tool_call_duration.labels(*labels).observe(duration)


@contextmanager
def collect_agent_metrics(labels: AgentMetricsLabels) -> Iterator[None]:
    """Time an agent run and count it as success or error.

    Usage:
        with collect_agent_metrics(AgentMetricsLabels(agent="router")):
            ...
    """
    start_time = monotonic()
    try:
        yield
    except BaseException:
        agent_runs_total.labels(*labels, "error").inc()
        raise
    finally:
        agent_run_duration.labels(*labels).observe(monotonic() - start_time)
    agent_runs_total.labels(*labels, "success").inc()

"""Entry point when the package is executed as a module."""

import asyncio
import sys

import click

from directive_agents.agent import Agent, AgentConfig, LiteLLMChatProvider, Message, log_trace_event
from directive_agents.observability import configure_logging
from directive_agents.settings import Settings


@click.command()
@click.argument("prompt")
@click.option("--instructions", default=None, help="System instructions for the agent.")
@click.option("--model", default=None, help="Model name; defaults to LLM__MODEL.")
@click.option("--stream/--no-stream", default=False, help="Print tokens as they arrive.")
@click.option("--max-tool-passes", type=int, default=None, help="Provider calls allowed after the first.")
def main(prompt, instructions=None, model=None, stream=False, max_tool_passes=None):
    """Run a single agent turn on PROMPT and print the answer."""
    settings = Settings()
    configure_logging(settings.log.level, settings.log.json_output)

    provider = LiteLLMChatProvider.from_settings(settings)
    agent = Agent(
        provider,
        AgentConfig(
            name="cli",
            instructions=instructions,
            model=model,
            temperature=settings.llm.temperature,
            on_trace=log_trace_event,
        ),
    )

    on_delta = (lambda delta: click.echo(delta, nl=False)) if stream else None
    result = asyncio.run(
        agent.run(
            [Message.user(prompt)],
            on_delta=on_delta,
            max_tool_passes=settings.run.max_tool_passes if max_tool_passes is None else max_tool_passes,
        )
    )

    if stream:
        click.echo()
    else:
        click.echo(result.content)


if __name__ == "__main__":
    sys.exit(main())

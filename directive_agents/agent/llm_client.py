"""Chat provider implementation using LiteLLM."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import litellm

from directive_agents.agent.config import LlmConfig
from directive_agents.agent.exceptions import ChatCancelledError, ProviderConfigurationError
from directive_agents.agent.messages import ChatResult, Message
from directive_agents.agent.protocol import DeltaCallback
from directive_agents.settings import Settings

logger = logging.getLogger(__name__)


class LiteLLMChatProvider:
    """Chat provider backed by ``litellm.acompletion``.

    Provides the uniform chat contract used by the run loop with:
    - 1:1 mapping of messages to the chat-completions shape
    - Streaming with per-delta callbacks, returning the accumulated text
    - Cooperative cancellation through an asyncio.Event
    - Token usage reporting when the provider returns it
    """

    def __init__(self, config: LlmConfig):
        """Initialize the provider.

        Args:
            config: Model, credentials and base URL

        Raises:
            ProviderConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ProviderConfigurationError("No LLM API key configured; set LLM__API_KEY in the environment")
        self._config = config

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LiteLLMChatProvider":
        """Create a provider from settings, loading them from the environment if omitted."""
        return cls(LlmConfig.from_settings(settings or Settings()))

    @property
    def default_model(self) -> str:
        """Model used when a request does not name one."""
        return self._config.model

    @staticmethod
    def to_provider_messages(messages: Sequence[Message]) -> list[dict[str, Any]]:
        """Convert messages to chat-completions dicts, omitting an unset name."""
        converted = []
        for message in messages:
            item: dict[str, Any] = {"role": str(message.role), "content": message.content}
            if message.name is not None:
                item["name"] = message.name
            converted.append(item)
        return converted

    @staticmethod
    def extract_tokens(usage: Any) -> tuple[int, int]:
        """Extract (input_tokens, output_tokens) from a usage object, (0, 0) if unavailable."""
        if not usage:
            return 0, 0
        return getattr(usage, "prompt_tokens", 0) or 0, getattr(usage, "completion_tokens", 0) or 0

    async def chat(
        self,
        *,
        model: str | None,
        messages: Sequence[Message],
        temperature: float,
        signal: asyncio.Event | None = None,
        on_delta: DeltaCallback | None = None,
    ) -> ChatResult:
        """Complete a conversation, streaming when on_delta is given.

        Raises:
            ChatCancelledError: If signal is set before the request or mid-stream
        """
        model = model or self.default_model
        if signal is not None and signal.is_set():
            raise ChatCancelledError(model)

        request: dict[str, Any] = {
            "model": model,
            "messages": self.to_provider_messages(messages),
            "temperature": temperature,
            "api_key": self._config.api_key,
        }
        if self._config.base_url:
            request["api_base"] = self._config.base_url

        if on_delta is not None:
            return await self._stream(request, signal, on_delta)

        response = await litellm.acompletion(**request)
        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""
        input_tokens, output_tokens = self.extract_tokens(getattr(response, "usage", None))
        return ChatResult(content=content, input_tokens=input_tokens, output_tokens=output_tokens)

    async def _stream(
        self,
        request: dict[str, Any],
        signal: asyncio.Event | None,
        on_delta: DeltaCallback,
    ) -> ChatResult:
        stream = await litellm.acompletion(
            **request,
            stream=True,
            stream_options={"include_usage": True},
        )
        full = ""
        input_tokens = output_tokens = 0
        try:
            async for chunk in stream:
                if signal is not None and signal.is_set():
                    raise ChatCancelledError(request["model"])
                usage = getattr(chunk, "usage", None)
                if usage:
                    input_tokens, output_tokens = self.extract_tokens(usage)
                if not chunk.choices:
                    continue
                delta = getattr(chunk.choices[0].delta, "content", None) or ""
                if delta:
                    full += delta
                    on_delta(delta)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
        logger.debug("Streamed %d chars from %s", len(full), request["model"])
        return ChatResult(content=full, input_tokens=input_tokens, output_tokens=output_tokens)

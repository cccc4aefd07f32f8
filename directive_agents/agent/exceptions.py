"""Exception hierarchy for agents and chat providers.

Only configuration, guardrail and provider-side conditions get their own
types. Errors raised by tools, guards and schemas supplied by the caller
propagate out of a run unchanged.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""


class ConfigurationError(AgentError):
    """Raised when an agent or tool definition is invalid."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        field_info = f" [{field}]" if field else ""
        super().__init__(f"Invalid configuration{field_info}: {message}")


class GuardrailTrippedError(AgentError):
    """Raised when a named guardrail check fails."""

    def __init__(self, guardrail: str, message: str | None = None):
        self.guardrail = guardrail
        super().__init__(message or f'Guardrail "{guardrail}" failed')


class ProviderError(AgentError):
    """Base exception for chat provider errors."""


class ProviderConfigurationError(ProviderError):
    """Raised when a chat provider cannot be constructed."""


class ChatCancelledError(ProviderError):
    """Raised when a chat request is cancelled through its signal."""

    def __init__(self, model: str | None = None):
        self.model = model
        model_info = f" for {model}" if model else ""
        super().__init__(f"Chat request cancelled{model_info}")

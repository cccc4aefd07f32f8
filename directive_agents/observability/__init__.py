"""Observability module.

- Structured logging with run IDs
"""

from directive_agents.observability.logging import (
    configure_logging,
    get_logger,
    run_id_ctx,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "run_id_ctx",
]

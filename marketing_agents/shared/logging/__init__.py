"""Logging configuration and utilities."""

from marketing_agents.shared.logging.config import (
    setup_logging,
    log_workflow_event,
    StructuredFormatter,
)

__all__ = [
    "setup_logging",
    "log_workflow_event",
    "StructuredFormatter",
]

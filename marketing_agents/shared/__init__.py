"""
Shared infrastructure for all agents.

Modules:
- llm: Async OpenAI client with retry logic
- logging: Structured JSON logging
- contracts: Pydantic contracts passed between components
- parsing: Tolerant structured-output parser
- cache: TTL workflow cache and single-flight helper
"""

from marketing_agents.shared.llm.client import get_cached_client, call_llm
from marketing_agents.shared.logging.config import setup_logging, log_workflow_event
from marketing_agents.shared.parsing import parse_json_tolerant, ParseError
from marketing_agents.shared.cache import TTLWorkflowCache, SingleFlight

__all__ = [
    "get_cached_client",
    "call_llm",
    "setup_logging",
    "log_workflow_event",
    "parse_json_tolerant",
    "ParseError",
    "TTLWorkflowCache",
    "SingleFlight",
]

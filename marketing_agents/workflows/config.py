"""
Configuration for the workflow orchestrator.

Centralizes caching behaviour and the structured-output attempt budget so
pipelines can be tuned without modifying their code.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class OrchestratorConfig:
    """
    Configuration for workflow execution.

    Attributes:
        enable_caching: Serve repeated requests from the workflow cache
        cache_ttl_seconds: Lifetime of a cached workflow result
        enable_single_flight: Collapse concurrent identical misses into one run
        structured_attempts: Attempts (with escalating strictness) for stages
            that must return parsable JSON
        planning_capability: Capability classifying requests for agent-routing
    """

    enable_caching: bool = True
    cache_ttl_seconds: float = 300
    enable_single_flight: bool = True
    structured_attempts: int = 3
    planning_capability: str = "task-planner"


# Default configuration instance
DEFAULT_CONFIG = OrchestratorConfig()


def get_config(
    enable_caching: Optional[bool] = None,
    cache_ttl_seconds: Optional[float] = None,
) -> OrchestratorConfig:
    """
    Create a configuration with optional overrides.

    Args:
        enable_caching: Override for caching
        cache_ttl_seconds: Override for the cache TTL

    Returns:
        OrchestratorConfig with specified overrides applied
    """
    return OrchestratorConfig(
        enable_caching=DEFAULT_CONFIG.enable_caching
        if enable_caching is None
        else enable_caching,
        cache_ttl_seconds=cache_ttl_seconds or DEFAULT_CONFIG.cache_ttl_seconds,
    )

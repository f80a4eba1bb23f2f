"""
Configuration for the agent router.

Centralizes the planning constants (task duration estimates, fallback
plan shape) and leveling behavior.
"""

from dataclasses import dataclass


@dataclass
class RouterConfig:
    """
    Configuration for planning and plan execution.

    Attributes:
        primary_task_duration: Estimated seconds for the primary task
        supporting_task_duration: Estimated seconds per supporting task
        synthesis_task_duration: Estimated seconds for the synthesis task
        fallback_capability: Capability used when planning fails outright
        fallback_task_duration: Estimated seconds for the fallback plan's task
        fallback_confidence: Confidence reported on the fallback plan
        strict_leveling: Raise on cyclic/dangling dependencies instead of
            dumping remaining tasks into a final level
        bind_task_capabilities: Under hybrid execution, run each supporting
            task on the capability recorded at decomposition instead of
            binding by task type
    """

    primary_task_duration: float = 8
    supporting_task_duration: float = 6
    synthesis_task_duration: float = 3

    fallback_capability: str = "strategic-analysis"
    fallback_task_duration: float = 10
    fallback_confidence: float = 0.5

    strict_leveling: bool = False
    bind_task_capabilities: bool = False


# Default configuration instance
DEFAULT_CONFIG = RouterConfig()

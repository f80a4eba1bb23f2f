"""
Output validation: deterministic framework check, concurrent critics and
the bounded critique-and-improve loop.
"""

from marketing_agents.validation.framework_check import check_framework_alignment
from marketing_agents.validation.validator import (
    MultiCriticValidator,
    aggregate_score,
    combine_critic_results,
)
from marketing_agents.validation.loop import CritiqueLoop
from marketing_agents.validation.config import CritiqueConfig

__all__ = [
    "check_framework_alignment",
    "MultiCriticValidator",
    "aggregate_score",
    "combine_critic_results",
    "CritiqueLoop",
    "CritiqueConfig",
]

"""
Configuration for the critique-and-improve loop.

Centralizes the iteration budget, pass threshold and score weights so
behavior can be tuned without modifying the graph wiring.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CritiqueConfig:
    """
    Configuration for the critique graph and the multi-critic validator.

    Attributes:
        max_iterations: Generation calls allowed, including the first attempt
        pass_threshold: Minimum aggregate score for an output to be valid
        framework_weight: Weight of the framework-accuracy score
        specificity_weight: Weight of the specificity score
        actionability_weight: Weight of the actionability score
        improvements_limit: Number of critiques surfaced as improvements
        neutral_score: Score a critic reports when it cannot be parsed
    """

    max_iterations: int = 3
    pass_threshold: int = 75

    framework_weight: float = 0.4
    specificity_weight: float = 0.3
    actionability_weight: float = 0.3

    improvements_limit: int = 5
    neutral_score: int = 50

    @property
    def recursion_limit(self) -> int:
        # generate + validate per iteration, plus the final node
        return self.max_iterations * 2 + 3


# Default configuration instance
DEFAULT_CONFIG = CritiqueConfig()


def get_config(
    max_iterations: Optional[int] = None,
    pass_threshold: Optional[int] = None,
) -> CritiqueConfig:
    """
    Create a configuration with optional overrides.

    Args:
        max_iterations: Override for the iteration budget
        pass_threshold: Override for the pass threshold

    Returns:
        CritiqueConfig with specified overrides applied
    """
    return CritiqueConfig(
        max_iterations=max_iterations or DEFAULT_CONFIG.max_iterations,
        pass_threshold=pass_threshold
        if pass_threshold is not None
        else DEFAULT_CONFIG.pass_threshold,
    )

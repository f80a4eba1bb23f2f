"""
Multi-critic validation.

Runs the framework-accuracy, specificity and actionability critics
concurrently and aggregates them into a single pass/fail verdict.
"""

import asyncio
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.shared.contracts import CriticResult, ValidationResult, ValidationScores
from marketing_agents.validation.critics import (
    ActionabilityCritic,
    FrameworkAccuracyCritic,
    SpecificityCritic,
)
from marketing_agents.validation.config import CritiqueConfig, DEFAULT_CONFIG


logger = logging.getLogger(__name__)


def aggregate_score(
    framework: int,
    specificity: int,
    actionability: int,
    config: Optional[CritiqueConfig] = None,
) -> int:
    """Weighted aggregate, rounded half up to an integer."""
    config = config or DEFAULT_CONFIG
    weighted = (
        Decimal(str(framework)) * Decimal(str(config.framework_weight))
        + Decimal(str(specificity)) * Decimal(str(config.specificity_weight))
        + Decimal(str(actionability)) * Decimal(str(config.actionability_weight))
    )
    return int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def combine_critic_results(
    framework: CriticResult,
    specificity: CriticResult,
    actionability: CriticResult,
    config: Optional[CritiqueConfig] = None,
) -> ValidationResult:
    """
    Build the aggregated verdict from the three critic results.

    Critiques are concatenated framework -> specificity -> actionability;
    improvements are the first ``improvements_limit`` of them, unranked.
    """
    config = config or DEFAULT_CONFIG
    overall = aggregate_score(framework.score, specificity.score, actionability.score, config)
    critiques = [*framework.critiques, *specificity.critiques, *actionability.critiques]

    return ValidationResult(
        is_valid=overall >= config.pass_threshold,
        scores=ValidationScores(
            framework_accuracy=framework.score,
            specificity=specificity.score,
            actionability=actionability.score,
        ),
        overall_score=overall,
        critiques=critiques,
        improvements=critiques[: config.improvements_limit],
    )


class MultiCriticValidator:
    """Validates generated analyses with three concurrent critics."""

    def __init__(self, provider: CapabilityProvider, config: Optional[CritiqueConfig] = None):
        self.config = config or DEFAULT_CONFIG
        neutral = self.config.neutral_score
        self.framework_critic = FrameworkAccuracyCritic(provider, neutral)
        self.specificity_critic = SpecificityCritic(provider, neutral)
        self.actionability_critic = ActionabilityCritic(provider, neutral)

    async def validate(self, analysis: str, business_context: str) -> ValidationResult:
        framework, specificity, actionability = await asyncio.gather(
            self.framework_critic.critique(analysis, business_context),
            self.specificity_critic.critique(analysis, business_context),
            self.actionability_critic.critique(analysis, business_context),
        )

        result = combine_critic_results(framework, specificity, actionability, self.config)
        logger.info(
            f"[validation] Verdict | overall={result.overall_score}/100, "
            f"valid={result.is_valid}, framework={framework.score}, "
            f"specificity={specificity.score}, actionability={actionability.score}"
        )
        return result

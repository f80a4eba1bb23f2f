"""
Critics used by the multi-critic validator.

Each critic issues one provider call and returns a CriticResult. A critic
never raises: if its call fails or its response cannot be parsed it
returns the neutral score with a critique explaining why.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.shared.contracts import CriticResult
from marketing_agents.shared.parsing import parse_json_tolerant
from marketing_agents.validation.framework_check import (
    FrameworkCheckConfig,
    FrameworkCheckResult,
    check_framework_alignment,
)
from marketing_agents.validation.prompts import (
    build_actionability_critic_prompt,
    build_framework_critic_prompt,
    build_specificity_critic_prompt,
)


logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50


class ScoredCritique(BaseModel):
    """Shape of an LLM-scored critic response."""

    score: Optional[float] = Field(default=None, allow_inf_nan=False)
    critiques: List[str] = Field(default_factory=list)


def clamp_score(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"score must be finite, got {value}")
    return int(min(100, max(0, round(value))))


def _as_critique_list(data: Any) -> Optional[List[str]]:
    if isinstance(data, list):
        return [str(item) for item in data]
    if isinstance(data, dict) and isinstance(data.get("critiques"), list):
        return [str(item) for item in data["critiques"]]
    return None


class Critic(ABC):
    """
    Base class for critics.

    ``assess`` runs once per critique before the provider call; whatever it
    returns is handed to both ``build_prompt`` and ``interpret``.
    """

    name: str
    label: str

    def __init__(self, provider: CapabilityProvider, neutral_score: int = NEUTRAL_SCORE):
        self.provider = provider
        self.neutral_score = neutral_score

    def neutral(self, reason: str) -> CriticResult:
        return CriticResult(
            critic=self.name,
            score=self.neutral_score,
            critiques=[f"Failed to parse {self.label} validation: {reason}"],
        )

    def assess(self, analysis: str) -> Any:
        return None

    async def critique(self, analysis: str, business_context: str) -> CriticResult:
        _log = f"[validation] [critic={self.name}] "
        try:
            assessment = self.assess(analysis)
            prompt = self.build_prompt(analysis, business_context, assessment)
            response = await self.provider.execute(prompt, {})
        except Exception as e:
            logger.warning(f"{_log}Critic call failed, neutral score used: {e}")
            return self.neutral(str(e))

        try:
            result = self.interpret(response.content, assessment)
        except Exception as e:
            logger.warning(f"{_log}Critic response rejected, neutral score used: {e}")
            return self.neutral(str(e))

        if result is None:
            logger.warning(f"{_log}Unparsable critic response, neutral score used")
            return self.neutral("unparsable response")

        logger.info(f"{_log}Scored | score={result.score}, critiques={len(result.critiques)}")
        return result

    @abstractmethod
    def build_prompt(self, analysis: str, business_context: str, assessment: Any) -> str:
        pass

    @abstractmethod
    def interpret(self, raw_response: str, assessment: Any) -> Optional[CriticResult]:
        pass


class FrameworkAccuracyCritic(Critic):
    """
    Blends the deterministic framework check (the score) with an
    LLM-issued list of critiques.
    """

    name = "framework_accuracy"
    label = "framework accuracy"

    def __init__(
        self,
        provider: CapabilityProvider,
        neutral_score: int = NEUTRAL_SCORE,
        check_config: Optional[FrameworkCheckConfig] = None,
    ):
        super().__init__(provider, neutral_score)
        self.check_config = check_config

    def assess(self, analysis: str) -> FrameworkCheckResult:
        return check_framework_alignment(analysis, self.check_config)

    def build_prompt(
        self, analysis: str, business_context: str, assessment: FrameworkCheckResult
    ) -> str:
        return build_framework_critic_prompt(analysis, business_context, assessment)

    def interpret(
        self, raw_response: str, assessment: FrameworkCheckResult
    ) -> Optional[CriticResult]:
        critiques = _as_critique_list(parse_json_tolerant(raw_response))
        if critiques is None:
            return None
        return CriticResult(critic=self.name, score=assessment.score, critiques=critiques)


class _ScoredCritic(Critic):
    def interpret(self, raw_response: str, assessment: Any) -> Optional[CriticResult]:
        data = parse_json_tolerant(raw_response)
        if not isinstance(data, dict):
            return None
        try:
            payload = ScoredCritique.model_validate(data)
        except ValueError:
            return None
        score = self.neutral_score if payload.score is None else clamp_score(payload.score)
        return CriticResult(critic=self.name, score=score, critiques=payload.critiques)


class SpecificityCritic(_ScoredCritic):
    """Detects generic advice lacking references to the business's facts."""

    name = "specificity"
    label = "specificity"

    def build_prompt(self, analysis: str, business_context: str, assessment: Any) -> str:
        return build_specificity_critic_prompt(analysis, business_context)


class ActionabilityCritic(_ScoredCritic):
    """Detects vague, non-executable or infeasible recommendations."""

    name = "actionability"
    label = "actionability"

    def build_prompt(self, analysis: str, business_context: str, assessment: Any) -> str:
        return build_actionability_critic_prompt(analysis)

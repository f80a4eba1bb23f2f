"""
Intent analysis.

Classifies a request with a single provider call. Classification never
fails: transport errors and unusable responses fall back to a
deterministic default so planning can always proceed.
"""

import logging
from typing import Any, Dict

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.routing.prompts import build_intent_prompt
from marketing_agents.shared.contracts import IntentAnalysis
from marketing_agents.shared.parsing import parse_model


logger = logging.getLogger(__name__)


def fallback_intent(task_identifier: str) -> IntentAnalysis:
    """Default classification used whenever the classifier cannot be trusted."""
    return IntentAnalysis(
        intent=f"Execute {task_identifier}",
        complexity="moderate",
        required_capabilities=[task_identifier],
        confidence=0.5,
    )


class IntentAnalyzer:
    """Classifies requests via a planning capability provider."""

    def __init__(self, provider: CapabilityProvider):
        self.provider = provider

    async def analyze(self, task_identifier: str, payload: Dict[str, Any]) -> IntentAnalysis:
        _log = f"[router] [intent={task_identifier}] "
        prompt = build_intent_prompt(task_identifier, payload)

        try:
            response = await self.provider.execute(prompt, {})
        except Exception as e:
            logger.warning(f"{_log}Classifier call failed, using fallback: {e}")
            return fallback_intent(task_identifier)

        analysis = parse_model(response.content, IntentAnalysis)
        if analysis is None:
            logger.warning(f"{_log}Unusable classifier response, using fallback")
            return fallback_intent(task_identifier)

        logger.info(
            f"{_log}Classified | complexity={analysis.complexity}, "
            f"confidence={analysis.confidence:.2f}, "
            f"capabilities={analysis.required_capabilities}"
        )
        return analysis

"""
Critique-and-improve loop.

Wraps the compiled critique graph: generate an analysis, validate it with
three critics, and regenerate with the critiques appended until it passes
or the iteration budget runs out. When the budget is spent the last
output is returned regardless of its score.
"""

import logging
import uuid
from typing import Optional

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.validation.graph.build import create_critique_graph
from marketing_agents.validation.config import CritiqueConfig, DEFAULT_CONFIG
from marketing_agents.validation.schemas import AttemptRecord, CritiqueOutcome, CritiqueState
from marketing_agents.validation.validator import MultiCriticValidator


logger = logging.getLogger(__name__)


def create_initial_state(
    prompt: str,
    business_context: str,
    max_iterations: int,
    session_id: Optional[str] = None,
) -> CritiqueState:
    return {
        "prompt": prompt,
        "business_context": business_context,
        "max_iterations": max_iterations,
        "current_prompt": prompt,
        "output": None,
        "validation": None,
        "iteration": 0,
        "history": [],
        "session_id": session_id,
    }


class CritiqueLoop:
    """Bounded generate -> validate -> retry loop around a generator."""

    def __init__(
        self,
        generator: CapabilityProvider,
        critic_provider: CapabilityProvider,
        config: Optional[CritiqueConfig] = None,
    ):
        if config is None:
            config = DEFAULT_CONFIG
        if config.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.config = config
        self.validator = MultiCriticValidator(critic_provider, config)
        self.app = create_critique_graph(generator, self.validator, config)

    async def run(
        self,
        prompt: str,
        business_context: str,
        session_id: Optional[str] = None,
    ) -> CritiqueOutcome:
        """
        Generate an analysis and improve it until it validates.

        Args:
            prompt: Original generation prompt
            business_context: Facts the critics check the analysis against
            session_id: Optional identifier for log correlation

        Returns:
            CritiqueOutcome with the accepted output and its validation
        """
        session_id = session_id or uuid.uuid4().hex[:12]
        initial_state = create_initial_state(
            prompt, business_context, self.config.max_iterations, session_id
        )

        final_state = await self.app.ainvoke(
            initial_state,
            config={"recursion_limit": self.config.recursion_limit},
        )

        return CritiqueOutcome(
            output=final_state["output"],
            validation=final_state["validation"],
            iterations=final_state["iteration"],
            history=[AttemptRecord(**entry) for entry in final_state.get("history", [])],
        )

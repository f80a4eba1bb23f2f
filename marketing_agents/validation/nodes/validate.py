"""
Validate node for the critique graph.

Runs the multi-critic validator over the latest attempt and prepares the
retry prompt in case the router sends the graph back to generate.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from marketing_agents.validation.prompts import build_retry_prompt
from marketing_agents.validation.schemas import CritiqueState
from marketing_agents.validation.validator import MultiCriticValidator


logger = logging.getLogger(__name__)

ValidateNode = Callable[[CritiqueState], Awaitable[Dict[str, Any]]]


def make_validate_node(validator: MultiCriticValidator) -> ValidateNode:
    async def validate_node(state: CritiqueState) -> Dict[str, Any]:
        session_id = state.get("session_id") or "unknown"
        _log = f"[session={session_id}] [graph=critique] [node=validate] "

        validation = await validator.validate(state["output"] or "", state["business_context"])

        logger.info(
            f"{_log}Iteration {state['iteration']}: score={validation.overall_score}/100, "
            f"valid={validation.is_valid}"
        )

        return {
            "validation": validation,
            "current_prompt": build_retry_prompt(
                state["prompt"], validation.critiques, validation.improvements
            ),
            "history": [
                {
                    "iteration": state["iteration"],
                    "overall_score": validation.overall_score,
                    "is_valid": validation.is_valid,
                }
            ],
        }

    return validate_node

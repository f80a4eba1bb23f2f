"""
Routing logic for the critique graph.

Decides between another generation attempt and stopping.
"""

import logging
from typing import Literal

from marketing_agents.validation.schemas import CritiqueState


logger = logging.getLogger(__name__)


def route_after_validation(state: CritiqueState) -> Literal["generate", "done"]:
    """
    Route after each validation.

    Returns "done" when the latest attempt is valid or the iteration budget
    is spent, "generate" otherwise.
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=critique] [router=route_after_validation] "

    validation = state.get("validation")
    iteration = state.get("iteration", 0)
    max_iterations = state["max_iterations"]
    score = validation.overall_score if validation else 0

    if validation is not None and validation.is_valid:
        logger.info(f"{_log}Routing to 'done' | iteration={iteration}, score={score}, valid=True")
        return "done"

    if iteration >= max_iterations:
        logger.info(
            f"{_log}Routing to 'done' | iteration budget spent ({iteration}/{max_iterations}), "
            f"accepting last output with score={score}"
        )
        return "done"

    logger.info(f"{_log}Routing to 'generate' (retry) | iteration={iteration}, score={score}")
    return "generate"


def done_node(state: CritiqueState) -> dict:
    """Final node; re-emits the accepted output."""
    session_id = state.get("session_id") or "unknown"
    validation = state.get("validation")
    logger.info(
        f"[session={session_id}] [graph=critique] [node=done] Final score: "
        f"{validation.overall_score if validation else 'n/a'}/100 after "
        f"{state.get('iteration', 0)} iteration(s) -> END"
    )
    return {"output": state.get("output")}

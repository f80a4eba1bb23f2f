"""
Generate node for the critique graph.

Produces one attempt from the current prompt and advances the iteration
counter.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict

from marketing_agents.providers.base import CapabilityProvider
from marketing_agents.validation.schemas import CritiqueState


logger = logging.getLogger(__name__)

GenerateNode = Callable[[CritiqueState], Awaitable[Dict[str, Any]]]


def make_generate_node(generator: CapabilityProvider) -> GenerateNode:
    """
    Build the generate node bound to a generator provider.

    Generation errors propagate; the loop has nothing to accept if the
    provider cannot produce any output.
    """

    async def generate_node(state: CritiqueState) -> Dict[str, Any]:
        iteration = state.get("iteration", 0) + 1
        session_id = state.get("session_id") or "unknown"
        _log = f"[session={session_id}] [graph=critique] [node=generate] "

        logger.info(
            f"{_log}Entering node | iteration={iteration}/{state['max_iterations']}, "
            f"generator={generator.name}"
        )

        start_time = time.perf_counter()
        response = await generator.execute(state["current_prompt"], {})
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"{_log}Generated | duration={duration_ms:.0f}ms, chars={len(response.content)}"
        )
        return {"output": response.content, "iteration": iteration}

    return generate_node
